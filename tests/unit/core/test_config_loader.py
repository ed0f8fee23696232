"""
Tests unitaires pour ConfigLoader.
"""

from pathlib import Path

import pytest

from panel_client.core import (
    BASE_URL_ENV_VAR,
    ClientConfig,
    ConfigIntegrityError,
    ConfigLoader,
    IConfigLoader,
)


class TestConfigLoader:
    """Tests pour ConfigLoader."""

    @pytest.fixture(autouse=True)
    def setup_loader(self, fixtures_path: Path):
        """Loader sur fixtures/configs, sans variables d'environnement."""
        self.loader = ConfigLoader(str(fixtures_path / "configs"), environ={})

    def test_implements_interface(self):
        assert isinstance(self.loader, IConfigLoader)

    @pytest.mark.asyncio
    async def test_load_default_profile(self):
        """Le profil par défaut (section api imbriquée) est chargé."""
        config = await self.loader.load("default")

        assert isinstance(config, ClientConfig)
        assert config.base_url == "http://localhost:3000/api"
        assert config.timeout == 10
        assert config.exempt_endpoints == ["/auth/login", "/auth/refresh-token"]
        assert config.error_pages == {403: "/403", 404: "/404", 500: "/500"}
        assert config.login_path == "/login"

    @pytest.mark.asyncio
    async def test_load_flat_profile(self):
        """Un profil à plat est accepté, slash final retiré."""
        config = await self.loader.load("flat")

        assert config.base_url == "https://admin.example.com/api"
        assert config.timeout == 5
        assert config.log_level == "debug"
        # Valeurs par défaut
        assert config.default_headers == {"Content-Type": "application/json"}
        assert config.persistence_path is None

    @pytest.mark.asyncio
    async def test_load_nonexistent_profile_raises(self):
        with pytest.raises(ConfigIntegrityError) as exc_info:
            await self.loader.load("nonexistent")

        assert "nonexistent" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_timeout_raises(self):
        with pytest.raises(ConfigIntegrityError):
            await self.loader.load("invalid_timeout")

    @pytest.mark.asyncio
    async def test_missing_base_url_raises(self):
        with pytest.raises(ConfigIntegrityError) as exc_info:
            await self.loader.load("missing_base_url")

        assert "base_url" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_mapping_yaml_raises(self):
        with pytest.raises(ConfigIntegrityError):
            await self.loader.load("not_a_mapping")

    @pytest.mark.asyncio
    async def test_invalid_yaml_raises(self, tmp_path: Path):
        (tmp_path / "broken.yaml").write_text("api: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigIntegrityError):
            await ConfigLoader(str(tmp_path), environ={}).load("broken")

    @pytest.mark.asyncio
    async def test_env_var_overrides_base_url(self, fixtures_path: Path):
        loader = ConfigLoader(
            str(fixtures_path / "configs"),
            environ={BASE_URL_ENV_VAR: "https://staging.example.com/api"},
        )

        config = await loader.load("default")

        assert config.base_url == "https://staging.example.com/api"

    @pytest.mark.asyncio
    async def test_env_var_supplies_missing_base_url(self, fixtures_path: Path):
        loader = ConfigLoader(
            str(fixtures_path / "configs"),
            environ={BASE_URL_ENV_VAR: "https://prod.example.com"},
        )

        config = await loader.load("missing_base_url")

        assert config.base_url == "https://prod.example.com"


class TestFromDict:
    """Construction depuis un dictionnaire."""

    def setup_method(self):
        self.loader = ConfigLoader(environ={})

    def test_api_section_must_be_mapping(self):
        with pytest.raises(ConfigIntegrityError):
            self.loader.from_dict({"api": "http://localhost"})

    def test_login_path_must_be_absolute(self):
        with pytest.raises(ConfigIntegrityError):
            self.loader.from_dict({"base_url": "http://localhost", "login_path": "login"})

    def test_empty_base_url_rejected(self):
        with pytest.raises(ConfigIntegrityError):
            self.loader.from_dict({"base_url": "   "})

    def test_error_pages_keys_coerced_to_int(self):
        config = self.loader.from_dict(
            {"base_url": "http://localhost", "error_pages": {"403": "/forbidden"}}
        )
        assert config.error_pages == {403: "/forbidden"}
