"""
Tests unitaires EndpointClassifier
"""

import pytest

from panel_client.auth import DEFAULT_EXEMPT_ENDPOINTS, EndpointClassifier, IEndpointClassifier


class TestEndpointClassifier:
    """Endpoints exemptés de jeton."""

    def test_implements_interface(self):
        assert isinstance(EndpointClassifier(), IEndpointClassifier)

    def test_default_endpoints(self):
        assert EndpointClassifier().exempt_endpoints == DEFAULT_EXEMPT_ENDPOINTS

    @pytest.mark.parametrize(
        "url",
        [
            "/auth/login",
            "/api/auth/login",
            "/auth/refresh-token",
            "http://localhost:3000/api/auth/refresh-token",
            "/auth/login?redirect=%2Fusers",
            "/auth%2Flogin",
        ],
    )
    def test_exempt(self, url):
        assert EndpointClassifier().is_exempt(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "/users/1",
            "/auth/logout",
            "/auth/permissions",
            "/AUTH/LOGIN",
            "/users?next=/auth/login",
            "",
        ],
    )
    def test_not_exempt(self, url):
        assert EndpointClassifier().is_exempt(url) is False

    def test_custom_endpoints(self):
        classifier = EndpointClassifier(["/public/"])

        assert classifier.is_exempt("/public/captcha") is True
        assert classifier.is_exempt("/auth/login") is False

    def test_empty_endpoint_rejected(self):
        with pytest.raises(ValueError):
            EndpointClassifier(["/auth/login", ""])
