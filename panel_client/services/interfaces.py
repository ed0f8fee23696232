"""
Services - Types

Modèles des réponses et paramètres des API auth et utilisateurs.
Noms de champs API en camelCase (alias), attributs Python en snake_case.
"""

from typing import Any, Dict, Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..network.errors import UnknownResponseError

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


class ApiModel(BaseModel):
    """Base: accepte alias camelCase et noms Python."""

    model_config = ConfigDict(populate_by_name=True)

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════════
# AUTH
# ══════════════════════════════════════════════════════════════════════════════


class LoginResponse(ApiModel):
    token: str
    refresh_token: str = Field(default="", alias="refreshToken")
    expires_in: Optional[float] = Field(default=None, alias="expiresIn")
    user_info: Optional[Dict[str, Any]] = Field(default=None, alias="userInfo")


class RefreshTokenResponse(ApiModel):
    token: str
    expires_in: Optional[float] = Field(default=None, alias="expiresIn")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")


# ══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ══════════════════════════════════════════════════════════════════════════════


class PageQuery(ApiModel):
    """Paramètres de pagination."""

    page_num: int = Field(default=1, alias="pageNum", ge=1)
    page_size: int = Field(default=10, alias="pageSize", ge=1)


class PageResult(ApiModel, Generic[T]):
    """Page de résultats."""

    items: List[T] = Field(default_factory=list, alias="list")
    total: int = 0
    page_num: int = Field(default=1, alias="pageNum")
    page_size: int = Field(default=10, alias="pageSize")


# ══════════════════════════════════════════════════════════════════════════════
# UTILISATEURS
# ══════════════════════════════════════════════════════════════════════════════


class UserRecord(ApiModel):
    """Utilisateur tel que retourné par /users."""

    id: Union[str, int]
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    create_time: Optional[str] = Field(default=None, alias="createTime")
    status: Literal[0, 1] = 1  # 0 = désactivé, 1 = actif


class UserQuery(ApiModel):
    username: Optional[str] = None
    email: Optional[str] = None
    status: Optional[int] = None


class UserForm(ApiModel):
    """Création / mise à jour d'un utilisateur."""

    username: str
    password: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    roles: Optional[List[str]] = None


def parse_model(model: Type[M], data: Any) -> M:
    """
    Valide une réponse contre un modèle.

    Raises:
        UnknownResponseError: Si data ne correspond pas au modèle
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise UnknownResponseError(f"Unexpected {model.__name__} payload: {e}", raw=data)
