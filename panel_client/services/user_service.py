"""
Services - User Service

CRUD utilisateurs au-dessus du HttpClient.
"""

from typing import Any, Mapping, Optional, Sequence, Union
from urllib.parse import quote

from ..network.http_client import HttpClient
from ..network.interfaces import RequestOptions
from .interfaces import PageQuery, PageResult, UserForm, UserQuery, UserRecord, parse_model


USERS_URL = "/users"

UserId = Union[str, int]


def _user_url(user_id: UserId) -> str:
    if user_id is None or str(user_id) == "":
        raise ValueError("user_id cannot be empty")
    return f"{USERS_URL}/{quote(str(user_id), safe='')}"


class UserService:
    """
    Service utilisateurs.

    Chaque méthode lève l'ApiError de l'appel en cas d'échec; les effets de
    bord (déconnexion, pages d'erreur) sont déjà appliqués par le HttpClient.
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    async def get_users(
        self,
        query: Optional[UserQuery] = None,
        page: Optional[PageQuery] = None,
        options: Optional[RequestOptions] = None,
    ) -> PageResult[UserRecord]:
        params = {}
        if query is not None:
            params.update(query.to_api())
        params.update((page or PageQuery()).to_api())

        result = await self._client.get(USERS_URL, query=params, options=options)
        return parse_model(PageResult[UserRecord], result.unwrap())

    async def get_user_by_id(
        self, user_id: UserId, options: Optional[RequestOptions] = None
    ) -> UserRecord:
        result = await self._client.get(_user_url(user_id), options=options)
        return parse_model(UserRecord, result.unwrap())

    async def create_user(
        self, form: UserForm, options: Optional[RequestOptions] = None
    ) -> Any:
        result = await self._client.post(USERS_URL, form.to_api(), options=options)
        return result.unwrap()

    async def update_user(
        self,
        user_id: UserId,
        changes: Union[UserForm, Mapping[str, Any]],
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Mise à jour partielle: seuls les champs fournis sont envoyés."""
        body = changes.to_api() if isinstance(changes, UserForm) else dict(changes)
        result = await self._client.put(_user_url(user_id), body, options=options)
        return result.unwrap()

    async def delete_user(
        self, user_id: UserId, options: Optional[RequestOptions] = None
    ) -> Any:
        result = await self._client.delete(_user_url(user_id), options=options)
        return result.unwrap()

    async def batch_delete_users(
        self, user_ids: Sequence[UserId], options: Optional[RequestOptions] = None
    ) -> Any:
        if not user_ids:
            raise ValueError("user_ids cannot be empty")
        result = await self._client.delete(
            f"{USERS_URL}/batch", {"ids": [str(i) for i in user_ids]}, options=options
        )
        return result.unwrap()

    async def upload_avatar(
        self,
        filename: str,
        content: bytes,
        content_type: str = "image/png",
        options: Optional[RequestOptions] = None,
    ) -> str:
        """
        Envoie l'avatar en multipart/form-data.

        Returns:
            URL de l'avatar stocké
        """
        result = await self._client.post(
            f"{USERS_URL}/avatar",
            files={"file": (filename, content, content_type)},
            options=options,
        )
        data = result.unwrap()
        if isinstance(data, dict) and "url" in data:
            return str(data["url"])
        return str(data)
