"""
Network - Request Decorator

Attache le jeton d'accès aux requêtes sortantes.

Invariants:
    - Une requête vers un endpoint exempté ne porte jamais d'en-tête Authorization
    - Une requête non exemptée avec Credential présent porte exactement un
      Authorization: Bearer <access_token> lu au moment de la décoration
    - Le descripteur d'entrée n'est jamais modifié
"""

from ..auth.interfaces import IEndpointClassifier, ITokenStore
from .interfaces import RequestDescriptor


AUTHORIZATION_HEADER = "Authorization"


class RequestDecorator:
    """
    Décoration des requêtes sortantes.

    Relit le TokenStore à chaque appel: une requête rejouée après un refresh
    reçoit le nouveau jeton, jamais un en-tête périmé.

    Example:
        decorator = RequestDecorator(store, EndpointClassifier())
        decorated = decorator.decorate(RequestDescriptor(url="/users/1"))
        decorated.get_header("authorization")  # "Bearer abc"
    """

    def __init__(self, token_store: ITokenStore, endpoint_classifier: IEndpointClassifier) -> None:
        self._store = token_store
        self._classifier = endpoint_classifier

    def decorate(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        """
        Args:
            descriptor: Requête à décorer

        Returns:
            Nouveau descripteur avec Authorization, ou descripteur d'origine
        """
        if self._classifier.is_exempt(descriptor.url):
            # Un jeton fourni par l'appelant ne doit pas atteindre login / refresh
            if descriptor.get_header(AUTHORIZATION_HEADER) is not None:
                return descriptor.without_header(AUTHORIZATION_HEADER)
            return descriptor

        credential = self._store.get()
        if credential is None:
            return descriptor

        return descriptor.with_header(AUTHORIZATION_HEADER, f"Bearer {credential.access_token}")
