"""
Network - Navigation Side Effects

Redirections vers les pages d'erreur statiques (403, 404, 500).
La session est conservée et l'Outcome livrée à l'appelant n'est pas modifiée.
"""

from typing import Dict, List, Mapping, Optional

from .interfaces import INavigator, Outcome, OutcomeKind


DEFAULT_ERROR_PAGES: Dict[int, str] = {403: "/403", 404: "/404", 500: "/500"}

_STATUS_BY_KIND: Dict[OutcomeKind, int] = {
    OutcomeKind.FORBIDDEN: 403,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.SERVER_ERROR: 500,
}


class NavigationSideEffects:
    """
    FORBIDDEN → /403, NOT_FOUND → /404, SERVER_ERROR → /500.
    Toute autre Outcome est ignorée.
    """

    def __init__(
        self,
        navigator: INavigator,
        error_pages: Optional[Mapping[int, str]] = None,
    ) -> None:
        self._navigator = navigator
        self._pages: Dict[int, str] = dict(DEFAULT_ERROR_PAGES)
        if error_pages:
            self._pages.update({int(status): path for status, path in error_pages.items()})

    def target_for(self, outcome: Outcome) -> Optional[str]:
        """Page cible pour cette Outcome, ou None."""
        status = _STATUS_BY_KIND.get(outcome.kind)
        if status is None:
            return None
        return self._pages.get(status)

    def on_outcome(self, outcome: Outcome) -> Optional[str]:
        """
        Déclenche la navigation (fire-and-forget).

        Returns:
            Chemin navigué, ou None si aucune navigation
        """
        target = self.target_for(outcome)
        if target is not None:
            self._navigator.navigate(target)
        return target


class InMemoryNavigator(INavigator):
    """
    Navigateur sans UI: garde l'historique des routes.

    Utilisé en mode headless (scripts, tests).
    """

    def __init__(self, initial_path: str = "/") -> None:
        self._history: List[str] = [initial_path]

    @property
    def history(self) -> List[str]:
        return list(self._history)

    def navigate(self, path: str) -> None:
        if not path:
            raise ValueError("path cannot be empty")
        self._history.append(path)

    def current_path(self) -> str:
        return self._history[-1]
