"""
Network - Request Feedback

Indicateur de chargement global: compte les requêtes en vol marquées
show_loading et notifie les abonnés aux passages occupé / inactif.
"""

from typing import Callable, List


LoadingObserver = Callable[[bool], None]


class LoadingTracker:
    """
    Compteur de requêtes en vol.

    Example:
        tracker = LoadingTracker()
        tracker.subscribe(lambda busy: spinner.show() if busy else spinner.hide())
    """

    def __init__(self) -> None:
        self._in_flight = 0
        self._observers: List[LoadingObserver] = []

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def start(self) -> None:
        self._in_flight += 1
        if self._in_flight == 1:
            self._notify(True)

    def stop(self) -> None:
        if self._in_flight == 0:
            return
        self._in_flight -= 1
        if self._in_flight == 0:
            self._notify(False)

    def subscribe(self, observer: LoadingObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, busy: bool) -> None:
        for observer in list(self._observers):
            observer(busy)
