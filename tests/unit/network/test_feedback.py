"""
Tests unitaires LoadingTracker
"""

from unittest.mock import Mock

from panel_client.network import LoadingTracker


class TestLoadingTracker:
    """Compteur de requêtes en vol."""

    def test_idle_at_start(self):
        tracker = LoadingTracker()

        assert tracker.in_flight == 0
        assert tracker.is_loading is False

    def test_notifies_only_on_transitions(self):
        tracker = LoadingTracker()
        observer = Mock()
        tracker.subscribe(observer)

        tracker.start()
        tracker.start()
        tracker.stop()
        tracker.stop()

        assert [c.args[0] for c in observer.call_args_list] == [True, False]

    def test_stop_when_idle_is_noop(self):
        tracker = LoadingTracker()
        observer = Mock()
        tracker.subscribe(observer)

        tracker.stop()

        assert tracker.in_flight == 0
        observer.assert_not_called()

    def test_unsubscribe(self):
        tracker = LoadingTracker()
        observer = Mock()
        unsubscribe = tracker.subscribe(observer)

        unsubscribe()
        tracker.start()

        observer.assert_not_called()
