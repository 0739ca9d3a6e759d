from coach.tour.session_flags import LaunchWindow

from tests.factories import make_engine


def test_window_closed_by_default():
    window = LaunchWindow()
    assert window.can_auto_start() is False


def test_mark_and_consume():
    window = LaunchWindow()
    window.mark_landing_seen()
    assert window.can_auto_start()
    window.consume()
    assert not window.can_auto_start()


def test_auto_start_consumes_even_when_disabled():
    engine = make_engine(enabled=False)
    window = LaunchWindow()
    window.mark_landing_seen()
    assert window.auto_start(engine) is False
    assert not window.can_auto_start()
    assert not engine.is_running()
