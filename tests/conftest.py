# Shared fixtures. Widget tests need a headless Qt platform; a fallback 'qtbot'
# fixture keeps them collectable if pytest-qt is not installed. If pytest-qt is
# installed, its fixture wins.

import contextlib
import os
import sys

import pytest

from coach.tour.steps import clear_tours

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        app = QApplication.instance() or QApplication(sys.argv)  # type: ignore  # noqa: F841
        from PyQt6.QtTest import QTest

        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            def mouseClick(self, *args, **kwargs):
                QTest.mouseClick(*args, **kwargs)

            def keyClick(self, *args, **kwargs):
                QTest.keyClick(*args, **kwargs)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        yield Bot()
        for w in widgets:
            w.close()


@pytest.fixture(autouse=True)
def _reset_tour_registry():
    yield
    clear_tours()
