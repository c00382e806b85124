import os

import numpy as np
import pytest

from linreg_explorer.fitting import Point

# widgets are built without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(scope="session")
def qcore_app(qapp):
    yield qapp


def make_points(pairs):
    return tuple(Point(x=float(x), y=float(y), true_y=float(y), id=i)
                 for i, (x, y) in enumerate(pairs))
