import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from squaregrid.view import to_qcolor


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def pixel():
    """Reads one surface pixel of a view as 0xAARRGGBB."""
    def read(view, x, y):
        return view.snapshot().pixelColor(x, y).rgb()
    return read


@pytest.fixture
def rgb():
    def convert(color):
        return to_qcolor(color).rgb()
    return convert
