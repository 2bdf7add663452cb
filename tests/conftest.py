import os

# Widgets are created without a display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PySide6.QtWidgets import QApplication

from surveyeditor.app.state import PointStore
from surveyeditor.model.generator import generate_coordinate_data


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def store(qapp, rng):
    return PointStore(generate_coordinate_data(20, rng=rng))
