import os

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def app():
    """Fixture for QApplication."""
    return QApplication.instance() or QApplication([])


@pytest.fixture
def ramp_volume():
    """10 slices of 6x4 voxels whose values equal their flat offset."""
    return np.arange(10 * 6 * 4).reshape(10, 6, 4)
