# Shared fixtures. Qt runs on the offscreen platform so the suite works headless;
# the environment variable must be set before pytest-qt creates the QApplication.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from uikernel.services.service_locator import services  # noqa: E402
from uikernel.services.timing import ManualTimerService  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_services():
    services.clear()
    yield
    services.clear()


@pytest.fixture
def timers():
    return ManualTimerService()
