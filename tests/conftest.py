import pytest

from boxstock.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _isolated_logging():
    yield
    reset_logging()
