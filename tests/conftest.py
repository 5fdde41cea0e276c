import pint
import pytest

from unitscan.config import reset_settings

_ENV_VARS = (
    "UNITSCAN_CONFIG_FILE",
    "UNITSCAN_PRIMARY",
    "UNITSCAN_SECONDARY",
    "UNITSCAN_LOG_PATH",
    "UNITSCAN_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(scope="session")
def pint_registry() -> pint.UnitRegistry:
    return pint.UnitRegistry()
