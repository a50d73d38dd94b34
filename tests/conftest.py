from __future__ import annotations

import pytest

from colorreport import constants

_ENV_VARS = (
    constants.LIB_BACKTRACE_ENV,
    constants.BACKTRACE_ENV,
    constants.SPANTRACE_ENV,
    constants.SHOW_HIDDEN_ENV,
    constants.FRAME_FILTER_ENV,
    constants.COLOR_ENV,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reports read verbosity and capture toggles from the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
