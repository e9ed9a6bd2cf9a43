"""Switch for running without the Open-Meteo weather lookup."""

from __future__ import annotations

import os

_ON = {"1", "true", "yes", "on"}
_OFF = {"0", "false", "no", "off"}


def offline_mode_enabled() -> bool:
    """True when activity summaries should be simulated without fetching weather.

    ``LIFENAV_OFFLINE`` wins when set to a recognised value; otherwise the
    service goes offline only inside a pytest run.
    """
    flag = os.getenv("LIFENAV_OFFLINE", "").strip().lower()
    if flag in _ON:
        return True
    if flag in _OFF:
        return False
    return "PYTEST_CURRENT_TEST" in os.environ
