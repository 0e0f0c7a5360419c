import os

# Pin engine defaults before any source imports
os.environ.setdefault("DEFAULT_CYCLE_LENGTH", "28")
os.environ.setdefault("DEFAULT_PERIOD_LENGTH", "5")
os.environ.setdefault("MIN_CYCLE_LENGTH", "15")
os.environ.setdefault("MAX_CYCLE_LENGTH", "60")

from datetime import date

import pytest

from wardaty.cycle import CycleLogEntry, CycleSettings
from wardaty.qadha import QadhaKind, QadhaLogEntry


@pytest.fixture
def settings():
    """28-day cycle, 5-day period, anchored on 2024-01-01."""
    return CycleSettings(last_period_start=date(2024, 1, 1), cycle_length=28, period_length=5)


@pytest.fixture
def no_anchor():
    return CycleSettings(last_period_start=None)


@pytest.fixture
def make_qadha_entries():
    """Factory: n missed + m made-up entries on consecutive January days."""
    def _factory(missed=0, made_up=0):
        entries = [QadhaLogEntry(date(2024, 1, 1 + i), QadhaKind.MISSED) for i in range(missed)]
        entries += [QadhaLogEntry(date(2024, 2, 1 + i), QadhaKind.MADE_UP) for i in range(made_up)]
        return entries
    return _factory


@pytest.fixture
def period_log():
    """Factory for a single logged period day."""
    def _factory(d):
        return CycleLogEntry(date=d, is_period=True, flow="medium")
    return _factory
