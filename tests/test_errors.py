"""The catch-and-default seam around analytics entry points."""

from __future__ import annotations

import logging

from core import ComputationError, MalformedFilterError, NoDataError, safe_entry_point
from core.logging_setup import get_logger


def test_safe_entry_point_logs_and_returns_default(caplog):
    @safe_entry_point(list)
    def explode():
        raise ZeroDivisionError("boom")

    with caplog.at_level(logging.ERROR, logger="splitspend"):
        assert explode() == []

    assert "explode failed: boom" in caplog.text


def test_safe_entry_point_passes_results_through():
    @safe_entry_point(dict)
    def compute(value):
        return {"value": value}

    assert compute(3) == {"value": 3}
    assert compute.__name__ == "compute"


def test_error_hierarchy():
    assert issubclass(MalformedFilterError, ValueError)
    assert issubclass(ComputationError, RuntimeError)
    assert "upload a CSV" in str(NoDataError())


def test_loggers_hang_off_the_package_logger():
    assert get_logger("analytics.stores").name == "splitspend.analytics.stores"
    assert get_logger("splitspend.core").name == "splitspend.core"
