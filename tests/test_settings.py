"""Tests for expansion settings and the stats aggregator."""

from __future__ import annotations

import pytest

from csfdet.guga.settings import ExpansionSettings
from csfdet.guga.stats import ExpansionStats


def test_defaults():
    s = ExpansionSettings()
    assert s.strict is False
    assert s.verbose == 0
    assert ExpansionSettings.from_env() == s


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("0", False), ("off", False), ("", False)])
def test_strict_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("CSFDET_STRICT", raw)
    assert ExpansionSettings.from_env().strict is expected


def test_verbose_from_env(monkeypatch):
    monkeypatch.setenv("CSFDET_VERBOSE", "2")
    assert ExpansionSettings.from_env().verbose == 2


@pytest.mark.parametrize("raw", ["abc", "-1"])
def test_bad_verbose_env(monkeypatch, raw):
    monkeypatch.setenv("CSFDET_VERBOSE", raw)
    with pytest.raises(ValueError):
        ExpansionSettings.from_env()


def test_explicit_overrides_beat_env(monkeypatch):
    monkeypatch.setenv("CSFDET_STRICT", "1")
    monkeypatch.setenv("CSFDET_VERBOSE", "3")
    s = ExpansionSettings.from_env(strict=False, verbose=None)
    assert s.strict is False
    assert s.verbose == 3


def test_negative_verbose_rejected():
    with pytest.raises(ValueError):
        ExpansionSettings(verbose=-1)


def test_stats_counters_and_timer():
    stats = ExpansionStats()
    stats.inc("terms")
    stats.inc("terms", 2)
    with stats.timer("expand"):
        pass
    assert stats.get("terms") == 3
    assert stats.get("zero") == 0
    assert stats.times["expand"] >= 0.0
    assert stats.summary().startswith("3 determinants from 0 spin assignments (0 with zero coefficient) in ")
