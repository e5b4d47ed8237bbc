from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clear_csfdet_env(monkeypatch):
    """Keep CSFDET_* settings from the calling shell out of the tests."""
    for key in ("CSFDET_STRICT", "CSFDET_VERBOSE"):
        monkeypatch.delenv(key, raising=False)
