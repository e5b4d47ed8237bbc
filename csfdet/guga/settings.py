from __future__ import annotations

import os
from dataclasses import dataclass


def _bool_env(key: str) -> bool:
    val = os.environ.get(key, "").strip().lower()
    return val not in ("", "0", "false", "no", "off")


def _int_env(key: str, default: int) -> int:
    raw = os.environ.get(key, "").strip()
    if raw == "":
        return int(default)
    try:
        out = int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got: {raw!r}") from e
    if out < 0:
        raise ValueError(f"{key} must be >= 0, got: {out}")
    return out


@dataclass(frozen=True)
class ExpansionSettings:
    """Options for a CSF -> determinant expansion.

    Attributes
    ----------
    strict
        Also reject step vectors whose partial spin goes negative, ``|twoms|``
        larger than the CSF spin, and ``twoms`` of the wrong parity.
        Without it only unknown symbols and an impossible alpha count are
        errors; the other cases simply yield no determinants.
    verbose
        0 prints only the expansion; 1 adds a CSF/Ms line and a summary.
    """

    strict: bool = False
    verbose: int = 0

    def __post_init__(self) -> None:
        if int(self.verbose) < 0:
            raise ValueError("verbose must be >= 0")

    @classmethod
    def from_env(cls, **overrides) -> "ExpansionSettings":
        """Build settings from ``CSFDET_STRICT`` / ``CSFDET_VERBOSE``; keyword overrides win."""
        kwargs = {
            "strict": _bool_env("CSFDET_STRICT"),
            "verbose": _int_env("CSFDET_VERBOSE", 0),
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
