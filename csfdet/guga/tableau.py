from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from csfdet.errors import InvalidStepVector

STEP_ORDER: tuple[str, ...] = ("0", "u", "d", "2")
STEP_TO_INDEX: dict[str, int] = {s: i for i, s in enumerate(STEP_ORDER)}
# Shavitt letters for the same four steps (empty, up, down/lowered, double).
GUGA_LETTERS: tuple[str, ...] = ("E", "U", "L", "D")

STEP_EMPTY = 0
STEP_UP = 1
STEP_DOWN = 2
STEP_DOUBLE = 3


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class PaldusTableau:
    """Paldus ``(a, b, c)`` table along a single GUGA walk.

    Each entry is the cumulative count after orbital ``i`` has been
    processed: ``a`` counts doubly coupled pairs, ``b`` the excess of up
    couplings (2S of the partial walk) and ``c`` the empty orbitals seen so
    far, with a singly-down step counting towards both ``a`` and ``c``.

    Attributes
    ----------
    steps : np.ndarray
        int8 array of step codes (0=``0``, 1=``u``, 2=``d``, 3=``2``).
    a, b, c : np.ndarray
        int64 arrays of length ``n_mo``.

    All arrays are read-only; the tableau is shared unchanged by every
    determinant evaluation.
    """

    steps: np.ndarray
    a: np.ndarray
    b: np.ndarray
    c: np.ndarray

    def __post_init__(self) -> None:
        n = int(self.steps.size)
        for name in ("a", "b", "c"):
            if getattr(self, name).shape != (n,):
                raise ValueError(f"tableau array {name} has incompatible shape")

    @property
    def n_mo(self) -> int:
        """Number of molecular orbitals."""
        return int(self.steps.size)

    @property
    def n_somo(self) -> int:
        """Number of singly occupied orbitals."""
        return int(np.count_nonzero((self.steps == STEP_UP) | (self.steps == STEP_DOWN)))

    @property
    def n_domo(self) -> int:
        """Number of doubly occupied orbitals."""
        return int(np.count_nonzero(self.steps == STEP_DOUBLE))

    @property
    def n_electrons(self) -> int:
        return 2 * int(self.a[-1]) + int(self.b[-1])

    @property
    def total_spin(self) -> int:
        """Total spin of the CSF in units of one half (2S)."""
        return int(self.b[-1])

    @property
    def is_valid_coupling(self) -> bool:
        """True when the partial spin never drops below zero along the walk."""
        return bool(np.all(self.b >= 0))

    def row(self, i: int) -> tuple[int, int, int]:
        """Return ``(a[i], b[i], c[i])`` as Python ints."""
        return (int(self.a[i]), int(self.b[i]), int(self.c[i]))

    def as_string(self) -> str:
        """Format the step vector as ``"2ud0..."``."""
        return "".join(STEP_ORDER[int(s)] for s in self.steps)

    def as_guga_string(self) -> str:
        """Format the step vector with Shavitt letters, e.g. ``"DULE"``."""
        return "".join(GUGA_LETTERS[int(s)] for s in self.steps)

    def occupations(self) -> np.ndarray:
        """Return the orbital occupancies (0, 1 or 2) as an int8 array."""
        occ = np.zeros(self.n_mo, dtype=np.int8)
        occ[(self.steps == STEP_UP) | (self.steps == STEP_DOWN)] = 1
        occ[self.steps == STEP_DOUBLE] = 2
        return occ

    def spin_prefix(self) -> np.ndarray:
        """Cumulative 2S along the walk.

        Returns
        -------
        np.ndarray
            int64 array of length ``n_mo + 1``; element ``k`` is 2S after
            orbitals ``0..k-1``.
        """
        out = np.zeros(self.n_mo + 1, dtype=np.int64)
        out[1:] = self.b
        return out


def parse_step_vector(stepvector: str | Sequence[int | str]) -> np.ndarray:
    """Convert a step vector into an int8 array of step codes.

    Parameters
    ----------
    stepvector : str or sequence of int or str
        Either a string over ``{'0','u','d','2'}`` or a sequence whose
        elements are such characters or integer step codes (0-3).

    Raises
    ------
    InvalidStepVector
        If the step vector is empty or contains an unrecognized symbol.
    """
    if len(stepvector) == 0:
        raise InvalidStepVector("empty step vector")

    codes = np.empty(len(stepvector), dtype=np.int8)
    for i, step in enumerate(stepvector):
        if isinstance(step, str):
            sidx = STEP_TO_INDEX.get(step)
            if sidx is None:
                raise InvalidStepVector(
                    f"illegal character {step!r} in step vector at position {i}",
                    symbol=step,
                    position=i,
                )
        elif isinstance(step, (int, np.integer)) and not isinstance(step, bool):
            sidx = int(step)
            if sidx < 0 or sidx >= len(STEP_ORDER):
                raise InvalidStepVector(
                    f"invalid step index {sidx} in step vector at position {i}",
                    symbol=step,
                    position=i,
                )
        else:
            raise InvalidStepVector(
                f"illegal step {step!r} in step vector at position {i}",
                symbol=step,
                position=i,
            )
        codes[i] = sidx
    return codes


def build_tableau(stepvector: str | Sequence[int | str]) -> PaldusTableau:
    """Parse a step vector and accumulate its Paldus ``(a, b, c)`` arrays.

    Parameters
    ----------
    stepvector : str or sequence of int or str
        Step vector, one symbol per orbital (see :func:`parse_step_vector`).

    Returns
    -------
    PaldusTableau
        Read-only tableau.

    Examples
    --------
    >>> from csfdet.guga import build_tableau
    >>> tab = build_tableau("2ud0")
    >>> tab.a.tolist(), tab.b.tolist(), tab.c.tolist()
    ([1, 1, 2, 2], [0, 1, 0, 0], [0, 0, 1, 2])
    >>> tab.n_electrons
    4
    """
    steps = parse_step_vector(stepvector)
    n_mo = int(steps.size)

    a = np.zeros(n_mo, dtype=np.int64)
    b = np.zeros(n_mo, dtype=np.int64)
    c = np.zeros(n_mo, dtype=np.int64)
    ai = bi = ci = 0
    for i in range(n_mo):
        s = int(steps[i])
        if s == STEP_EMPTY:
            ci += 1
        elif s == STEP_UP:
            bi += 1
        elif s == STEP_DOWN:
            ai += 1
            bi -= 1
            ci += 1
        else:  # STEP_DOUBLE
            ai += 1
        a[i] = ai
        b[i] = bi
        c[i] = ci

    return PaldusTableau(steps=_readonly(steps), a=_readonly(a), b=_readonly(b), c=_readonly(c))
