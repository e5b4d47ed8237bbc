from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Sequence

from csfdet.guga.fraction import RationalAccumulator
from csfdet.guga.tableau import STEP_DOUBLE, STEP_DOWN, STEP_EMPTY, STEP_UP, PaldusTableau

DET_LABELS: tuple[str, ...] = ("0", "a", "b", "2")


@dataclass(frozen=True)
class DeterminantTerm:
    """One Slater determinant in the expansion of a CSF.

    The CSF equals ``sum(sign * sqrt(numerator / denominator) * |label|)``;
    ``numerator / denominator`` is the squared coefficient, kept exact and
    in lowest terms with a positive numerator.
    """

    sign: int
    numerator: int
    denominator: int
    label: str

    def __post_init__(self) -> None:
        if self.sign not in (1, -1):
            raise ValueError(f"sign must be +1 or -1, got {self.sign}")
        if self.numerator <= 0 or self.denominator <= 0:
            raise ValueError("coefficient must be a positive fraction")

    @property
    def weight(self) -> Fraction:
        """Squared coefficient ``C^2`` as an exact fraction."""
        return Fraction(self.numerator, self.denominator)

    @property
    def amplitude(self) -> float:
        """Signed coefficient ``C`` as a float."""
        return float(self.sign) * math.sqrt(self.numerator / self.denominator)

    def occ_strings(self) -> tuple[int, int]:
        """Alpha and beta occupation bit strings (bit ``i`` = orbital ``i``)."""
        alpha = beta = 0
        for i, ch in enumerate(self.label):
            if ch in ("a", "2"):
                alpha |= 1 << i
            if ch in ("b", "2"):
                beta |= 1 << i
        return alpha, beta

    def format(self) -> str:
        sign = "+" if self.sign > 0 else "-"
        return f" {sign} {self.numerator}/{self.denominator} |{self.label}|"


def evaluate_determinant(
    tableau: PaldusTableau,
    spins: Sequence[int],
) -> tuple[int, RationalAccumulator, str]:
    """Walk the orbitals once and accumulate phase and squared coefficient.

    Parameters
    ----------
    tableau : PaldusTableau
        Tableau of the CSF being expanded.
    spins : sequence of int
        One entry per singly occupied orbital in walk order: +1 for alpha,
        -1 for beta.

    Returns
    -------
    phase : int
        +1 or -1.
    frac : RationalAccumulator
        Reduced squared coefficient; zero when the determinant does not
        contribute.
    label : str
        Determinant label over ``{'0','a','b','2'}``.
    """
    n_somo = tableau.n_somo
    if len(spins) != n_somo:
        raise ValueError(f"spin assignment has wrong length: {len(spins)} (expected {n_somo})")

    phase = 1
    frac = RationalAccumulator(1, 1)
    n_alpha = n_beta = 0
    i_somo = 0
    det: list[str] = []
    for i in range(tableau.n_mo):
        step = int(tableau.steps[i])
        a_i = int(tableau.a[i])
        b_i = int(tableau.b[i])
        if step == STEP_EMPTY:
            det.append("0")
        elif step == STEP_UP:
            if spins[i_somo] > 0:
                det.append("a")
                frac.mul_numerator(a_i + b_i - n_beta)
                n_alpha += 1
            else:
                det.append("b")
                frac.mul_numerator(a_i + b_i - n_alpha)
                n_beta += 1
            frac.mul_denominator(b_i)
            i_somo += 1
        elif step == STEP_DOWN:
            if spins[i_somo] > 0:
                det.append("a")
                frac.mul_numerator(n_beta - a_i + 1)
                n_alpha += 1
                if b_i % 2 == 0:
                    phase = -phase
            else:
                det.append("b")
                frac.mul_numerator(n_alpha - a_i + 1)
                n_beta += 1
                if b_i % 2 == 1:
                    phase = -phase
            frac.mul_denominator(b_i + 2)
            i_somo += 1
        elif step == STEP_DOUBLE:
            det.append("2")
            if b_i % 2 == 1:
                phase = -phase
            n_alpha += 1
            n_beta += 1
        else:
            raise ValueError(f"invalid step code {step} at orbital {i}")
        frac.reduce()

    return phase, frac, "".join(det)


def make_term(phase: int, frac: RationalAccumulator, label: str) -> DeterminantTerm | None:
    """Package an evaluation as a :class:`DeterminantTerm`, or None for a zero coefficient."""
    if frac.is_zero:
        return None
    num, den = frac
    sign = int(phase)
    if num < 0:
        num, sign = -num, -sign
    if den < 0:
        den, sign = -den, -sign
    return DeterminantTerm(sign=sign, numerator=num, denominator=den, label=label)
