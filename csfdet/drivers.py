from __future__ import annotations

"""High-level drivers for CSF -> Slater determinant expansion.

Typical usage::

    from csfdet import drivers

    drivers.csf2det("22ud0ud02", 0)          # prints the expansion
    res = drivers.expand_csf("2uud", 1)      # returns the terms
    res.total_weight()                        # Fraction(1, 1)

The step vector is turned into a Paldus tableau once; every way of placing
``(n_somo + twoms) // 2`` alpha spins on the singly occupied orbitals is
then evaluated against that tableau and the non-zero determinants are kept.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Iterator, Sequence

import numpy as np

from csfdet.errors import InvalidSpinProjection, InvalidStepVector
from csfdet.guga.combination import Combination
from csfdet.guga.evaluator import DeterminantTerm, evaluate_determinant, make_term
from csfdet.guga.settings import ExpansionSettings
from csfdet.guga.stats import ExpansionStats
from csfdet.guga.tableau import PaldusTableau, build_tableau

HEADER = "output = phase * C^2 * SD"


@dataclass(frozen=True)
class ExpansionResult:
    """Determinant expansion of one CSF at fixed ``twoms``."""

    tableau: PaldusTableau
    twoms: int
    n_alpha: int
    terms: tuple[DeterminantTerm, ...]
    stats: ExpansionStats = field(default_factory=ExpansionStats, compare=False)

    @property
    def n_electrons(self) -> int:
        return self.tableau.n_electrons

    @property
    def n_mo(self) -> int:
        return self.tableau.n_mo

    @property
    def labels(self) -> list[str]:
        return [t.label for t in self.terms]

    def amplitudes(self) -> np.ndarray:
        """Signed determinant coefficients as a float64 vector, in term order."""
        return np.asarray([t.amplitude for t in self.terms], dtype=np.float64)

    def total_weight(self) -> Fraction:
        """Exact sum of the squared coefficients (1 for a normalized CSF)."""
        return sum((t.weight for t in self.terms), Fraction(0))

    def lines(self) -> list[str]:
        out = [f"{self.n_electrons} electrons in {self.n_mo} orbitals", HEADER]
        out.extend(t.format() for t in self.terms)
        return out


def alpha_count(n_somo: int, twoms: int) -> int:
    """Number of alpha spins among the singly occupied orbitals, ``floor((n_somo + twoms) / 2)``."""
    return (int(n_somo) + int(twoms)) // 2


def _check_strict(tableau: PaldusTableau, twoms: int) -> None:
    if not tableau.is_valid_coupling:
        bad = int(np.argmax(tableau.b < 0))
        raise InvalidStepVector(
            f"invalid ud ordering in step vector: partial spin becomes negative at position {bad}",
            symbol=tableau.as_string()[bad],
            position=bad,
        )
    spin = tableau.total_spin
    if abs(twoms) > spin:
        raise InvalidSpinProjection(
            f"exceeded maximum Ms value of -/+ {spin} half integer units (twoms={twoms})",
            twoms=twoms,
            n_somo=tableau.n_somo,
        )
    if (spin + twoms) % 2:
        parity = ("EVEN", "ODD")[spin % 2]
        raise InvalidSpinProjection(
            f"Ms should be an {parity} number of half integers (twoms={twoms})",
            twoms=twoms,
            n_somo=tableau.n_somo,
        )


def _make_combination(tableau: PaldusTableau, twoms: int) -> Combination:
    n_somo = tableau.n_somo
    n_alpha = alpha_count(n_somo, twoms)
    try:
        return Combination(n_somo, n_alpha)
    except InvalidSpinProjection as e:
        raise InvalidSpinProjection(
            f"twoms={twoms} is incompatible with {n_somo} singly occupied orbitals "
            f"(would need {n_alpha} alpha spins)",
            twoms=twoms,
            n_somo=n_somo,
            n_alpha=n_alpha,
        ) from e


def _iter_terms(
    tableau: PaldusTableau,
    comb: Combination,
    stats: ExpansionStats | None,
) -> Iterator[DeterminantTerm]:
    while True:
        phase, frac, label = evaluate_determinant(tableau, comb.spin_assignment())
        term = make_term(phase, frac, label)
        if stats is not None:
            stats.inc("combinations")
            stats.inc("zero" if term is None else "terms")
        if term is not None:
            yield term
        if not comb.advance():
            break


def iter_determinant_terms(
    tableau: PaldusTableau,
    twoms: int,
    *,
    stats: ExpansionStats | None = None,
) -> Iterator[DeterminantTerm]:
    """Iterate the non-zero determinants of a CSF in lexicographic alpha order.

    The spin projection is checked here, before the iterator is returned,
    so an infeasible ``twoms`` raises :class:`InvalidSpinProjection` without
    any term being produced.
    """
    comb = _make_combination(tableau, int(twoms))
    return _iter_terms(tableau, comb, stats)


def expand_csf(
    stepvector: str | Sequence[int | str],
    twoms: int,
    *,
    settings: ExpansionSettings | None = None,
) -> ExpansionResult:
    """Expand a CSF into Slater determinants.

    Parameters
    ----------
    stepvector : str or sequence
        Step vector over ``{'0','u','d','2'}`` (or integer codes 0-3).
    twoms : int
        Twice the spin projection Ms.
    settings : ExpansionSettings, optional
        Defaults to :meth:`ExpansionSettings.from_env`.

    Returns
    -------
    ExpansionResult

    Raises
    ------
    InvalidStepVector
        Unknown step symbol (or, in strict mode, a negative partial spin).
    InvalidSpinProjection
        ``twoms`` admits no alpha/beta split of the open shells (or, in
        strict mode, is out of range or of the wrong parity for the CSF spin).
    """
    if settings is None:
        settings = ExpansionSettings.from_env()
    twoms = int(twoms)
    tableau = build_tableau(stepvector)
    if settings.strict:
        _check_strict(tableau, twoms)

    stats = ExpansionStats()
    terms_iter = iter_determinant_terms(tableau, twoms, stats=stats)
    with stats.timer("expand"):
        terms = tuple(terms_iter)
    return ExpansionResult(
        tableau=tableau,
        twoms=twoms,
        n_alpha=alpha_count(tableau.n_somo, twoms),
        terms=terms,
        stats=stats,
    )


def csf2det(
    stepvector: str | Sequence[int | str],
    twoms: int,
    *,
    sink: Callable[[str], object] = print,
    settings: ExpansionSettings | None = None,
    verbose: int | None = None,
) -> ExpansionResult:
    """Expand a CSF and write the result, one line per call to ``sink``.

    The lines are the electron/orbital count, the format header
    ``output = phase * C^2 * SD`` and one ``" + n/d |label|"`` line per
    non-zero determinant. Errors are raised before anything is written.

    Examples
    --------
    >>> _ = csf2det("ud", 0)
    2 electrons in 2 orbitals
    output = phase * C^2 * SD
     + 1/2 |ab|
     - 1/2 |ba|
    """
    if settings is None:
        settings = ExpansionSettings.from_env(verbose=verbose)
    elif verbose is not None:
        settings = ExpansionSettings(strict=settings.strict, verbose=int(verbose))

    res = expand_csf(stepvector, twoms, settings=settings)

    if settings.verbose >= 1:
        sink(f"CSF: {res.tableau.as_string()}, Ms: {Fraction(res.twoms, 2)}")
    for line in res.lines():
        sink(line)
    if settings.verbose >= 1:
        sink(res.stats.summary())
    return res
