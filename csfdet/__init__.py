"""csfdet — expand GUGA configuration state functions into Slater determinants."""

from importlib.metadata import PackageNotFoundError, version as _dist_version

from csfdet.errors import InvalidSpinProjection, InvalidStepVector
from csfdet.guga import (
    Combination,
    DeterminantTerm,
    ExpansionSettings,
    PaldusTableau,
    RationalAccumulator,
    build_tableau,
)
from csfdet.drivers import ExpansionResult, csf2det, expand_csf, iter_determinant_terms

# High-level drivers module (import as `from csfdet import drivers`)
from csfdet import drivers

try:
    __version__ = _dist_version("csfdet")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core classes
    "Combination",
    "DeterminantTerm",
    "ExpansionResult",
    "ExpansionSettings",
    "PaldusTableau",
    "RationalAccumulator",
    # Errors
    "InvalidSpinProjection",
    "InvalidStepVector",
    # Core functions
    "build_tableau",
    "csf2det",
    "expand_csf",
    "iter_determinant_terms",
    # High-level drivers
    "drivers",
]
