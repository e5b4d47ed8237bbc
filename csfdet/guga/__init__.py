"""GUGA building blocks for expanding a single CSF into Slater determinants."""

from csfdet.guga.combination import Combination
from csfdet.guga.evaluator import DeterminantTerm, evaluate_determinant, make_term
from csfdet.guga.fraction import RationalAccumulator
from csfdet.guga.settings import ExpansionSettings
from csfdet.guga.stats import ExpansionStats
from csfdet.guga.tableau import STEP_ORDER, PaldusTableau, build_tableau, parse_step_vector

__all__ = [
    "Combination",
    "DeterminantTerm",
    "ExpansionSettings",
    "ExpansionStats",
    "PaldusTableau",
    "RationalAccumulator",
    "STEP_ORDER",
    "build_tableau",
    "evaluate_determinant",
    "make_term",
    "parse_step_vector",
]
