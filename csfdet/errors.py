from __future__ import annotations


class InvalidStepVector(ValueError):
    """Raised when a step vector cannot be turned into a Paldus tableau.

    Attributes
    ----------
    symbol
        The offending step symbol, if a single symbol is to blame.
    position
        Zero-based orbital position of ``symbol`` in the step vector.
    """

    def __init__(self, message: str, *, symbol: object = None, position: int | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol
        self.position = position


class InvalidSpinProjection(ValueError):
    """Raised when ``twoms`` admits no spin assignment for the singly occupied orbitals."""

    def __init__(
        self,
        message: str,
        *,
        twoms: int | None = None,
        n_somo: int | None = None,
        n_alpha: int | None = None,
    ) -> None:
        super().__init__(message)
        self.twoms = twoms
        self.n_somo = n_somo
        self.n_alpha = n_alpha
