from __future__ import annotations

import math

from csfdet.errors import InvalidSpinProjection


class Combination:
    """k-element subsets of ``{0, ..., n-1}`` in lexicographic order.

    The current subset lives in ``lex`` and is mutated in place by
    :meth:`advance`. Used to choose which singly occupied orbitals carry
    alpha spin.

    Examples
    --------
    >>> comb = Combination(4, 2)
    >>> seen = [comb.current]
    >>> while comb.advance():
    ...     seen.append(comb.current)
    >>> seen
    [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]
    """

    def __init__(self, n: int, k: int) -> None:
        n = int(n)
        k = int(k)
        if n < 0:
            raise ValueError("n must be >= 0")
        if k < 0 or k > n:
            raise InvalidSpinProjection(
                f"cannot place {k} alpha spins in {n} singly occupied orbitals",
                n_somo=n,
                n_alpha=k,
            )
        self.n = n
        self.k = k
        self.lex: list[int] = list(range(k))

    @property
    def count(self) -> int:
        """Total number of subsets, ``C(n, k)``."""
        return math.comb(self.n, self.k)

    @property
    def current(self) -> tuple[int, ...]:
        return tuple(self.lex)

    def reset(self) -> None:
        self.lex[:] = range(self.k)

    def advance(self) -> bool:
        """Step to the lexicographic successor; return False once exhausted."""
        lex = self.lex
        ptr = self.k - 1
        while ptr >= 0 and lex[ptr] == self.n - self.k + ptr:
            ptr -= 1
        if ptr < 0:
            return False
        lex[ptr] += 1
        for i in range(1, self.k - ptr):
            lex[ptr + i] = lex[ptr] + i
        return True

    def spin_assignment(self) -> tuple[int, ...]:
        """Return +1 (alpha) at the chosen positions and -1 (beta) elsewhere."""
        spins = [-1] * self.n
        for idx in self.lex:
            spins[idx] = 1
        return tuple(spins)

    def __repr__(self) -> str:
        return f"Combination(n={self.n}, k={self.k}, lex={self.lex})"
