from __future__ import annotations

import argparse
import sys

from csfdet.drivers import csf2det
from csfdet.errors import InvalidSpinProjection, InvalidStepVector
from csfdet.guga.settings import ExpansionSettings


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="csf2det",
        description="Expand a configuration state function (CSF) into Slater determinants using GUGA.",
    )
    ap.add_argument(
        "-s",
        "--stepvec",
        required=True,
        metavar='"{0,u,d,2}"',
        help='step vector with the spin coupling, e.g. "2uduu0"',
    )
    ap.add_argument("-m", "--twoms", required=True, type=int, metavar="2*Ms", help="Ms in units of one half")
    ap.add_argument("-v", "--verbose", action="count", default=None, help="print extra information")
    ap.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="also reject invalid ud orderings and Ms values outside the CSF spin (default: CSFDET_STRICT)",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = ExpansionSettings.from_env(strict=args.strict, verbose=args.verbose)
        csf2det(args.stepvec, args.twoms, settings=settings)
    except (InvalidStepVector, InvalidSpinProjection) as e:
        print(f"input error: {e}", file=sys.stderr)
        print("             check the -s/--stepvec and -m/--twoms input", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
