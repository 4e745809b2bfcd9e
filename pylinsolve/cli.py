"""
Command-line driver.

Loads an augmented matrix from a text file, solves it, and prints the
original matrix, the unknowns x1..xn and the verification verdict. With
the threaded backend the wall-clock time of the forward pass is printed
as well.

Usage:
    pylinsolve matrix.txt
    pylinsolve matrix.txt --backend threaded --workers 8
    python -m pylinsolve matrix.txt --tolerance 1e-12 --precision 10

Exit status:
    0  solved (also when verification reports a mismatch)
    1  the matrix could not be loaded
    2  the system is inconsistent, or bad command-line usage
"""

import argparse
import logging
import sys
import warnings
from typing import Sequence

import numpy as np

from pylinsolve import __version__
from pylinsolve.core.datasource import MatrixSource
from pylinsolve.core.exceptions import (
    LoadError,
    InconsistentSystemError,
    ValidationError,
)
from pylinsolve.core.compute.tolerances import Tolerance, resolve_tolerance
from pylinsolve.gauss.solvers import solve
from pylinsolve.logging_config import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_MATRIX_FILE = 'matrix.txt'

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_INCONSISTENT = 2


def _tolerance_arg(text: str) -> Tolerance:
    """argparse type: a finite positive float."""
    try:
        return resolve_tolerance(float(text))
    except (ValueError, ValidationError) as e:
        raise argparse.ArgumentTypeError(f"invalid tolerance {text!r}: {e}") from e


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from e
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pylinsolve',
        description='Solve a square linear system Ax = b by Gaussian elimination '
                    'with partial pivoting.',
    )
    parser.add_argument(
        'path',
        nargs='?',
        default=DEFAULT_MATRIX_FILE,
        help='Augmented matrix file: one equation per line, coefficients then '
             f'right-hand side, whitespace separated (default: {DEFAULT_MATRIX_FILE})'
    )
    parser.add_argument(
        '--backend', '-b',
        choices=['auto', 'sequential', 'threaded'],
        default='sequential',
        help='Forward-pass scheduling (default: sequential)'
    )
    parser.add_argument(
        '--workers', '-w',
        type=_positive_int,
        default=None,
        help='Thread pool size for --backend threaded'
    )
    parser.add_argument(
        '--tolerance', '-t',
        type=_tolerance_arg,
        default=None,
        help='Absolute zero threshold (default: 1e-9)'
    )
    parser.add_argument(
        '--precision', '-p',
        type=int,
        default=6,
        help='Decimal places in printed values (default: 6)'
    )
    parser.add_argument(
        '--no-verify',
        action='store_true',
        help='Skip re-substitution of the solution into the original system'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Log progress to stderr (-v info, -vv debug)'
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help='Also write the log to this file'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def format_matrix(matrix: np.ndarray, precision: int = 6) -> list[str]:
    """Render an augmented matrix with the right-hand side set off by '|'."""
    width = max(len(f"{v:.{precision}f}") for v in matrix.ravel())
    lines = []
    for row in matrix:
        coefs = " ".join(f"{v:>{width}.{precision}f}" for v in row[:-1])
        lines.append(f"[ {coefs} | {row[-1]:>{width}.{precision}f} ]")
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers is not None and args.backend == 'sequential':
        parser.error("--workers requires --backend threaded or auto")

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(level=level, log_file=args.log_file)

    try:
        source = MatrixSource.from_file(args.path)
    except LoadError as e:
        logger.info(f"Load failed: {e}")
        print(f"Error reading matrix: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    logger.info(f"Loaded {source.n_equations} equations from {args.path}")

    print("Original augmented matrix:")
    for line in format_matrix(source.matrix, args.precision):
        print(line)

    try:
        # Degeneracy and mismatch notices are printed from result.warnings below
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', RuntimeWarning)
            result = solve(
                source,
                backend=args.backend,
                tolerance=args.tolerance,
                max_workers=args.workers,
                check=not args.no_verify,
            )
    except InconsistentSystemError as e:
        logger.info(f"Inconsistent system ({e.stage}, row {e.row})")
        print(f"\n{e}")
        print("The system is inconsistent: no solution exists.")
        return EXIT_INCONSISTENT

    print("\nSolution:")
    for line in result.format_solution(args.precision):
        print(line)

    for message in result.warnings:
        if not message.startswith("Verification failed"):
            print(f"\nWarning: {message}")

    if result.verification is not None:
        if result.verification.valid:
            print("\nThe solution is correct.")
        else:
            print(f"\n{result.verification.describe()}")
            print("The solution is NOT correct, or is inexact due to rounding errors.")

    if result.backend_name == 'cpu_threaded':
        elapsed = result.timing.get('forward_elimination', 0.0)
        print(f"\nForward pass time: {elapsed:.6f}s")

    logger.info(f"Solved with {result.backend_name} in {result.timing['total_seconds']:.6f}s")
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
