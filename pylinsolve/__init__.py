"""
pylinsolve: square linear systems by Gaussian elimination.

Partial pivoting, inconsistency detection, back-substitution and
re-substitution checks, with sequential and thread-pool forward passes.

Submodules:
    gauss: Elimination, back-substitution, verification
    core: Loader, exceptions, result envelope, timing, tolerance
"""

__version__ = "0.1.0"

from pylinsolve import gauss
from pylinsolve.core.datasource import MatrixSource
from pylinsolve.gauss import solve, eliminate, back_substitute, verify

__all__ = [
    "__version__",
    "gauss",
    "MatrixSource",
    "solve",
    "eliminate",
    "back_substitute",
    "verify",
]
