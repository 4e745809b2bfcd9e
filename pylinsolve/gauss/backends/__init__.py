"""
Elimination backends.

Available backends:
    CPUSequentialBackend: Reference implementation, one thread
    CPUThreadedBackend: Row updates of each pivot step on a thread pool
"""

from pylinsolve.gauss.backends.cpu import CPUSequentialBackend
from pylinsolve.gauss.backends.threaded import CPUThreadedBackend

__all__ = [
    "CPUSequentialBackend",
    "CPUThreadedBackend",
]
