__all__ = [
    "__title__",
    "__summary__",
    "__uri__",
    "__version__",
    "__author__",
    "__email__",
    "__license__",
    "__copyright__",
]

__title__ = "mwcrandom"
__summary__ = "mwcrandom is a reproducible Multiply-With-Carry random number generator for simulation work."
__uri__ = "https://github.com/mwcrandom/mwcrandom"

__version__ = "1.0.0"

__author__ = "The mwcrandom developers"
__email__ = "mwcrandom.dev@gmail.com"

__license__ = "BSD-3-Clause"
__copyright__ = f"Copyright 2026 {__author__}"
