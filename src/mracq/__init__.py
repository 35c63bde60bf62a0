from mracq._version import __version__
from mracq import algorithms, operators, data, utils

__all__ = [
    "__version__",
    "algorithms",
    "data",
    "operators",
    "utils"
]
