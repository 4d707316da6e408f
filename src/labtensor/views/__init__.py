"""
Non-owning views over Values tensors.

Each view shares the source buffer: writes through the view land in the
source and source writes are visible through the view. ``as_values()``
materializes a view into new owning storage.
"""

from .indexed import Indexed
from .masked import Masked, as_masked
from .rows import (
    ASCENDING,
    CONTAINS,
    DESCENDING,
    EQUALS,
    EXCLUDE,
    IGNORE_CASE,
    INCLUDE,
    USE_CASE,
    Rows,
    as_rows,
    compare_ascending,
)
from .sliced import Sliced, as_sliced

__all__ = [
    "Rows",
    "Sliced",
    "Masked",
    "Indexed",
    "as_rows",
    "as_sliced",
    "as_masked",
    "compare_ascending",
    "ASCENDING",
    "DESCENDING",
    "INCLUDE",
    "EXCLUDE",
    "CONTAINS",
    "EQUALS",
    "IGNORE_CASE",
    "USE_CASE",
]
