from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _load_version

from . import tmath, views
from .core.align import align_for_assign, align_shapes, wrap_index_1d
from .core.booleans import Bool
from .core.exceptions import (
    AlignmentError,
    FuncNotFoundError,
    NotValuesError,
    SizeMismatchError,
    SliceError,
    TensorError,
)
from .core.funcs import Func, FuncRegistry, new_registry
from .core.number import Byte, Float32, Float64, Int, Int32, Number
from .core.shape import Range, Shape
from .core.strings import String
from .core.tensor import Contiguous, RowMajor, Tensor, Values
from .core.vectorize import (
    ThreadingConfig,
    get_threading_config,
    set_threading_config,
    vectorize,
    vectorize_threaded,
)
from .views import Indexed, Masked, Rows, Sliced

try:
    __version__ = _load_version("labtensor")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Shape",
    "Range",
    "Tensor",
    "RowMajor",
    "Contiguous",
    "Values",
    "Number",
    "Float64",
    "Float32",
    "Int",
    "Int32",
    "Byte",
    "String",
    "Bool",
    "Rows",
    "Sliced",
    "Masked",
    "Indexed",
    "align_shapes",
    "align_for_assign",
    "wrap_index_1d",
    "vectorize",
    "vectorize_threaded",
    "ThreadingConfig",
    "get_threading_config",
    "set_threading_config",
    "Func",
    "FuncRegistry",
    "new_registry",
    "TensorError",
    "AlignmentError",
    "SizeMismatchError",
    "SliceError",
    "NotValuesError",
    "FuncNotFoundError",
    "tmath",
    "views",
    "__version__",
]
