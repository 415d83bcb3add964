import builtins
from typing import Tuple, Union, Callable

import numpy as np


### Types

TensorLike = np.ndarray
Number = Union[builtins.int, builtins.float, builtins.complex]
Scalar = Union[Number, TensorLike]
Index = Union[int, slice, Tuple[int, ...], TensorLike]
CoefLike = Union[Number, TensorLike, Callable[..., TensorLike]]


### Constants

_S = slice(None)
Size = Tuple[int, ...]
