from typing import Callable, Optional, Union

import numpy as np

from ..typing import TensorLike, Number


class Coefficient:
    """Scalar coefficient function, real or complex.

    A coefficient is queried in two modes: `evaluate_const` for spatially
    constant values and `__call__` for values at cartesian points shaped
    `(..., GD)`.
    """
    def is_complex(self) -> bool:
        raise NotImplementedError

    def is_constant(self) -> bool:
        raise NotImplementedError

    def evaluate_const(self) -> Number:
        raise NotImplementedError

    def __call__(self, points: TensorLike) -> Union[Number, TensorLike]:
        raise NotImplementedError

    @property
    def dtype(self):
        return np.complex128 if self.is_complex() else np.float64


class ConstantCoefficient(Coefficient):
    """A constant independent of space."""
    def __init__(self, c: Number=1.0):
        if not isinstance(c, (int, float, complex, np.number)):
            raise TypeError(f"constant coefficient expects a number, but got {type(c).__name__}.")
        self.constant = c

    def __repr__(self):
        return f"ConstantCoefficient({self.constant!r})"

    def is_complex(self):
        return isinstance(self.constant, (complex, np.complexfloating))

    def is_constant(self):
        return True

    def evaluate_const(self):
        return self.constant

    def __call__(self, points):
        return self.constant


class FunctionCoefficient(Coefficient):
    """A coefficient given by a python function of cartesian points.

    Parameters:
        func (Callable): function receiving points shaped (..., GD) and
            returning values shaped (...).
        dtype (optional): value type of the function, `np.float64` or
            `np.complex128`. Read from `func.dtype` when not given.
        constant (bool): whether the function is known not to vary in space.
    """
    def __init__(self, func: Callable[[TensorLike], TensorLike], dtype=None,
                 constant: bool=False):
        if not callable(func):
            raise TypeError(f"func should be callable, but got {type(func).__name__}.")
        if getattr(func, 'coordtype', 'cartesian') != 'cartesian':
            raise TypeError("only functions of cartesian coordinates are supported "
                            f"as coefficients, but got coordtype '{func.coordtype}'.")
        self.func = func
        self._dtype = np.dtype(dtype if dtype is not None else getattr(func, 'dtype', np.float64))
        self.constant = constant

    def __repr__(self):
        return f"FunctionCoefficient({getattr(self.func, '__name__', self.func)!r})"

    def is_complex(self):
        return np.issubdtype(self._dtype, np.complexfloating)

    def is_constant(self):
        return self.constant

    def evaluate_const(self):
        if not self.constant:
            raise ValueError(f"{self!r} varies in space and has no constant value.")
        return np.ravel(self.func(np.zeros((1, 3))))[0].item()

    def __call__(self, points):
        return self.func(points)


def as_coefficient(coef: Optional[Union[Coefficient, Number, Callable]]) -> Optional[Coefficient]:
    """Wrap numbers and callables as `Coefficient` objects."""
    if coef is None or isinstance(coef, Coefficient):
        return coef
    if isinstance(coef, (int, float, complex, np.number)):
        return ConstantCoefficient(coef)
    if callable(coef):
        return FunctionCoefficient(coef)
    raise TypeError(f"coef should be a number, a callable or a Coefficient, "
                    f"but got {type(coef).__name__}.")
