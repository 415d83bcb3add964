from typing import Optional, Union

import numpy as np

from .typing import TensorLike, Index, _S
from .coefficient import Coefficient

__all__ = [
    'process_coef_func',
    'is_scalar',
    'is_tensor',
    'fill_axis',
]


def process_coef_func(
    coef: Optional[Coefficient],
    bcs: Optional[TensorLike]=None,
    mesh=None,
    index: Index=_S,
    *, dtype=None
):
    r"""Fetch the values of `coef` at the quadrature points `bcs` of the mesh
    entities `index`, the entity type given by the length of `bcs`.

    Constant coefficients come back as python scalars, other ones as arrays
    shaped (NE, NQ)."""
    if coef is None:
        return None
    if coef.is_constant():
        val = coef.evaluate_const()
    else:
        if bcs is None or mesh is None:
            raise RuntimeError('The bcs and the mesh should be provided for coef functions.')
        ps = mesh.bc_to_point(bcs, index=index)
        val = np.broadcast_to(np.asarray(coef(ps)), ps.shape[:-1])
    if dtype is not None:
        if np.iscomplexobj(val) and not np.issubdtype(np.dtype(dtype), np.complexfloating):
            raise TypeError(f"complex coefficient values can not be integrated as {np.dtype(dtype)}.")
        if is_tensor(val):
            val = val.astype(dtype, copy=False)
    return val


def is_scalar(input: Union[int, float, complex, TensorLike]) -> bool:
    if isinstance(input, TensorLike):
        return input.size == 1
    else:
        return isinstance(input, (int, float, complex, np.number))


def is_tensor(input: Union[int, float, complex, TensorLike]) -> bool:
    if isinstance(input, TensorLike):
        return input.size >= 2
    return False


def fill_axis(input: TensorLike, ndim: int):
    diff = ndim - input.ndim

    if diff > 0:
        return input[(..., ) + (None, ) * diff]
    elif diff == 0:
        return input
    else:
        raise RuntimeError(f'The dimension of the input should be smaller than {ndim}, '
                           f'but got shape {tuple(input.shape)}.')
