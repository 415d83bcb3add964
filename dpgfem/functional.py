from typing import Optional

import numpy as np

from .typing import TensorLike, Scalar
from .utils import is_scalar, is_tensor, fill_axis


def linear_integral(basis: TensorLike, weights: TensorLike, measure: TensorLike,
                    source: Optional[Scalar]=None) -> TensorLike:
    """Numerical integration of a source against basis functions.

    Parameters:
        basis (TensorLike[C, Q, I]): The basis values on the quadrature points.
        weights (TensorLike[Q,]): The weights of the quadrature points.
        measure (TensorLike[C,]): The measure of the mesh entity.
        source (Number, TensorLike, optional): Scalar, or values shaped (C,) or (C, Q).

    Returns:
        TensorLike: The result of the integration shaped (C, I).
    """
    if source is None:
        return np.einsum('c, q, cqi -> ci', measure, weights, basis)

    if is_scalar(source):
        return np.einsum('c, q, cqi -> ci', measure, weights, basis) * source

    elif is_tensor(source):
        source = fill_axis(source, 2)
        source = np.broadcast_to(source, basis.shape[:2])
        return np.einsum('c, q, cqi, cq -> ci', measure, weights, basis, source)

    else:
        raise TypeError(f"source should be int, float, complex or TensorLike, but got {type(source)}.")


def bilinear_integral(basis1: TensorLike, basis2: TensorLike, weights: TensorLike,
                      measure: TensorLike,
                      coef: Optional[Scalar]=None) -> TensorLike:
    """Numerical integration of products of two groups of basis functions.

    Trailing axes of the bases (vector components) are contracted.

    Parameters:
        basis1 (TensorLike[C, Q, I, ...]): The test side basis values.
        basis2 (TensorLike[C, Q, J, ...]): The trial side basis values.
        weights (TensorLike[Q,]): The weights of the quadrature points.
        measure (TensorLike[C,]): The measure of the mesh entity.
        coef (Number, TensorLike, optional): Scalar, or values shaped (C,) or (C, Q).

    Returns:
        TensorLike: The result of the integration shaped (C, I, J).
    """
    basis1 = basis1.reshape(*basis1.shape[:3], -1) # (C, Q, I, dof_numel)
    basis2 = basis2.reshape(*basis2.shape[:3], -1) # (C, Q, J, dof_numel)

    if coef is None:
        return np.einsum('q, c, cqid, cqjd -> cij', weights, measure, basis1, basis2)

    if is_scalar(coef):
        return np.einsum('q, c, cqid, cqjd -> cij', weights, measure, basis1, basis2) * coef

    elif is_tensor(coef):
        coef = fill_axis(coef, 2)
        coef = np.broadcast_to(coef, basis1.shape[:2])
        return np.einsum('q, c, cqid, cqjd, cq -> cij', weights, measure, basis1, basis2, coef)

    else:
        raise TypeError(f"coef should be int, float, complex or TensorLike, but got {type(coef)}.")
