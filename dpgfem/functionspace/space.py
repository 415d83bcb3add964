from typing import Union, Optional, Any

import numpy as np

from ..typing import TensorLike, Index, _S, Size
from .function import Function


class FunctionSpace():
    r"""The base class of function spaces"""
    ftype: Any
    itype: Any

    # basis
    def basis(self, bc: TensorLike, index: Index=_S) -> TensorLike: raise NotImplementedError
    def grad_basis(self, bc: TensorLike, index: Index=_S) -> TensorLike: raise NotImplementedError

    # values
    def value(self, uh: TensorLike, bc: TensorLike, index: Index=_S) -> TensorLike: raise NotImplementedError
    def grad_value(self, uh: TensorLike, bc: TensorLike, index: Index=_S) -> TensorLike: raise NotImplementedError

    # counters
    def number_of_global_dofs(self) -> int: raise NotImplementedError
    def number_of_local_dofs(self, doftype='cell') -> int: raise NotImplementedError

    # relationships
    def cell_to_dof(self, index: Index=_S) -> TensorLike: raise NotImplementedError
    def face_to_dof(self, index: Index=_S) -> TensorLike: raise NotImplementedError

    @property
    def has_face_elements(self) -> bool:
        """Whether the space provides basis functions on faces (traces)."""
        return False

    @property
    def basis_degree(self) -> int:
        """Polynomial degree of the basis functions."""
        return self.p

    def array(self, batch: Union[int, Size, None]=None, *, dtype=None) -> TensorLike:
        """Initialize an array filled with zeros as values of DoFs.

        Parameters:
            batch (int | Size | None, optional): shape of the batch.

        Returns:
            Tensor: Values of DoFs shaped (batch, GDOF).
        """
        GDOF = self.number_of_global_dofs()
        if (batch is None) or (batch == 0):
            batch = tuple()

        elif isinstance(batch, int):
            batch = (batch, )

        shape = batch + (GDOF, )

        if dtype is None:
            dtype = self.ftype

        return np.zeros(shape, dtype=dtype)

    def function(self, array: Optional[TensorLike]=None,
                 batch: Union[int, Size, None]=None, *, dtype=None) -> Function:
        """Initialize a Function in the space."""
        if array is None:
            array = self.array(batch=batch, dtype=dtype)
        return Function(self, array=array)
