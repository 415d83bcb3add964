from typing import Optional, Tuple

import numpy as np

from ..typing import TensorLike, Index, _S
from .space import FunctionSpace


class CompoundFESpace(FunctionSpace):
    """Ordered product of finite element spaces on one mesh.

    Global dofs of the components are stacked in order, component `i`
    occupying `[offset[i], offset[i+1])`.
    """
    def __init__(self, *spaces: FunctionSpace):
        if len(spaces) == 0:
            raise ValueError("CompoundFESpace needs at least one component space.")
        mesh = spaces[0].mesh
        for s in spaces[1:]:
            if s.mesh is not mesh:
                raise ValueError("all component spaces should live on the same mesh.")
        self.spaces = tuple(spaces)
        self.mesh = mesh
        self.ftype = mesh.ftype
        self.itype = mesh.itype

        gdofs = [s.number_of_global_dofs() for s in self.spaces]
        self.offset = np.cumsum([0] + gdofs)

    def __str__(self):
        return "Compound space of (" + ", ".join(str(s) for s in self.spaces) + ")"

    def __len__(self) -> int:
        return len(self.spaces)

    def __getitem__(self, i: int) -> FunctionSpace:
        return self.component(i)

    def number_of_components(self) -> int:
        return len(self.spaces)

    def _check_component(self, i: int):
        n = len(self.spaces)
        if not 0 <= i < n:
            raise IndexError(f"component index {i} is out of range for a "
                             f"compound space with {n} components.")

    def component(self, i: int) -> FunctionSpace:
        self._check_component(i)
        return self.spaces[i]

    def component_range(self, i: int) -> Tuple[int, int]:
        self._check_component(i)
        return int(self.offset[i]), int(self.offset[i+1])

    def number_of_global_dofs(self) -> int:
        return int(self.offset[-1])

    def number_of_local_dofs(self, doftype='cell', i: Optional[int]=None) -> int:
        if i is not None:
            return self.component(i).number_of_local_dofs(doftype)
        return sum(s.number_of_local_dofs(doftype) for s in self.spaces)

    def cell_to_dof(self, i: Optional[int]=None, index: Index=_S) -> TensorLike:
        """Global cell to dof map of component `i`, or of all components
        concatenated along the last axis when `i` is None."""
        if i is not None:
            return self.component(i).cell_to_dof(index=index) + self.offset[i]
        return np.concatenate([
            s.cell_to_dof(index=index) + self.offset[k] for k, s in enumerate(self.spaces)
        ], axis=-1)

    def face_to_dof(self, i: Optional[int]=None, index: Index=_S) -> TensorLike:
        if i is not None:
            return self.component(i).face_to_dof(index=index) + self.offset[i]
        return np.concatenate([
            s.face_to_dof(index=index) + self.offset[k] for k, s in enumerate(self.spaces)
        ], axis=-1)
