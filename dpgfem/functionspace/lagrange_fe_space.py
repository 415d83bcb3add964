from typing import Union, Callable

import numpy as np

from ..typing import TensorLike, Index, _S
from ..mesh.mesh_base import SimplexMesh
from ..decorator import barycentric
from .space import FunctionSpace
from .dofs import LagrangeCFEDof, LagrangeDFEDof


class LagrangeFESpace(FunctionSpace):
    """Lagrange finite element space of degree `p` on a simplex mesh.

    `ctype='C'` gives the H1-conforming space, which also has basis functions
    on faces (traces). `ctype='D'` gives the discontinuous L2 space, whose
    dofs live on cells only.
    """
    def __init__(self, mesh: SimplexMesh, p: int=1, ctype='C'):
        self.mesh = mesh
        self.p = p

        if ctype == 'C':
            self.dof = LagrangeCFEDof(mesh, p)
        elif ctype == 'D':
            self.dof = LagrangeDFEDof(mesh, p)
        else:
            raise ValueError(f"Unknown type: {ctype}")
        self.ctype = ctype

        self.ftype = mesh.ftype
        self.itype = mesh.itype
        self.TD = mesh.top_dimension()
        self.GD = mesh.geo_dimension()

    def __str__(self):
        return f"Lagrange finite element space of degree {self.p} ({self.ctype})"

    @property
    def has_face_elements(self) -> bool:
        return self.ctype == 'C'

    def number_of_local_dofs(self, doftype='cell') -> int:
        return self.dof.number_of_local_dofs(doftype=doftype)

    def number_of_global_dofs(self) -> int:
        return self.dof.number_of_global_dofs()

    def interpolation_points(self) -> TensorLike:
        return self.dof.interpolation_points()

    def cell_to_dof(self, index: Index=_S) -> TensorLike:
        return self.dof.cell_to_dof(index=index)

    def face_to_dof(self, index: Index=_S) -> TensorLike:
        return self.dof.face_to_dof(index=index)

    def is_boundary_dof(self) -> TensorLike:
        if self.ctype == 'C':
            return self.dof.is_boundary_dof()
        else:
            raise RuntimeError("boundary dof is not supported by discontinuous spaces.")

    def geo_dimension(self):
        return self.GD

    def top_dimension(self):
        return self.TD

    def interpolate(self, u: Union[Callable[..., TensorLike], TensorLike]) -> TensorLike:
        if callable(u):
            uI = u(self.interpolation_points())
        else:
            uI = np.asarray(u)
        return self.function(uI)

    @barycentric
    def basis(self, bc: TensorLike, index: Index=_S) -> TensorLike:
        phi = self.mesh.shape_function(bc, self.p)
        return phi[None, ...] # (1, NQ, LDOF)

    @barycentric
    def face_basis(self, bc: TensorLike, index: Index=_S) -> TensorLike:
        if not self.has_face_elements:
            raise TypeError("discontinuous Lagrange spaces have no face basis.")
        phi = self.mesh.face_shape_function(bc, self.p)
        return phi[None, ...]

    @barycentric
    def grad_basis(self, bc: TensorLike, index: Index=_S, variable='x') -> TensorLike:
        return self.mesh.grad_shape_function(bc, self.p, index=index, variables=variable)

    @barycentric
    def value(self, uh: TensorLike, bc: TensorLike, index: Index=_S) -> TensorLike:
        phi = self.basis(bc, index=index)
        cell2dof = self.cell_to_dof(index=index)
        return np.einsum('ql, ...cl -> ...cq', phi[0], uh[..., cell2dof])

    @barycentric
    def grad_value(self, uh: TensorLike, bc: TensorLike, index: Index=_S) -> TensorLike:
        gphi = self.grad_basis(bc, index=index)
        cell2dof = self.cell_to_dof(index=index)
        return np.einsum('cqlm, cl -> cqm', gphi, uh[cell2dof])
