import numpy as np

from ..typing import TensorLike, Index, _S
from ..mesh.mesh_base import SimplexMesh
from ..decorator import barycentric
from .space import FunctionSpace


class RaviartThomasFESpace(FunctionSpace):
    """Lowest order Raviart-Thomas space on triangle and tetrahedron meshes.

    There is one dof per face, the flux through the face along the face
    normal (the outward normal of its left cell). On a cell, the basis
    function of the local face `i` is

        phi_i = s_i |grad lambda_i| (x - x_i),

    where `x_i` is the vertex opposite to face `i` and `s_i` is +1 if the cell
    is the left cell of the face and -1 otherwise, so that `phi_i . n_i`
    equals `s_i` on face `i` and vanishes on the other faces.

    Parameters:
        mesh (SimplexMesh): the mesh.
        p (int): degree, only 0 is supported.
    """
    def __init__(self, mesh: SimplexMesh, p: int=0):
        if p != 0:
            raise NotImplementedError(f"only the lowest order (p=0) RT space is "
                                      f"implemented, but got p={p}.")
        if mesh.top_dimension() not in (2, 3):
            raise ValueError(f"Unsupported dimension: {mesh.top_dimension()}. "
                             "Only 2, or 3 are supported.")
        self.mesh = mesh
        self.p = p
        self.ftype = mesh.ftype
        self.itype = mesh.itype
        self.TD = mesh.top_dimension()
        self.GD = mesh.geo_dimension()

    def __str__(self):
        return "Lowest order Raviart-Thomas finite element space"

    @property
    def has_face_elements(self) -> bool:
        return True

    @property
    def basis_degree(self) -> int:
        # phi_i is linear in x even though p = 0
        return self.p + 1

    def number_of_local_dofs(self, doftype='cell') -> int:
        if doftype in {'cell', self.TD}:
            return self.TD + 1
        elif doftype in {'face', self.TD-1}:
            return 1
        else:
            raise ValueError(f"Unknown doftype: {doftype}")

    def number_of_global_dofs(self) -> int:
        return self.mesh.number_of_faces()

    def cell_to_dof(self, index: Index=_S) -> TensorLike:
        return self.mesh.cell_to_face(index=index)

    def face_to_dof(self, index: Index=_S) -> TensorLike:
        NF = self.mesh.number_of_faces()
        return np.arange(NF, dtype=self.itype)[index].reshape(-1, 1)

    def cell_to_dof_sign(self, index: Index=_S) -> TensorLike:
        sign = self.mesh.cell_to_face_sign(index=index)
        return np.where(sign, 1.0, -1.0)

    @barycentric
    def basis(self, bc: TensorLike, index: Index=_S) -> TensorLike:
        """Vector basis functions shaped (NC, NQ, ldof, GD)."""
        mesh = self.mesh
        glambda = mesh.grad_lambda(index=index)
        node = mesh.entity('node')
        cnode = node[mesh.entity('cell', index=index)]  # (NC, ldof, GD)
        ps = mesh.bc_to_point(bc, index=index)  # (NC, NQ, GD)
        c = self.cell_to_dof_sign(index=index)*np.linalg.norm(glambda, axis=-1)
        phi = ps[:, :, None, :] - cnode[:, None, :, :]
        phi *= c[:, None, :, None]
        return phi

    @barycentric
    def div_basis(self, bc: TensorLike, index: Index=_S) -> TensorLike:
        """Divergence of the basis functions shaped (NC, NQ, ldof)."""
        glambda = self.mesh.grad_lambda(index=index)
        c = self.TD*self.cell_to_dof_sign(index=index)*np.linalg.norm(glambda, axis=-1)
        NQ = bc.shape[0]
        return np.broadcast_to(c[:, None, :], (c.shape[0], NQ, c.shape[1]))

    @barycentric
    def face_normal_basis(self, bc: TensorLike, index: Index=_S) -> TensorLike:
        """Normal components of the basis on faces, along the face normals,
        shaped (NF, NQ, 1)."""
        NF = self.face_to_dof(index=index).shape[0]
        NQ = bc.shape[0]
        return np.ones((NF, NQ, 1), dtype=self.ftype)

    @barycentric
    def value(self, uh: TensorLike, bc: TensorLike, index: Index=_S) -> TensorLike:
        phi = self.basis(bc, index=index)
        cell2dof = self.cell_to_dof(index=index)
        return np.einsum('cqld, cl -> cqd', phi, uh[cell2dof])

    @barycentric
    def div_value(self, uh: TensorLike, bc: TensorLike, index: Index=_S) -> TensorLike:
        dphi = self.div_basis(bc, index=index)
        cell2dof = self.cell_to_dof(index=index)
        return np.einsum('cql, cl -> cq', dphi, uh[cell2dof])
