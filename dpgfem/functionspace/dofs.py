__all__ = ['LagrangeCFEDof', 'LagrangeDFEDof']

from math import comb

import numpy as np

from ..typing import TensorLike, Index, _S
from ..mesh.mesh_base import SimplexMesh


class LagrangeCFEDof():
    """Continuous Lagrange dofs: one per Lagrange point of the mesh, shared by
    all cells and faces containing it."""
    def __init__(self, mesh: SimplexMesh, p: int):
        if p < 1:
            raise ValueError(f"continuous Lagrange spaces need p >= 1, but got {p}.")
        TD = mesh.top_dimension()
        self.mesh = mesh
        self.p = p
        self.multiIndex = mesh.multi_index_matrix(p, TD)
        self.cell2dof, self.face2dof, self.gdof = mesh.ipoint_numbering(p)

    def is_boundary_dof(self) -> TensorLike:
        index = self.mesh.boundary_face_index()
        isBdDof = np.zeros(self.gdof, dtype=np.bool_)
        isBdDof[self.face2dof[index]] = True
        return isBdDof

    def entity_to_dof(self, etype: int, index: Index=_S):
        TD = self.mesh.top_dimension()
        if etype == TD:
            return self.cell_to_dof(index)
        elif etype == TD-1:
            return self.face_to_dof(index)
        else:
            raise ValueError(f"Unknown entity type: {etype}")

    def face_to_dof(self, index: Index=_S):
        return self.face2dof[index]

    def cell_to_dof(self, index: Index=_S):
        return self.cell2dof[index]

    def interpolation_points(self) -> TensorLike:
        return self.mesh.interpolation_points(self.p)

    def number_of_global_dofs(self) -> int:
        return self.gdof

    def number_of_local_dofs(self, doftype='cell') -> int:
        TD = self.mesh.top_dimension()
        if doftype in {'cell', TD}:
            return comb(self.p+TD, TD)
        elif doftype in {'face', TD-1}:
            return comb(self.p+TD-1, TD-1)
        else:
            raise ValueError(f"Unknown doftype: {doftype}")


class LagrangeDFEDof():
    """Discontinuous Lagrange dofs: every cell owns its dofs, faces have
    none."""
    def __init__(self, mesh: SimplexMesh, p: int):
        if p < 0:
            raise ValueError(f"p should be non-negative, but got {p}.")
        TD = mesh.top_dimension()
        self.mesh = mesh
        self.p = p
        self.multiIndex = mesh.multi_index_matrix(p, TD)
        NC = mesh.number_of_cells()
        ldof = self.number_of_local_dofs()
        self.cell2dof = np.arange(NC*ldof, dtype=mesh.itype).reshape(NC, ldof)

    def entity_to_dof(self, etype: int, index: Index=_S):
        TD = self.mesh.top_dimension()
        if etype == TD:
            return self.cell_to_dof(index)
        else:
            raise ValueError(f"Unknown entity type: {etype}")

    def face_to_dof(self, index: Index=_S):
        raise TypeError("discontinuous Lagrange spaces have no face dofs.")

    def cell_to_dof(self, index: Index=_S) -> TensorLike:
        return self.cell2dof[index]

    def number_of_global_dofs(self) -> int:
        return self.cell2dof.size

    def number_of_local_dofs(self, doftype='cell') -> int:
        TD = self.mesh.top_dimension()
        if doftype in {'cell', TD}:
            return comb(self.p+TD, TD)
        raise ValueError(f"discontinuous Lagrange spaces have no {doftype} dofs.")

    def interpolation_points(self) -> TensorLike:
        p = self.p
        mesh = self.mesh
        if p == 0:
            return mesh.entity_barycenter('cell')
        bcs = self.multiIndex/p
        ips = mesh.bc_to_point(bcs)
        return ips.reshape(-1, mesh.geo_dimension())
