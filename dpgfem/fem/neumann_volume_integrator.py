from typing import Optional, Sequence

import numpy as np

from .. import logger
from ..typing import TensorLike, Index, CoefLike
from ..coefficient import as_coefficient
from ..functionspace import CompoundFESpace
from ..functional import linear_integral
from .integrator import SrcInt, CellInt, _OpIndex, _Region
from .dpg_integrator import DPGIntegratorBase, resolve_component_index, broadcast_entities


class NeumannVolumeIntegrator(DPGIntegratorBase, SrcInt, CellInt):
    r"""The DPG source integrator for $\langle G\cdot n + g, e\rangle_{\partial\Omega}$.

    Element vectors live on cells and collect the integrals over their faces
    on the boundary of the domain. `e` ranges over component `ind`.

    Parameters:
        coefs (Sequence): `[ind, g, Gx, Gy]` in 2D or `[ind, g, Gx, Gy, Gz]`
            in 3D. All values must be constant.
        dim (int): spatial dimension, 2 or 3.
    """
    name = 'NeumannVolume'

    def __init__(self, coefs: Sequence[CoefLike], dim: int=2, *,
                 q: Optional[int]=None, region: _Region=None):
        super().__init__(dim, q=q, region=region)
        coefs = list(coefs)
        if len(coefs) != dim + 2:
            raise ValueError(f"{self.name} expects {dim+2} arguments in {dim}D "
                             f"(ind, g, {', '.join('G'+x for x in 'xyz'[:dim])}), "
                             f"but got {len(coefs)}.")
        self._ind = resolve_component_index(coefs[0])
        self.g = as_coefficient(coefs[1])
        self.G = tuple(as_coefficient(c) for c in coefs[2:])
        for c in self.coefficients():
            if not c.is_constant():
                raise ValueError(f"{self.name} supports constant coefficients only, "
                                 f"but got {c!r}.")
        logger.info(f"Using DPG source integrator {self.name} on component {self._ind+1}")

    @property
    def ind(self) -> int:
        return self._ind

    def coefficients(self):
        return (self.g, ) + self.G

    def to_global_dof(self, space: CompoundFESpace, /, indices: _OpIndex=None) -> TensorLike:
        index = self.entity_selection(indices, mesh=space.mesh)
        return space.cell_to_dof(self.ind, index=index)

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        vspace = space.component(self.ind)
        mesh = space.mesh
        q = self.quadrature_order(vspace)
        qf = mesh.quadrature_formula(q, 'face')
        bcs, ws = qf.get_quadrature_points_and_weights()

        g = self.g.evaluate_const()
        G = np.array([c.evaluate_const() for c in self.G], dtype=dtype)
        n = mesh.cell_face_unit_normal(index=index)
        fm = mesh.cell_face_measure(index=index)
        isBdFace = mesh.boundary_face_flag()[mesh.cell_to_face(index=index)]
        fm = fm * isBdFace
        NC = fm.shape[0]

        F = np.zeros((NC, vspace.number_of_local_dofs('cell')), dtype=dtype)
        for i in range(mesh.number_of_nodes_of_cells()):
            cbcs = mesh.cell_face_bcs(bcs, i)
            phi = broadcast_entities(vspace.basis(cbcs, index=index), NC)
            val = n[:, i, :] @ G + g
            F += linear_integral(phi, ws, fm[:, i], val)
        return F
