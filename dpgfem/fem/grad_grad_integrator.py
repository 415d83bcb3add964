from ..typing import TensorLike, Index
from ..functionspace import CompoundFESpace
from ..utils import process_coef_func
from ..functional import bilinear_integral
from .integrator import CellInt
from .dpg_integrator import DPGIntegrator


class GradGradIntegrator(DPGIntegrator, CellInt):
    r"""The DPG integrator for $(a \nabla u, \nabla v)_T$ on each cell $T$.

    Both components need gradients of their basis functions, so they are
    Lagrange spaces.
    """
    name = 'GradGrad'

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        uspace, vspace = self.get_spaces(space)
        mesh = space.mesh
        q = self.quadrature_order(uspace, vspace)
        qf = mesh.quadrature_formula(q, 'cell')
        bcs, ws = qf.get_quadrature_points_and_weights()
        cm = mesh.entity_measure('cell', index=index)

        ugphi = uspace.grad_basis(bcs, index=index)
        vgphi = vspace.grad_basis(bcs, index=index)
        coef = process_coef_func(self.coef, bcs, mesh, index, dtype=dtype)
        A = bilinear_integral(vgphi, ugphi, ws, cm, coef)
        return A.astype(dtype, copy=False)
