from ..typing import TensorLike, Index
from ..functionspace import CompoundFESpace
from ..utils import process_coef_func
from ..functional import bilinear_integral
from .integrator import CellInt
from .dpg_integrator import DPGIntegrator, broadcast_entities


class EyeEyeIntegrator(DPGIntegrator, CellInt):
    r"""The DPG integrator for $(a u, v)_T$ on each cell $T$.

    Vector valued components (such as fluxes) are multiplied by a dot
    product.
    """
    name = 'EyeEye'

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        uspace, vspace = self.get_spaces(space)
        mesh = space.mesh
        q = self.quadrature_order(uspace, vspace)
        qf = mesh.quadrature_formula(q, 'cell')
        bcs, ws = qf.get_quadrature_points_and_weights()
        cm = mesh.entity_measure('cell', index=index)
        NC = cm.shape[0]

        uphi = broadcast_entities(uspace.basis(bcs, index=index), NC)
        vphi = broadcast_entities(vspace.basis(bcs, index=index), NC)
        coef = process_coef_func(self.coef, bcs, mesh, index, dtype=dtype)
        A = bilinear_integral(vphi, uphi, ws, cm, coef)
        return A.astype(dtype, copy=False)
