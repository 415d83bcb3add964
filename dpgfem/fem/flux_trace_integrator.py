import numpy as np

from ..typing import TensorLike, Index
from ..functionspace import CompoundFESpace
from .integrator import CellInt
from .dpg_integrator import DPGIntegrator


class FluxTraceIntegrator(DPGIntegrator, CellInt):
    r"""The DPG integrator for $\langle d\, q\cdot n, v\rangle_{\partial T}$,
    summed over all faces of each cell $T$ with its outward normal $n$.

    The flux $q$ ranges over an H(div) component `ind1`, the test function
    $v$ over a scalar component `ind2`.
    """
    name = 'FluxTrace'

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        uspace, vspace = self.get_spaces(space)
        if not hasattr(uspace, 'div_basis'):
            raise TypeError(f"{self.name} needs an H(div) space as component "
                            f"{self.ind1+1}, but got {uspace}.")
        n = space.mesh.cell_face_unit_normal(index=index)

        def flux(cbcs, i):
            phi = uspace.basis(cbcs, index=index)
            return np.einsum('cqld, cd -> cql', phi, n[:, i, :])

        def test(cbcs, i):
            return vspace.basis(cbcs, index=index)

        return self._facet_assembly(uspace, vspace, index, dtype, flux, test)
