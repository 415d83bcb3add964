from ..typing import TensorLike, Index
from ..functionspace import CompoundFESpace
from .integrator import CellInt
from .dpg_integrator import DPGIntegrator


class TraceTraceIntegrator(DPGIntegrator, CellInt):
    r"""The DPG integrator for $\langle c\, u, v\rangle_{\partial T}$, summed
    over all faces of each cell $T$."""
    name = 'TraceTrace'

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        uspace, vspace = self.get_spaces(space)

        def trial(cbcs, i):
            return uspace.basis(cbcs, index=index)

        def test(cbcs, i):
            return vspace.basis(cbcs, index=index)

        return self._facet_assembly(uspace, vspace, index, dtype, trial, test)
