from ..typing import TensorLike, Index
from ..functionspace import CompoundFESpace
from .integrator import CellInt
from .dpg_integrator import DPGIntegrator


class RobinVolumeIntegrator(DPGIntegrator, CellInt):
    r"""The DPG integrator for $\langle c\, u, e\rangle_{\partial T \cap \partial\Omega}$.

    A volume integrator: element matrices live on cells, the integral is
    taken over the faces of the cells that lie on the boundary of the domain.
    Cells without boundary faces get zero blocks. Only constant coefficients
    are supported.
    """
    name = 'RobinVolume'

    def check_coefficient(self):
        if not self.coef.is_constant():
            raise ValueError(f"{self.name} supports constant coefficients only, "
                             f"but got {self.coef!r}.")

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        uspace, vspace = self.get_spaces(space)

        def trial(cbcs, i):
            return uspace.basis(cbcs, index=index)

        def test(cbcs, i):
            return vspace.basis(cbcs, index=index)

        return self._facet_assembly(uspace, vspace, index, dtype, trial, test,
                                    boundary_only=True)
