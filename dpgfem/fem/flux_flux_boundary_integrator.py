from .dpg_integrator import DPGBoundaryIntegrator, face_normal_basis


class FluxFluxBoundaryIntegrator(DPGBoundaryIntegrator):
    r"""The DPG integrator for $\langle c\, q\cdot n, r\cdot n\rangle_{\partial\Omega}$,
    both components being H(div) spaces."""
    name = 'FluxFluxBoundary'

    def trial_face_basis(self, uspace, bcs, index):
        return face_normal_basis(uspace, bcs, index)

    def test_face_basis(self, vspace, bcs, index):
        return face_normal_basis(vspace, bcs, index)
