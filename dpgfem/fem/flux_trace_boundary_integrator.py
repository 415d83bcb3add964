from .dpg_integrator import DPGBoundaryIntegrator, face_normal_basis, face_trace_basis


class FluxTraceBoundaryIntegrator(DPGBoundaryIntegrator):
    r"""The DPG integrator for $\langle c\, q\cdot n, w\rangle_{\partial\Omega}$,
    with the flux $q$ in component `ind1` and the trace $w$ in `ind2`."""
    name = 'FluxTraceBoundary'

    def trial_face_basis(self, uspace, bcs, index):
        return face_normal_basis(uspace, bcs, index)

    def test_face_basis(self, vspace, bcs, index):
        return face_trace_basis(vspace, bcs, index)
