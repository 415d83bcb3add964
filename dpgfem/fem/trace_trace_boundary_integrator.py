from .dpg_integrator import DPGBoundaryIntegrator, face_trace_basis


class TraceTraceBoundaryIntegrator(DPGBoundaryIntegrator):
    r"""The DPG integrator for $\langle c\, u, e\rangle_{\partial\Omega}$.

    Both components must have trace elements on faces, so discontinuous
    spaces are rejected at assembly.
    """
    name = 'TraceTraceBoundary'

    def trial_face_basis(self, uspace, bcs, index):
        return face_trace_basis(uspace, bcs, index)

    def test_face_basis(self, vspace, bcs, index):
        return face_trace_basis(vspace, bcs, index)
