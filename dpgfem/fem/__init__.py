
from .integrator import *

from .dpg_integrator import (
    resolve_component_index,
    DPGIntegratorBase,
    DPGIntegrator,
    DPGBoundaryIntegrator,
)
from .grad_grad_integrator import GradGradIntegrator
from .flux_trace_integrator import FluxTraceIntegrator
from .eye_eye_integrator import EyeEyeIntegrator
from .trace_trace_integrator import TraceTraceIntegrator
from .flux_flux_boundary_integrator import FluxFluxBoundaryIntegrator
from .trace_trace_boundary_integrator import TraceTraceBoundaryIntegrator
from .robin_volume_integrator import RobinVolumeIntegrator
from .flux_trace_boundary_integrator import FluxTraceBoundaryIntegrator
from .neumann_volume_integrator import NeumannVolumeIntegrator

from .registry import (
    IntegratorRegistry,
    IntegratorNotRegisteredError,
    register_dpg_integrators,
    default_registry,
)

from .bilinear_form import BilinearForm
from .linear_form import LinearForm
