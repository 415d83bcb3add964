import threading
from typing import Optional, Dict, List, Sequence

from .. import logger
from ..typing import CoefLike
from .integrator import Integrator


class IntegratorNotRegisteredError(KeyError):
    """Custom exception indicating no integrator is registered under a name"""
    pass


class IntegratorRegistry:
    """
    Name-keyed registry of integrator classes.

    Usage example:
        registry = register_dpg_integrators(IntegratorRegistry())
        integrator = registry.create('gradgrad', [1, 3, 1.0], dim=2)
    """
    def __init__(self):
        self._mapping: Dict[str, type] = {}
        self._lock = threading.Lock()

    def register(self, name: Optional[str] = None, integrator_cls: Optional[type] = None):
        """
        Register an integrator class, or return a decorator doing so.
        Parameters:
            name: the key under which to register the class; defaults to the class name in lowercase.
            integrator_cls: the class; when omitted a decorator is returned.
        """
        def decorator(cls):
            if not (isinstance(cls, type) and issubclass(cls, Integrator)):
                raise TypeError(f"only Integrator classes can be registered, but got {cls!r}.")
            key = name or cls.__name__.lower()
            with self._lock:
                if key in self._mapping:
                    raise KeyError(f"Integrator '{key}' already registered")
                self._mapping[key] = cls
            logger.debug(f"Registered integrator {cls.__name__} as '{key}'")
            return cls

        if integrator_cls is not None:
            return decorator(integrator_cls)
        return decorator

    def __contains__(self, name: str) -> bool:
        return name in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def names(self) -> List[str]:
        """Return the list of all registered names."""
        return list(self._mapping.keys())

    def get(self, name: str) -> type:
        try:
            return self._mapping[name]
        except KeyError:
            raise IntegratorNotRegisteredError(
                f"No integrator registered as '{name}'. "
                f"Available: {', '.join(self.names()) or 'none'}"
            ) from None

    def create(self, name: str, coefs: Sequence[CoefLike], dim: int = 2, **kwargs) -> Integrator:
        """Instantiate the integrator registered as `name`."""
        return self.get(name)(coefs, dim, **kwargs)


def register_dpg_integrators(registry: IntegratorRegistry) -> IntegratorRegistry:
    """Register the DPG integrators under their configuration names."""
    from .grad_grad_integrator import GradGradIntegrator
    from .flux_trace_integrator import FluxTraceIntegrator
    from .eye_eye_integrator import EyeEyeIntegrator
    from .trace_trace_integrator import TraceTraceIntegrator
    from .flux_flux_boundary_integrator import FluxFluxBoundaryIntegrator
    from .trace_trace_boundary_integrator import TraceTraceBoundaryIntegrator
    from .robin_volume_integrator import RobinVolumeIntegrator
    from .flux_trace_boundary_integrator import FluxTraceBoundaryIntegrator
    from .neumann_volume_integrator import NeumannVolumeIntegrator

    registry.register('gradgrad', GradGradIntegrator)
    registry.register('flxtrc', FluxTraceIntegrator)
    registry.register('eyeeye', EyeEyeIntegrator)
    registry.register('trctrc', TraceTraceIntegrator)
    registry.register('flxflxbdry', FluxFluxBoundaryIntegrator)
    registry.register('trctrcbdry', TraceTraceBoundaryIntegrator)
    registry.register('robinvol', RobinVolumeIntegrator)
    registry.register('flxtrcbdry', FluxTraceBoundaryIntegrator)
    registry.register('neumannvol', NeumannVolumeIntegrator)
    return registry


default_registry = IntegratorRegistry()
_init_lock = threading.Lock()


def init() -> IntegratorRegistry:
    """Populate `default_registry` with the DPG integrators, once."""
    with _init_lock:
        if 'gradgrad' not in default_registry:
            register_dpg_integrators(default_registry)
    return default_registry
