from typing import Union, Optional, Callable

import numpy as np

from ..typing import TensorLike, Index


__all__ = [
    'Integrator',
    'LinearInt',
    'OpInt',
    'SrcInt',
    'CellInt',
    'FaceInt',
]

_OpIndex = Optional[Index]
_Region = Union[Callable[..., TensorLike], TensorLike, None]


class Integrator():
    """Base of all integrators.

    An integrator turns one batch of mesh entities into local data: element
    matrices or element vectors, entities along axis 0. Its `region` says
    which entities it works on. The region is an index array, a boolean
    mask, a callable `region(mesh)` producing one of those, or None for all
    entities of `etype`.

    Assembly loops call
    ```
    integrator.assembly(space, indices)
    integrator.to_global_dof(space, indices)
    ```
    with `indices` numbering positions inside the region, so that a region
    can be cut into batches without knowing what it contains.
    """
    etype: str

    def __init__(self, region: _Region=None) -> None:
        self._region = region

    def get_region(self):
        return self._region

    def _region_index(self, mesh) -> Optional[TensorLike]:
        region = self._region
        if callable(region):
            if mesh is None:
                raise RuntimeError(f"{self!r} has a region given by a callable, "
                                   "so a mesh is needed to select entities.")
            region = region(mesh)
        if isinstance(region, TensorLike) and region.dtype == np.bool_:
            region = np.nonzero(region)[0]
        return region

    def entity_selection(self, indices: _OpIndex=None, *, mesh=None) -> Index:
        """Entities of the batch `indices` of the region, all of them when
        `indices` is None."""
        region = self._region_index(mesh)
        if region is None:
            return slice(None) if indices is None else indices
        if indices is None:
            return region
        return region[indices]

    def size(self, mesh, /) -> int:
        """Number of entities in the region."""
        region = self._region_index(mesh)
        if region is None:
            if not hasattr(self, 'etype'):
                raise RuntimeError(f"{self!r} has neither a region nor an etype.")
            return mesh.count(self.etype)
        return region.shape[0]

    def __repr__(self) -> str:
        return self.__class__.__name__

    def __call__(self, *args, **kwargs):
        return self.assembly(*args, **kwargs)

    def to_global_dof(self, space, /, indices: _OpIndex=None):
        raise NotImplementedError

    def assembly(self, space, /, indices: _OpIndex=None) -> TensorLike:
        raise NotImplementedError


# markers read by the forms

class LinearInt(Integrator):
    """Local data linear in the trial and the test functions."""
    pass

class OpInt(Integrator):
    """Element matrices, for `BilinearForm`."""
    pass

class SrcInt(Integrator):
    """Element vectors, for `LinearForm`."""
    pass

class CellInt(Integrator):
    etype = 'cell'

class FaceInt(Integrator):
    etype = 'face'
