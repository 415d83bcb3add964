import numpy as np


class Function(np.ndarray):
    """Degrees of freedom of a finite element function, tied to its space.

    Functions on a `CompoundFESpace` are one flat vector; `component(i)`
    returns a view on the slice of component `i`.
    """
    def __new__(cls, space, array=None, dtype=None):
        if array is None:
            self = space.array(dtype=dtype).view(cls)
        else:
            self = np.asarray(array).view(cls)
        self.space = space
        return self

    def __array_finalize__(self, obj):
        if obj is None:
            return
        self.space = getattr(obj, 'space', None)

    def component(self, i: int):
        space = self.space
        start, stop = space.component_range(i)
        return Function(space.component(i), array=self[..., start:stop])

    def __call__(self, bc, index=np.s_[:]):
        return self.space.value(self, bc, index=index)

    def value(self, bc, index=np.s_[:]):
        return self.space.value(self, bc, index=index)

    def grad_value(self, bc, index=np.s_[:]):
        return self.space.grad_value(self, bc, index=index)

    def div_value(self, bc, index=np.s_[:]):
        return self.space.div_value(self, bc, index=index)
