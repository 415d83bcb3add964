import numpy as np

from .. import logger
from .form import Form
from .integrator import SrcInt


class LinearForm(Form):
    """Global vector of a linear form on a compound space."""
    _integrator_type = SrcInt

    def _local_data(self, integrator, indices, dtype):
        if np.issubdtype(dtype, np.complexfloating):
            F = integrator.assembly_complex(self.space, indices)
        else:
            F = integrator.assembly_real(self.space, indices)
        e2dof = integrator.to_global_dof(self.space, indices)
        return F, e2dof

    def assembly(self, *, dtype=None, nthreads: int=1, progress: bool=False) -> np.ndarray:
        """Assemble the global vector, see `BilinearForm.assembly`."""
        gdof = self.space.number_of_global_dofs()
        dtype = self._result_dtype(dtype)

        self._V = np.zeros((gdof, ), dtype=dtype)
        for _, (F, e2dof) in self._collect(dtype, nthreads, progress):
            np.add.at(self._V, e2dof, F)
        logger.info(f"LinearForm assembled a vector of length {gdof}")
        return self._V

    def get_vector(self, copy=False):
        if copy is False:
            return self._V
        else:
            return self._V.copy()
