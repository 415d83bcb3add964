from typing import Optional

import numpy as np
from scipy.sparse import csr_matrix

from .. import logger
from .form import Form
from .integrator import OpInt


class BilinearForm(Form):
    """Global matrix of a bilinear form on a compound space.

    Local matrices of an integrator are shaped (NE, vldof, uldof) and added
    at the rows of the test dofs and the columns of the trial dofs. DPG
    integrators describe the sum of integrals of C(u) D(v) plus its Hermitian
    transpose, so their conjugate transposed blocks are added at the mirrored
    positions too, unless both dof sets coincide.
    """
    _integrator_type = OpInt

    def _local_data(self, integrator, indices, dtype):
        if np.issubdtype(dtype, np.complexfloating):
            M = integrator.assembly_complex(self.space, indices)
        else:
            M = integrator.assembly_real(self.space, indices)
        ue2dof, ve2dof = integrator.to_global_dof(self.space, indices)
        return M, ue2dof, ve2dof

    def assembly(self, *, dtype=None, nthreads: int=1, progress: bool=False) -> csr_matrix:
        """Assemble the global matrix.

        Parameters:
            dtype (optional): value type, complex when any coefficient is
                complex by default.
            nthreads (int): number of threads evaluating batches.
            progress (bool): show a progress bar over the batches.
        """
        space = self.space
        gdof = space.number_of_global_dofs()
        dtype = self._result_dtype(dtype)

        values, rows, cols = [], [], []
        for integrator, (M, ue2dof, ve2dof) in self._collect(dtype, nthreads, progress):
            I = np.broadcast_to(ve2dof[:, :, None], shape=M.shape)
            J = np.broadcast_to(ue2dof[:, None, :], shape=M.shape)
            values.append(M.ravel())
            rows.append(I.ravel())
            cols.append(J.ravel())
            if getattr(integrator, 'ind1', None) != getattr(integrator, 'ind2', None):
                values.append(np.conj(M).ravel())
                rows.append(J.ravel())
                cols.append(I.ravel())

        if len(values) == 0:
            self._M = csr_matrix((gdof, gdof), dtype=dtype)
        else:
            self._M = csr_matrix(
                (np.concatenate(values), (np.concatenate(rows), np.concatenate(cols))),
                shape=(gdof, gdof), dtype=dtype
            )
        logger.info(f"BilinearForm assembled a {gdof}x{gdof} matrix "
                    f"with {self._M.nnz} non-zeros")
        return self._M

    def get_matrix(self, copy=False):
        if copy is False:
            return self._M
        else:
            return self._M.copy()

    def mult(self, x, out=None):
        if out is None:
            return self._M@x
        else:
            out[:] = self._M@x
            return out
