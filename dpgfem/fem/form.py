from typing import List, Optional, Iterable, Tuple
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from tqdm import tqdm

from .. import logger
from .integrator import Integrator


class Form():
    """Common part of global forms: integrator collection and batched,
    optionally threaded, evaluation of local data.

    Parameters:
        space: the (compound) space of the form.
        batch_size (int, optional): number of entities per batch. Defaults to
            the whole region in one batch, or one batch per thread.
    """
    _integrator_type = Integrator

    def __init__(self, space, *, batch_size: Optional[int]=None):
        self.space = space
        self.integrators: List[Integrator] = []
        self.batch_size = batch_size

    def __len__(self) -> int:
        return len(self.integrators)

    def add_integrator(self, *I: Integrator):
        """Add integrator(s) to the form."""
        for item in I:
            if isinstance(item, (list, tuple)):
                self.add_integrator(*item)
            elif isinstance(item, Integrator):
                if not isinstance(item, self._integrator_type):
                    raise TypeError(f"{item!r} can not be added to a "
                                    f"{self.__class__.__name__}.")
                self.integrators.append(item)
            else:
                raise TypeError(f"Unsupported type {item.__class__.__name__} "
                                "found in the inputs.")
        return self

    def _batches(self, integrator: Integrator, nthreads: int) -> List[Optional[np.ndarray]]:
        NE = integrator.size(self.space.mesh)
        if self.batch_size is not None:
            nbatch = max(1, -(-NE // self.batch_size))
        else:
            nbatch = max(1, nthreads)
        if nbatch == 1:
            return [None]
        return [b for b in np.array_split(np.arange(NE), nbatch) if b.shape[0] > 0]

    def _local_data(self, integrator: Integrator, indices, dtype) -> Tuple:
        raise NotImplementedError

    def _collect(self, dtype, nthreads: int=1, progress: bool=False) -> Iterable[Tuple]:
        """Yield the local data of all integrators in a fixed order."""
        if nthreads < 1:
            raise ValueError(f"nthreads should be positive, but got {nthreads}.")
        tasks = [(I, b) for I in self.integrators for b in self._batches(I, nthreads)]
        bar = tqdm(total=len(tasks), disable=not progress,
                   desc=f"{self.__class__.__name__} assembly")

        try:
            if nthreads == 1:
                for integrator, indices in tasks:
                    yield integrator, self._local_data(integrator, indices, dtype)
                    bar.update()
            else:
                with ThreadPoolExecutor(max_workers=nthreads) as executor:
                    futures = [executor.submit(self._local_data, I, b, dtype) for I, b in tasks]
                    for (integrator, _), future in zip(tasks, futures):
                        yield integrator, future.result()
                        bar.update()
        finally:
            bar.close()
        logger.info(f"{self.__class__.__name__} evaluated {len(tasks)} batches "
                    f"of {len(self.integrators)} integrators with {nthreads} thread(s)")

    def _result_dtype(self, dtype):
        if dtype is not None:
            return np.dtype(dtype)
        if any(I.is_complex() for I in self.integrators if hasattr(I, 'is_complex')):
            return np.dtype(np.complex128)
        return np.dtype(self.space.ftype)
