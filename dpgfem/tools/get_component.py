from typing import Any, Mapping

import numpy as np

from .. import logger
from ..functionspace import Function


class GetComponent():
    """Copy one component of a compound finite element function into a
    function on the component space.

    Parameters:
        functions (Mapping): grid functions by name.
        flags (Mapping): the options
            - `compoundgf`: name of the function on the compound space;
            - `comp`: 1-based number of the component, 1 by default;
            - `componentgf`: name of the function receiving the component;
            - `re`: copy only the real part;
            - `im`: copy only the imaginary part.

    Usage example:
        GetComponent(functions, {'compoundgf': 'uh', 'comp': 2,
                                 'componentgf': 'qh', 're': True}).do()
    """
    def __init__(self, functions: Mapping[str, Function], flags: Mapping[str, Any]):
        for key in ('compoundgf', 'componentgf'):
            if flags.get(key) is None:
                raise ValueError(f"GetComponent needs the flag '{key}'.")
        self.src = self._lookup(functions, flags['compoundgf'])
        self.dst = self._lookup(functions, flags['componentgf'])

        comp = int(flags.get('comp', 1))
        if comp < 1:
            raise ValueError(f"component numbers start from 1, but got {comp}.")
        self.ind = comp - 1

        self.re = bool(flags.get('re', False))
        self.im = bool(flags.get('im', False))
        if self.re and self.im:
            raise ValueError("the flags 're' and 'im' can not be used together.")

    @staticmethod
    def _lookup(functions, name: str):
        try:
            return functions[name]
        except KeyError:
            raise KeyError(f"No grid function named '{name}'.") from None

    def do(self) -> Function:
        src = self.src.component(self.ind)
        dst = self.dst
        part = 'REAL part' if self.re else 'IMAG part' if self.im else 'all'
        logger.info(f"GetComponent {self.ind+1}, of type "
                    f"{getattr(dst, 'space', dst).__class__.__name__}, {part}")

        if dst.shape != src.shape:
            raise ValueError(f"component {self.ind+1} has {src.shape[-1]} dofs, but the "
                             f"destination function has {dst.shape[-1]}.")

        if self.re:
            dst[:] = np.real(src)
        elif self.im:
            dst[:] = np.imag(src)
        else:
            if np.iscomplexobj(src) and not np.iscomplexobj(dst):
                raise TypeError("can not copy a complex component into a real function "
                                "without the 're' or 'im' flag.")
            dst[:] = src
        return dst
