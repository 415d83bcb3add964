from typing import Optional, Sequence, Tuple

import numpy as np

from .. import logger
from ..typing import TensorLike, Index, CoefLike
from ..coefficient import Coefficient, as_coefficient
from ..functionspace import CompoundFESpace, FunctionSpace
from ..utils import process_coef_func
from ..functional import bilinear_integral
from .integrator import LinearInt, OpInt, FaceInt, _OpIndex, _Region


__all__ = [
    'resolve_component_index',
    'DPGIntegratorBase',
    'DPGIntegrator',
    'DPGBoundaryIntegrator',
]


def resolve_component_index(coef: CoefLike) -> int:
    """Turn a 1-based component number given as a coefficient into a 0-based
    index.

    Real coefficients are read with `evaluate_const`, complex ones are
    evaluated at the origin and their real part is taken. The value is
    truncated to an integer.
    """
    coef = as_coefficient(coef)
    if not coef.is_constant():
        raise ValueError(f"component index should be given by a constant, "
                         f"but got {coef!r}.")
    if coef.is_complex():
        val = np.real(np.ravel(coef(np.zeros((1, 3))))[0])
    else:
        val = coef.evaluate_const()
    ind = int(val) - 1
    if ind < 0:
        raise ValueError(f"component numbers start from 1, but got {val}.")
    return ind


def boundary_face_region(mesh):
    return mesh.boundary_face_index()


class DPGIntegratorBase(LinearInt):
    """Common part of DPG integrators: the spatial dimension they are built
    for, the physical coefficients, and the real/complex assembly dispatch.

    Subclasses implement `_assembly(space, index, dtype)` once for both value
    types; `assembly_real` and `assembly_complex` forward to it.
    """
    name: str = 'DPG'
    vb: str = 'vol'

    def __init__(self, dim: int=2, *, q: Optional[int]=None, region: _Region=None):
        if dim not in (2, 3):
            raise ValueError(f"DPG integrators support dimension 2 or 3, but got {dim}.")
        if q is not None and q < 1:
            raise ValueError(f"q should be positive, but got {q}.")
        super().__init__(region=region)
        self.D = dim
        self.q = q

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, dim={self.D})"

    @property
    def boundary_form(self) -> bool:
        return self.vb == 'bnd'

    def dim_element(self) -> int:
        return self.D - 1 if self.boundary_form else self.D

    def dim_space(self) -> int:
        return self.D

    def coefficients(self) -> Tuple[Coefficient, ...]:
        raise NotImplementedError

    def is_complex(self) -> bool:
        return any(c.is_complex() for c in self.coefficients())

    def check_space(self, space: CompoundFESpace):
        TD = space.mesh.top_dimension()
        if TD != self.D:
            raise ValueError(f"{self.name} was created for dimension {self.D}, "
                             f"but the mesh has dimension {TD}.")

    def quadrature_order(self, *spaces: FunctionSpace) -> int:
        if self.q is not None:
            return self.q
        return (sum(s.basis_degree for s in spaces) + 1)//2 + 1

    def assembly(self, space: CompoundFESpace, /, indices: _OpIndex=None, *,
                 out: Optional[TensorLike]=None) -> TensorLike:
        """Element blocks of the batch `indices` of the integration region.

        The value type follows `out` when a buffer is given, the coefficient
        type otherwise.
        """
        if out is not None:
            use_complex = np.iscomplexobj(out)
        else:
            use_complex = self.is_complex()

        if use_complex:
            return self.assembly_complex(space, indices, out=out)
        return self.assembly_real(space, indices, out=out)

    def assembly_real(self, space: CompoundFESpace, /, indices: _OpIndex=None, *,
                      out: Optional[TensorLike]=None) -> TensorLike:
        if self.is_complex():
            raise TypeError(f"{self.name} has a complex coefficient and can not "
                            "produce real element matrices.")
        if out is not None and np.iscomplexobj(out):
            raise TypeError("assembly_real got a complex output buffer.")
        return self._run(space, indices, np.float64, out)

    def assembly_complex(self, space: CompoundFESpace, /, indices: _OpIndex=None, *,
                         out: Optional[TensorLike]=None) -> TensorLike:
        if out is not None and not np.iscomplexobj(out):
            raise TypeError("assembly_complex needs a complex output buffer.")
        return self._run(space, indices, np.complex128, out)

    def _run(self, space, indices, dtype, out):
        self.check_space(space)
        index = self.entity_selection(indices, mesh=space.mesh)
        block = self._assembly(space, index, dtype)
        if out is None:
            return block
        if out.shape != block.shape:
            raise ValueError(f"output buffer of shape {out.shape} does not match "
                             f"the element data of shape {block.shape}.")
        out += block
        return out

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        raise NotImplementedError


class DPGIntegrator(DPGIntegratorBase, OpInt):
    """Integrator of a bilinear form coupling two components of a compound
    space.

    The trial function `u` ranges over component `ind1` and the test function
    `v` over component `ind2`. Element matrices are shaped (NE, vldof, uldof):
    entry (i, j) is the form evaluated with the i-th basis function of `ind2`
    and the j-th basis function of `ind1`.

    Parameters:
        coefs (Sequence): `[ind1, ind2, coef]` where `ind1` and `ind2` are
            1-based component numbers and `coef` the physical coefficient.
        dim (int): spatial dimension, 2 or 3.
        q (int, optional): quadrature points per direction.
        region (optional): entities to integrate on.
    """
    def __init__(self, coefs: Sequence[CoefLike], dim: int=2, *,
                 q: Optional[int]=None, region: _Region=None):
        super().__init__(dim, q=q, region=region)
        coefs = list(coefs)
        if len(coefs) != 3:
            raise ValueError(f"{self.name} expects 3 arguments (ind1, ind2, coef), "
                             f"but got {len(coefs)}.")
        self._ind1 = resolve_component_index(coefs[0])
        self._ind2 = resolve_component_index(coefs[1])
        self.coef = as_coefficient(coefs[2])
        self.check_coefficient()
        logger.info(f"Using DPG integrator {self.name} with components "
                    f"{self._ind1+1} and {self._ind2+1}")

    @property
    def ind1(self) -> int:
        return self._ind1

    @property
    def ind2(self) -> int:
        return self._ind2

    def check_coefficient(self):
        pass

    def coefficients(self):
        return (self.coef, )

    def is_symmetric(self) -> bool:
        return not self.coef.is_complex()

    def get_spaces(self, space: CompoundFESpace) -> Tuple[FunctionSpace, FunctionSpace]:
        """The trial space (component `ind1`) and the test space (component
        `ind2`)."""
        return space.component(self.ind1), space.component(self.ind2)

    def to_global_dof(self, space: CompoundFESpace, /, indices: _OpIndex=None):
        """Return `(ue2dof, ve2dof)`, the global dofs of the trial and the
        test components on the integration entities."""
        index = self.entity_selection(indices, mesh=space.mesh)
        if self.etype == 'cell':
            return (space.cell_to_dof(self.ind1, index=index),
                    space.cell_to_dof(self.ind2, index=index))
        return (space.face_to_dof(self.ind1, index=index),
                space.face_to_dof(self.ind2, index=index))

    def _facet_assembly(self, uspace: FunctionSpace, vspace: FunctionSpace,
                        index: Index, dtype, ubasis, vbasis, *,
                        boundary_only: bool=False) -> TensorLike:
        """Sum of the integrals of `coef * u * v` over the faces of each cell.

        `ubasis` and `vbasis` are called as `basis(cbcs, i)` with the face
        quadrature points lifted to the local face `i` and return values
        shaped (NC, NQ, ldof). With `boundary_only`, faces inside the domain
        are skipped.
        """
        mesh = uspace.mesh
        q = self.quadrature_order(uspace, vspace)
        qf = mesh.quadrature_formula(q, 'face')
        bcs, ws = qf.get_quadrature_points_and_weights()

        fm = mesh.cell_face_measure(index=index)
        if boundary_only:
            isBdFace = mesh.boundary_face_flag()[mesh.cell_to_face(index=index)]
            fm = fm * isBdFace
        NC = fm.shape[0]
        uldof = uspace.number_of_local_dofs('cell')
        vldof = vspace.number_of_local_dofs('cell')
        A = np.zeros((NC, vldof, uldof), dtype=dtype)

        for i in range(mesh.number_of_nodes_of_cells()):
            cbcs = mesh.cell_face_bcs(bcs, i)
            uphi = broadcast_entities(ubasis(cbcs, i), NC)
            vphi = broadcast_entities(vbasis(cbcs, i), NC)
            coef = process_coef_func(self.coef, cbcs, mesh, index, dtype=dtype)
            A += bilinear_integral(vphi, uphi, ws, fm[:, i], coef)
        return A


def broadcast_entities(phi: TensorLike, NE: int) -> TensorLike:
    """Broadcast basis values shared by all entities, shaped (1, NQ, ...),
    to (NE, NQ, ...)."""
    return np.broadcast_to(phi, (NE, ) + phi.shape[1:])


class DPGBoundaryIntegrator(DPGIntegrator, FaceInt):
    """DPG integrators on the faces of the domain boundary.

    Element matrices live on boundary faces and couple the face dofs of the
    two components. The integration region defaults to all boundary faces.
    Subclasses choose the face bases with `trial_face_basis` and
    `test_face_basis`.
    """
    vb = 'bnd'

    def __init__(self, coefs: Sequence[CoefLike], dim: int=2, *,
                 q: Optional[int]=None, region: _Region=None):
        if region is None:
            region = boundary_face_region
        super().__init__(coefs, dim, q=q, region=region)

    def trial_face_basis(self, uspace: FunctionSpace, bcs: TensorLike, index: Index) -> TensorLike:
        raise NotImplementedError

    def test_face_basis(self, vspace: FunctionSpace, bcs: TensorLike, index: Index) -> TensorLike:
        raise NotImplementedError

    def _assembly(self, space: CompoundFESpace, index: Index, dtype) -> TensorLike:
        uspace, vspace = self.get_spaces(space)
        mesh = space.mesh
        q = self.quadrature_order(uspace, vspace)
        qf = mesh.quadrature_formula(q, 'face')
        bcs, ws = qf.get_quadrature_points_and_weights()
        fm = mesh.entity_measure('face', index=index)
        NF = fm.shape[0]

        uphi = broadcast_entities(self.trial_face_basis(uspace, bcs, index), NF)
        vphi = broadcast_entities(self.test_face_basis(vspace, bcs, index), NF)
        coef = process_coef_func(self.coef, bcs, mesh, index, dtype=dtype)
        A = bilinear_integral(vphi, uphi, ws, fm, coef)
        return A.astype(dtype, copy=False)


def face_normal_basis(space: FunctionSpace, bcs: TensorLike, index: Index) -> TensorLike:
    """Normal flux traces of an H(div) space on faces."""
    if not hasattr(space, 'face_normal_basis'):
        raise TypeError(f"{space} has no normal flux traces on faces.")
    return space.face_normal_basis(bcs, index=index)


def face_trace_basis(space: FunctionSpace, bcs: TensorLike, index: Index) -> TensorLike:
    """Traces of a scalar space on faces."""
    if not space.has_face_elements or not hasattr(space, 'face_basis'):
        raise TypeError(f"{space} has no trace elements on faces.")
    return space.face_basis(bcs, index=index)
