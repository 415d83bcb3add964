from typing import Union, Optional, Tuple
from itertools import combinations_with_replacement
from math import factorial

import numpy as np

from ..typing import TensorLike, Index, _S
from ..quadrature import StroudQuadrature


##################################################
### Simplex polynomials
##################################################

def multi_index_matrix(p: int, dim: int, *, dtype=np.int_) -> TensorLike:
    """Multi-indices of the degree `p` Lagrange points on a `dim`-simplex,
    shaped (ldof, dim+1)."""
    sep = np.flip(np.array(
        tuple(combinations_with_replacement(range(p+1), dim)),
        dtype=dtype
    ), axis=0)
    raw = np.zeros((sep.shape[0], dim+2), dtype=dtype)
    raw[:, -1] = p
    raw[:, 1:-1] = sep
    return (raw[:, 1:] - raw[:, :-1])


def simplex_shape_function(bc: TensorLike, p: int, mi=None) -> TensorLike:
    if p == 1:
        return bc
    TD = bc.shape[-1] - 1
    if mi is None:
        mi = multi_index_matrix(p, TD)
    if p == 0:
        return np.ones(bc.shape[:-1] + (1, ), dtype=bc.dtype)
    c = np.arange(1, p+1, dtype=np.int_)
    P = 1.0/np.multiply.accumulate(c)
    t = np.arange(0, p)
    shape = bc.shape[:-1]+(p+1, TD+1)
    A = np.ones(shape, dtype=bc.dtype)
    A[..., 1:, :] = p*bc[..., None, :] - t.reshape(-1, 1)
    np.cumprod(A, axis=-2, out=A)
    A[..., 1:, :] *= P.reshape(-1, 1)
    idx = np.arange(TD+1)
    phi = np.prod(A[..., mi, idx], axis=-1)
    return phi


def simplex_grad_shape_function(bc: TensorLike, p: int, mi=None) -> TensorLike:
    """Derivatives of the shape functions with respect to the barycentric
    coordinates, shaped (..., ldof, TD+1)."""
    TD = bc.shape[-1] - 1
    if mi is None:
        mi = multi_index_matrix(p, TD)
    ldof = mi.shape[0]
    if p == 0:
        return np.zeros(bc.shape[:-1] + (1, TD+1), dtype=bc.dtype)

    c = np.arange(1, p+1)
    P = 1.0/np.multiply.accumulate(c)

    t = np.arange(0, p)
    shape = bc.shape[:-1]+(p+1, TD+1)
    A = np.ones(shape, dtype=bc.dtype)
    A[..., 1:, :] = p*bc[..., None, :] - t.reshape(-1, 1)

    FF = np.einsum('...jk, m->...kjm', A[..., 1:, :], np.ones(p))
    FF[..., range(p), range(p)] = p
    np.cumprod(FF, axis=-2, out=FF)
    F = np.zeros(shape, dtype=bc.dtype)
    F[..., 1:, :] = np.sum(np.tril(FF), axis=-1).swapaxes(-1, -2)
    F[..., 1:, :] *= P.reshape(-1, 1)

    np.cumprod(A, axis=-2, out=A)
    A[..., 1:, :] *= P.reshape(-1, 1)

    Q = A[..., mi, range(TD+1)]
    M = F[..., mi, range(TD+1)]

    shape = bc.shape[:-1]+(ldof, TD+1)
    R = np.zeros(shape, dtype=bc.dtype)
    for i in range(TD+1):
        idx = list(range(TD+1))
        idx.remove(i)
        R[..., i] = M[..., i]*np.prod(Q[..., idx], axis=-1)
    return R


def simplex_measure(entity: TensorLike, node: TensorLike) -> TensorLike:
    """Measure of simplices, also for simplices embedded in a higher
    dimensional space (faces)."""
    points = node[entity, :]
    TD = points.shape[-2] - 1
    edges = points[..., 1:, :] - points[..., :1, :]
    if TD == points.shape[-1]:
        return np.abs(np.linalg.det(edges))/factorial(TD)
    G = np.einsum('...ik, ...jk -> ...ij', edges, edges)
    return np.sqrt(np.linalg.det(G))/factorial(TD)


##################################################
### Simplex Mesh
##################################################

class SimplexMesh():
    """Base class of conforming simplex meshes.

    Faces are the (TD-1)-dimensional sub-simplices. The local face `i` of a
    cell is the one opposite to its vertex `i`. Every face keeps the vertex
    order it has in its first (left) cell, and `face_to_cell` stores
    `[left cell, right cell, left local index, right local index]`; on the
    boundary the right cell equals the left one.
    """
    localFace: TensorLike

    def __init__(self, node: TensorLike, cell: TensorLike):
        self.node = np.asarray(node, dtype=np.float64)
        self.cell = np.asarray(cell, dtype=np.int_)
        self.itype = self.cell.dtype
        self.ftype = self.node.dtype
        self.TD = self.cell.shape[-1] - 1
        self.meshdata = {}
        self.construct()

    def construct(self):
        NC = self.number_of_cells()
        NVC = self.TD + 1

        totalFace = self.cell[:, self.localFace].reshape(-1, self.TD)
        _, i0, j = np.unique(
            np.sort(totalFace, axis=1),
            return_index=True,
            return_inverse=True,
            axis=0
        )
        j = j.reshape(-1)
        NF = i0.shape[0]
        self.face = totalFace[i0, :]

        i1 = np.zeros(NF, dtype=self.itype)
        i1[j] = np.arange(NVC*NC, dtype=self.itype)

        self.cell2face = j.reshape(NC, NVC).astype(self.itype)
        self.face2cell = np.zeros((NF, 4), dtype=self.itype)
        self.face2cell[:, 0] = i0 // NVC
        self.face2cell[:, 1] = i1 // NVC
        self.face2cell[:, 2] = i0 % NVC
        self.face2cell[:, 3] = i1 % NVC

    # counters
    def geo_dimension(self) -> int:
        return self.node.shape[-1]

    def top_dimension(self) -> int:
        return self.TD

    GD = property(geo_dimension)

    def number_of_nodes(self) -> int:
        return self.node.shape[0]

    def number_of_cells(self) -> int:
        return self.cell.shape[0]

    def number_of_faces(self) -> int:
        return self.face.shape[0]

    def number_of_nodes_of_cells(self) -> int:
        return self.TD + 1

    def count(self, etype: Union[int, str]) -> int:
        return self.entity(etype).shape[0]

    # entities
    def _edim(self, etype: Union[int, str]) -> int:
        if isinstance(etype, int):
            return etype
        if etype == 'node':
            return 0
        if etype == 'cell':
            return self.TD
        if etype == 'face':
            return self.TD - 1
        if etype == 'edge':
            return 1
        raise ValueError(f"Unknown entity type '{etype}'.")

    def entity(self, etype: Union[int, str], index: Index=_S) -> TensorLike:
        edim = self._edim(etype)
        if edim == 0:
            return self.node[index]
        if edim == self.TD:
            return self.cell[index]
        if edim == self.TD - 1:
            return self.face[index]
        raise ValueError(f"{self.__class__.__name__} does not store entities "
                         f"of dimension {edim}.")

    def entity_measure(self, etype: Union[int, str]='cell', index: Index=_S) -> TensorLike:
        edim = self._edim(etype)
        if edim == 0:
            return np.zeros(self.node[index].shape[:-1], dtype=self.ftype)
        return simplex_measure(self.entity(edim, index), self.node)

    def entity_barycenter(self, etype: Union[int, str], index: Index=_S) -> TensorLike:
        entity = self.entity(etype, index)
        if self._edim(etype) == 0:
            return entity
        return np.mean(self.node[entity, :], axis=-2)

    # topology
    def cell_to_face(self, index: Index=_S) -> TensorLike:
        return self.cell2face[index]

    def face_to_cell(self, index: Index=_S) -> TensorLike:
        return self.face2cell[index]

    def cell_to_face_sign(self, index: Index=_S) -> TensorLike:
        """True where the cell is the left cell of its local face."""
        NC = self.number_of_cells()
        cidx = np.arange(NC, dtype=self.itype)[index]
        c2f = self.cell2face[index]
        return self.face2cell[c2f, 0] == cidx[:, None]

    def boundary_face_flag(self) -> TensorLike:
        return self.face2cell[:, 0] == self.face2cell[:, 1]

    def boundary_face_index(self) -> TensorLike:
        return np.nonzero(self.boundary_face_flag())[0]

    def boundary_cell_flag(self) -> TensorLike:
        NC = self.number_of_cells()
        flag = np.zeros(NC, dtype=np.bool_)
        flag[self.face2cell[self.boundary_face_flag(), 0]] = True
        return flag

    def boundary_cell_index(self) -> TensorLike:
        return np.nonzero(self.boundary_cell_flag())[0]

    # geometry
    def grad_lambda(self, index: Index=_S) -> TensorLike:
        """Gradients of the barycentric coordinates, shaped (NC, TD+1, GD)."""
        if self.TD != self.GD:
            raise RuntimeError("grad_lambda needs a mesh whose topological "
                               "dimension equals its geometric dimension.")
        points = self.node[self.cell[index]]
        E = points[:, 1:, :] - points[:, :1, :]
        G = np.swapaxes(np.linalg.inv(E), -1, -2)
        glambda = np.zeros(points.shape, dtype=self.ftype)
        glambda[:, 1:, :] = G
        glambda[:, 0, :] = -np.sum(G, axis=1)
        return glambda

    def face_unit_normal(self, index: Index=_S) -> TensorLike:
        """Unit normals of faces, pointing out of their left cells."""
        f2c = self.face2cell[index]
        glambda = self.grad_lambda(index=f2c[:, 0])
        n = -glambda[np.arange(f2c.shape[0]), f2c[:, 2]]
        return n/np.linalg.norm(n, axis=-1, keepdims=True)

    def cell_face_unit_normal(self, index: Index=_S) -> TensorLike:
        """Outward unit normals of all local faces, shaped (NC, TD+1, GD)."""
        glambda = self.grad_lambda(index=index)
        return -glambda/np.linalg.norm(glambda, axis=-1, keepdims=True)

    def cell_face_measure(self, index: Index=_S) -> TensorLike:
        """Measures of all local faces, shaped (NC, TD+1).

        Uses |F_i| = TD |T| |grad lambda_i|.
        """
        glambda = self.grad_lambda(index=index)
        cm = self.entity_measure('cell', index=index)
        return self.TD*cm[:, None]*np.linalg.norm(glambda, axis=-1)

    def cell_face_bcs(self, bcs: TensorLike, i: int) -> TensorLike:
        """Lift barycentric points on a face to the local face `i` of cells."""
        shape = bcs.shape[:-1] + (self.TD+1, )
        cbcs = np.zeros(shape, dtype=bcs.dtype)
        cbcs[..., self.localFace[i]] = bcs
        return cbcs

    def bc_to_point(self, bcs: TensorLike, index: Index=_S) -> TensorLike:
        """Cartesian points of barycentric points, shaped (NE, NQ, GD).

        The entity type follows from the number of barycentric coordinates.
        """
        etype = bcs.shape[-1] - 1
        points = self.node[self.entity(etype, index)]
        return np.einsum('ejk, qj -> eqk', points, bcs)

    def quadrature_formula(self, q: int, etype: Union[int, str]='cell') -> StroudQuadrature:
        """Stroud rule with `q` points per direction on cells or faces."""
        return StroudQuadrature(self._edim(etype), q, dtype=self.ftype)

    # shape function
    def multi_index_matrix(self, p: int, etype: Union[int, str]) -> TensorLike:
        return multi_index_matrix(p, self._edim(etype), dtype=self.itype)

    def shape_function(self, bcs: TensorLike, p: int=1, *, mi: Optional[TensorLike]=None) -> TensorLike:
        TD = bcs.shape[-1] - 1
        if mi is None:
            mi = multi_index_matrix(p, TD, dtype=self.itype)
        return simplex_shape_function(bcs, p, mi)

    face_shape_function = shape_function

    def grad_shape_function(self, bcs: TensorLike, p: int=1, *, index: Index=_S,
                            variables: str='x', mi: Optional[TensorLike]=None) -> TensorLike:
        """Gradients of the shape functions.

        Returns:
            Tensor: shaped (NQ, ldof, TD+1) for `variables == 'u'`, and
            (NC, NQ, ldof, GD) for `variables == 'x'`.
        """
        TD = bcs.shape[-1] - 1
        if mi is None:
            mi = multi_index_matrix(p, TD, dtype=self.itype)
        R = simplex_grad_shape_function(bcs, p, mi)
        if variables == 'u':
            return R
        elif variables == 'x':
            glambda = self.grad_lambda(index=index)
            return np.einsum('qil, cld -> cqid', R, glambda)
        else:
            raise ValueError(f"variables should be 'u' or 'x', but got '{variables}'.")

    # interpolation points
    def _ipoint_keys(self, entity: TensorLike, p: int) -> TensorLike:
        """Keys identifying the Lagrange points of entities independently of
        the entity they are seen from: the sorted (vertex, multiplicity) pairs
        of the vertices with non-zero multiplicity, padded to TD+1 pairs."""
        nv = entity.shape[-1]
        mi = multi_index_matrix(p, nv-1, dtype=self.itype)
        V = np.where(mi[None, :, :] > 0, entity[:, None, :], -1)
        A = np.broadcast_to(mi[None, :, :], V.shape)
        order = np.argsort(V, axis=-1, kind='stable')
        V = np.take_along_axis(V, order, axis=-1)
        A = np.take_along_axis(A, order, axis=-1)
        pad = self.TD + 1 - nv
        if pad > 0:
            shape = V.shape[:-1] + (pad, )
            V = np.concatenate([np.full(shape, -1, dtype=V.dtype), V], axis=-1)
            A = np.concatenate([np.zeros(shape, dtype=A.dtype), A], axis=-1)
        return np.concatenate([V, A], axis=-1).reshape(-1, 2*(self.TD+1))

    def ipoint_numbering(self, p: int) -> Tuple[TensorLike, TensorLike, int]:
        """Global numbering of the degree `p` Lagrange points.

        Returns:
            (Tensor, Tensor, int): cell-to-ipoint (NC, cldof), face-to-ipoint
            (NF, fldof) and the number of points.
        """
        NC = self.number_of_cells()
        NF = self.number_of_faces()
        ckeys = self._ipoint_keys(self.cell, p)
        fkeys = self._ipoint_keys(self.face, p)
        keys, j = np.unique(np.concatenate([ckeys, fkeys], axis=0),
                            axis=0, return_inverse=True)
        j = j.reshape(-1).astype(self.itype)
        nc = ckeys.shape[0]
        return j[:nc].reshape(NC, -1), j[nc:].reshape(NF, -1), keys.shape[0]

    def interpolation_points(self, p: int) -> TensorLike:
        c2ip, _, NIP = self.ipoint_numbering(p)
        bcs = multi_index_matrix(p, self.TD, dtype=self.itype)/p
        ips = np.zeros((NIP, self.GD), dtype=self.ftype)
        ips[c2ip] = self.bc_to_point(bcs)
        return ips

    # plotting
    def add_plot(self, axes, **kwargs):
        """Draw the mesh in matplotlib axes: all cells in 2d, the boundary
        faces in 3d."""
        from .mesh_tools import show_mesh_2d, show_mesh_3d
        if self.GD == 2:
            return show_mesh_2d(axes, self, **kwargs)
        elif self.GD == 3:
            return show_mesh_3d(axes, self, **kwargs)
        raise ValueError(f"can not plot a mesh in {self.GD} dimensions.")
