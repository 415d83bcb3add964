from typing import Sequence

import numpy as np

from .mesh_base import SimplexMesh


class TetrahedronMesh(SimplexMesh):
    # local face i is opposite to vertex i
    localFace = np.array([(1, 2, 3), (0, 3, 2), (0, 1, 3), (0, 2, 1)])

    def __init__(self, node, cell):
        NVC = np.shape(cell)[-1]
        if NVC != 4:
            raise ValueError(f"TetrahedronMesh needs cells with 4 vertices, but got {NVC}.")
        super().__init__(node, cell)

    @classmethod
    def from_one_tetrahedron(cls, meshtype='iso'):
        if meshtype == 'equ':
            node = np.array([
                [0.0, 0.0, 0.0],
                [1.0, 0.0, 0.0],
                [0.5, np.sqrt(3)/2, 0.0],
                [0.5, np.sqrt(3)/6, np.sqrt(2/3)]], dtype=np.float64)
        elif meshtype == 'iso':
            node = np.array([
                [0.0, 0.0, 0.0],
                [1.0, 0.0, 0.0],
                [0.0, 1.0, 0.0],
                [0.0, 0.0, 1.0]], dtype=np.float64)
        else:
            raise ValueError(f"Unknown meshtype '{meshtype}'.")
        cell = np.array([[0, 1, 2, 3]], dtype=np.int_)
        return cls(node, cell)

    @classmethod
    def from_box(cls, box: Sequence[float]=[0, 1, 0, 1, 0, 1],
                 nx: int=10, ny: int=10, nz: int=10):
        """Generate a uniform tetrahedron mesh of a box, each of the
        nx*ny*nz cubes split into six tetrahedra around its main diagonal."""
        NN = (nx+1)*(ny+1)*(nz+1)
        X, Y, Z = np.mgrid[
            box[0]:box[1]:complex(0, nx+1),
            box[2]:box[3]:complex(0, ny+1),
            box[4]:box[5]:complex(0, nz+1)
        ]
        node = np.zeros((NN, 3), dtype=np.float64)
        node[:, 0] = X.flat
        node[:, 1] = Y.flat
        node[:, 2] = Z.flat

        idx = np.arange(NN).reshape(nx+1, ny+1, nz+1)
        c = np.zeros((nx*ny*nz, 8), dtype=np.int_)
        c[:, 0] = idx[:-1, :-1, :-1].flat
        c[:, 1] = idx[1:, :-1, :-1].flat
        c[:, 2] = idx[1:, 1:, :-1].flat
        c[:, 3] = idx[:-1, 1:, :-1].flat
        c[:, 4] = idx[:-1, :-1, 1:].flat
        c[:, 5] = idx[1:, :-1, 1:].flat
        c[:, 6] = idx[1:, 1:, 1:].flat
        c[:, 7] = idx[:-1, 1:, 1:].flat

        localCell = np.array([
            (0, 1, 2, 6), (0, 2, 3, 6), (0, 3, 7, 6),
            (0, 7, 4, 6), (0, 4, 5, 6), (0, 5, 1, 6)])
        cell = c[:, localCell].reshape(-1, 4)
        return cls(node, cell)
