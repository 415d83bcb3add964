from typing import Sequence

import numpy as np

from .mesh_base import SimplexMesh


class TriangleMesh(SimplexMesh):
    # local edge i is opposite to vertex i
    localFace = np.array([(1, 2), (2, 0), (0, 1)])

    def __init__(self, node, cell):
        NVC = np.shape(cell)[-1]
        if NVC != 3:
            raise ValueError(f"TriangleMesh needs cells with 3 vertices, but got {NVC}.")
        super().__init__(node, cell)
        self.edge = self.face
        self.edge2cell = self.face2cell
        self.cell2edge = self.cell2face

    def number_of_edges(self) -> int:
        return self.number_of_faces()

    @classmethod
    def from_one_triangle(cls, meshtype='iso'):
        if meshtype == 'equ':
            node = np.array([
                [0.0, 0.0],
                [1.0, 0.0],
                [0.5, np.sqrt(3)/2]], dtype=np.float64)
        elif meshtype == 'iso':
            node = np.array([
                [0.0, 0.0],
                [1.0, 0.0],
                [0.0, 1.0]], dtype=np.float64)
        else:
            raise ValueError(f"Unknown meshtype '{meshtype}'.")
        cell = np.array([[0, 1, 2]], dtype=np.int_)
        return cls(node, cell)

    @classmethod
    def from_box(cls, box: Sequence[float]=[0, 1, 0, 1], nx: int=10, ny: int=10):
        """Generate a uniform triangle mesh of a rectangle, each of the
        nx*ny squares split into two triangles."""
        NN = (nx+1)*(ny+1)
        X, Y = np.mgrid[
            box[0]:box[1]:complex(0, nx+1),
            box[2]:box[3]:complex(0, ny+1)
        ]
        node = np.zeros((NN, 2), dtype=np.float64)
        node[:, 0] = X.flat
        node[:, 1] = Y.flat

        idx = np.arange(NN).reshape(nx+1, ny+1)
        v0 = idx[0:-1, 0:-1].flat
        v1 = idx[1:, 0:-1].flat
        v2 = idx[1:, 1:].flat
        v3 = idx[0:-1, 1:].flat

        NC = 2*nx*ny
        cell = np.zeros((NC, 3), dtype=np.int_)
        cell[:NC//2, 0] = v0
        cell[:NC//2, 1] = v1
        cell[:NC//2, 2] = v2
        cell[NC//2:, 0] = v0
        cell[NC//2:, 1] = v2
        cell[NC//2:, 2] = v3
        return cls(node, cell)
