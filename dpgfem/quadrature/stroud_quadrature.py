import numpy as np
from scipy.special import roots_jacobi

from .quadrature import Quadrature


class StroudQuadrature(Quadrature):
    """Conical product (Stroud) rule on the reference simplex.

    Points are returned in barycentric coordinates, shaped (NQ, dim+1), and
    the weights sum to one, so integrals are `measure * sum(ws * f(bcs))`.
    With `n` points per direction the rule is exact for polynomials of total
    degree `2n-1`.
    """
    def __init__(self, dim: int, n: int, *, dtype=None):
        if dim < 1:
            raise ValueError(f"dim should be positive, but got {dim}.")
        if n < 1:
            raise ValueError(f"n should be positive, but got {n}.")
        self.dim = dim
        self.n = n
        super().__init__(n, dtype=dtype)

    def make(self, index: int):
        p, ws = self._compute_quadrature()
        return self._to_simplex(p), ws

    def _to_simplex(self, points):
        d = self.dim
        shape = points.shape[:-1]
        bcs = np.zeros(shape+(d+1, ), dtype=self.dtype)
        bcs[:, 0] = points[:, 0]
        for i in range(1, d):
            bcs[:, i] = points[:, i] * (1-bcs[:, :i].sum(axis=-1))
        bcs[:, d] = 1-bcs[:, :d].sum(axis=-1)
        return bcs

    def _compute_quadrature(self):
        d = self.dim
        n = self.n

        points = []
        weights = []
        for i in range(1, d+1):
            p, w, s = roots_jacobi(n, d-i, 0, mu=True)
            points.append((p+1)/2)
            weights.append(w/s)
        points = np.meshgrid(*points, indexing='ij')
        weights = np.meshgrid(*weights, indexing='ij')

        points = np.array([p.flatten() for p in points]).T
        weights = np.prod([w.flatten() for w in weights], axis=0)
        return points, weights.astype(self.dtype)
