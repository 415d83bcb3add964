from math import factorial

import numpy as np
import pytest

from dpgfem.quadrature import StroudQuadrature


def monomial_integral(alpha):
    """Integral of prod(lambda_i^alpha_i) over the reference simplex divided
    by its measure."""
    d = len(alpha) - 1
    num = factorial(d)*np.prod([factorial(a) for a in alpha])
    return num/factorial(sum(alpha) + d)


class TestStroudQuadrature:

    @pytest.mark.parametrize("dim", [1, 2, 3])
    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_points_and_weights(self, dim, n):
        qf = StroudQuadrature(dim, n)
        bcs, ws = qf.get_quadrature_points_and_weights()
        assert bcs.shape == (n**dim, dim+1)
        assert len(qf) == n**dim
        np.testing.assert_allclose(np.sum(ws), 1.0, atol=1e-14)
        np.testing.assert_allclose(np.sum(bcs, axis=-1), 1.0, atol=1e-14)
        assert np.all(bcs > -1e-14)
        assert np.all(ws > 0)

    @pytest.mark.parametrize("dim, n, alpha", [
        (1, 2, (2, 1)),
        (2, 1, (1, 0, 0)),
        (2, 2, (1, 1, 1)),
        (2, 3, (3, 2, 0)),
        (3, 2, (1, 1, 0, 1)),
        (3, 3, (2, 1, 1, 1)),
    ])
    def test_exactness(self, dim, n, alpha):
        qf = StroudQuadrature(dim, n)
        bcs, ws = qf.get_quadrature_points_and_weights()
        val = np.prod(bcs**np.array(alpha), axis=-1)
        np.testing.assert_allclose(ws @ val, monomial_integral(alpha), rtol=1e-13)

    def test_invalid(self):
        with pytest.raises(ValueError):
            StroudQuadrature(0, 2)
        with pytest.raises(ValueError):
            StroudQuadrature(2, 0)


if __name__ == "__main__":
    pytest.main(['./test_stroud_quadrature.py'])
