import numpy as np
import pytest

from dpgfem.mesh import TriangleMesh, TetrahedronMesh
from dpgfem.functionspace import LagrangeFESpace, RaviartThomasFESpace, CompoundFESpace
from dpgfem.coefficient import FunctionCoefficient
from dpgfem.fem import NeumannVolumeIntegrator, LinearForm

from dpg_integrator_data import neumann_data


class TestNeumannVolumeInterface:

    @pytest.mark.parametrize("dim, coefs", [
        (2, [1, 0.0, 1.0, 1.0]),
        (3, [1, 0.0, 1.0, 1.0, 1.0]),
    ])
    def test_argument_count(self, dim, coefs):
        I = NeumannVolumeIntegrator(coefs, dim=dim)
        assert I.ind == 0
        assert I.vb == 'vol'
        assert not I.boundary_form
        assert I.dim_element() == dim

    @pytest.mark.parametrize("dim, coefs", [
        (2, [1, 0.0, 1.0]),
        (2, [1, 0.0, 1.0, 1.0, 1.0]),
        (3, [1, 0.0, 1.0, 1.0]),
        (3, [1, 0.0, 1.0, 1.0, 1.0, 1.0]),
    ])
    def test_wrong_argument_count(self, dim, coefs):
        with pytest.raises(ValueError):
            NeumannVolumeIntegrator(coefs, dim=dim)

    def test_constant_only(self):
        g = FunctionCoefficient(lambda p: p[..., 0])
        with pytest.raises(ValueError):
            NeumannVolumeIntegrator([1, g, 0.0, 0.0])
        with pytest.raises(ValueError):
            NeumannVolumeIntegrator([1, 0.0, g, 0.0])

    def test_complex(self):
        I = NeumannVolumeIntegrator([2, 1j, 0.0, 0.0])
        assert I.ind == 1
        assert I.is_complex()


class TestNeumannVolumeAssembly:

    @pytest.mark.parametrize("data", neumann_data)
    def test_one_triangle(self, data):
        mesh = TriangleMesh.from_one_triangle()
        space = CompoundFESpace(LagrangeFESpace(mesh, 1))
        F = NeumannVolumeIntegrator(data["coefs"]).assembly(space)
        np.testing.assert_allclose(F, data["vector"], atol=1e-14)

    def test_component(self):
        mesh = TriangleMesh.from_box(nx=2, ny=2)
        space = CompoundFESpace(RaviartThomasFESpace(mesh), LagrangeFESpace(mesh, 2, ctype='D'))
        I = NeumannVolumeIntegrator([2, 1.0, 0.0, 0.0])
        F = I.assembly(space)
        assert F.shape == (mesh.number_of_cells(), 6)
        np.testing.assert_array_equal(I.to_global_dof(space), space.cell_to_dof(1))
        np.testing.assert_allclose(np.sum(F), 4.0, atol=1e-12)

    @pytest.mark.parametrize("G", [(1.0, 0.0, 0.0), (0.3, -2.0, 1.0)])
    def test_divergence_free(self, G):
        # a constant G has no net flux through a closed surface
        mesh = TetrahedronMesh.from_box(nx=2, ny=2, nz=1)
        space = CompoundFESpace(LagrangeFESpace(mesh, 1))
        lform = LinearForm(space)
        lform.add_integrator(NeumannVolumeIntegrator([1, 0.0, *G], dim=3))
        F = lform.assembly()
        np.testing.assert_allclose(np.sum(F), 0.0, atol=1e-12)

    def test_complex_vector(self):
        mesh = TriangleMesh.from_one_triangle()
        space = CompoundFESpace(LagrangeFESpace(mesh, 1))
        F = NeumannVolumeIntegrator([1, 2j, 0.0, 0.0]).assembly(space)
        assert F.dtype == np.complex128
        np.testing.assert_allclose(F, 2j*neumann_data[0]["vector"], atol=1e-14)


if __name__ == "__main__":
    pytest.main(['./test_neumann_volume_integrator.py'])
