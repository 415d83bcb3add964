import numpy as np
import pytest

from dpgfem.mesh import TriangleMesh, TetrahedronMesh
from dpgfem.functionspace import (
    LagrangeFESpace, RaviartThomasFESpace, CompoundFESpace
)
from dpgfem.coefficient import FunctionCoefficient
from dpgfem.decorator import cartesian
from dpgfem.fem import (
    resolve_component_index,
    GradGradIntegrator,
    EyeEyeIntegrator,
    FluxTraceIntegrator,
    TraceTraceIntegrator,
    RobinVolumeIntegrator,
    FluxFluxBoundaryIntegrator,
)
from dpgfem.fem.registry import register_dpg_integrators, IntegratorRegistry

from dpg_integrator_data import *


registry = register_dpg_integrators(IntegratorRegistry())


def make_space(mesh, specs):
    spaces = []
    for kind, p, ctype in specs:
        if kind == "RT":
            spaces.append(RaviartThomasFESpace(mesh, p))
        else:
            spaces.append(LagrangeFESpace(mesh, p, ctype=ctype))
    return CompoundFESpace(*spaces)


@cartesian
def varying(p):
    x = p[..., 0]
    y = p[..., 1]
    return 1 + x*y


class TestComponentIndex:

    @pytest.mark.parametrize("value, expected", [(1, 0), (3, 2), (2.7, 1), (2+5j, 1), (1.0, 0)])
    def test_resolve(self, value, expected):
        assert resolve_component_index(value) == expected

    @pytest.mark.parametrize("value", [0, -1, 0.5])
    def test_non_positive(self, value):
        with pytest.raises(ValueError):
            resolve_component_index(value)

    def test_varying_index(self):
        with pytest.raises(ValueError):
            resolve_component_index(FunctionCoefficient(varying))

    def test_indices_of_integrator(self):
        I = GradGradIntegrator([1, 3, 1.0])
        assert I.ind1 == 0
        assert I.ind2 == 2
        with pytest.raises(AttributeError):
            I.ind1 = 1

    def test_wrong_argument_count(self):
        with pytest.raises(ValueError):
            GradGradIntegrator([1, 2])
        with pytest.raises(ValueError):
            EyeEyeIntegrator([1, 2, 1.0, 1.0])

    def test_index_out_of_range(self):
        mesh = TriangleMesh.from_one_triangle()
        space = make_space(mesh, [("L", 1, 'C'), ("L", 1, 'C')])
        I = GradGradIntegrator([1, 3, 1.0])
        with pytest.raises(IndexError):
            I.assembly(space)


class TestIntegratorInterface:

    @pytest.mark.parametrize("name, vb, dim", [
        ("gradgrad", 'vol', 2), ("flxtrc", 'vol', 3), ("eyeeye", 'vol', 2),
        ("trctrc", 'vol', 3), ("robinvol", 'vol', 2),
        ("flxflxbdry", 'bnd', 2), ("trctrcbdry", 'bnd', 3), ("flxtrcbdry", 'bnd', 2)
    ])
    def test_flags(self, name, vb, dim):
        I = registry.create(name, [1, 2, 1.0], dim=dim)
        assert I.vb == vb
        assert I.boundary_form == (vb == 'bnd')
        assert I.dim_space() == dim
        assert I.dim_element() == (dim - 1 if vb == 'bnd' else dim)
        assert I.is_symmetric()

    @pytest.mark.parametrize("name", ["gradgrad", "flxtrc", "eyeeye", "trctrc",
                                      "flxflxbdry", "trctrcbdry", "flxtrcbdry"])
    def test_complex_not_symmetric(self, name):
        I = registry.create(name, [1, 2, 1j])
        assert not I.is_symmetric()
        assert I.is_complex()

    def test_names(self):
        assert GradGradIntegrator([1, 2, 1.0]).name == "GradGrad"
        assert FluxTraceIntegrator([1, 2, 1.0]).name == "FluxTrace"
        assert EyeEyeIntegrator([1, 2, 1.0]).name == "EyeEye"
        assert TraceTraceIntegrator([1, 2, 1.0]).name == "TraceTrace"
        assert RobinVolumeIntegrator([1, 2, 1.0]).name == "RobinVolume"
        assert FluxFluxBoundaryIntegrator([1, 2, 1.0]).name == "FluxFluxBoundary"

    def test_bad_dimension(self):
        with pytest.raises(ValueError):
            GradGradIntegrator([1, 2, 1.0], dim=1)
        mesh = TriangleMesh.from_one_triangle()
        space = make_space(mesh, [("L", 1, 'C'), ("L", 1, 'C')])
        with pytest.raises(ValueError):
            GradGradIntegrator([1, 2, 1.0], dim=3).assembly(space)

    def test_robin_needs_constant(self):
        with pytest.raises(ValueError):
            RobinVolumeIntegrator([1, 2, FunctionCoefficient(varying)])
        RobinVolumeIntegrator([1, 2, FunctionCoefficient(lambda p: 2.0+0*p[..., 0], constant=True)])


class TestElementMatrix:

    @pytest.mark.parametrize("data", triangle_data)
    def test_triangle(self, data):
        mesh = TriangleMesh.from_one_triangle()
        space = make_space(mesh, data["spaces"])
        I = registry.create(data["name"], [1, 2, data["coef"]], dim=2)
        M = I.assembly(space)
        assert M.dtype == np.float64
        np.testing.assert_allclose(M, data["matrix"], atol=1e-12)

    @pytest.mark.parametrize("data", tetrahedron_data)
    def test_tetrahedron(self, data):
        mesh = TetrahedronMesh.from_one_tetrahedron()
        space = make_space(mesh, data["spaces"])
        I = registry.create(data["name"], [1, 2, data["coef"]], dim=3)
        M = I.assembly(space)
        np.testing.assert_allclose(M, data["matrix"], atol=1e-12)

    def test_shape_follows_components(self):
        mesh = TriangleMesh.from_box(nx=2, ny=2)
        space = make_space(mesh, [("L", 2, 'C'), ("RT", 0, None), ("L", 1, 'D')])
        NC = mesh.number_of_cells()
        M = GradGradIntegrator([1, 3, 1.0]).assembly(space)
        assert M.shape == (NC, 3, 6)
        M = FluxTraceIntegrator([2, 3, 1.0]).assembly(space)
        assert M.shape == (NC, 3, 3)
        ue2dof, ve2dof = FluxTraceIntegrator([2, 3, 1.0]).to_global_dof(space)
        np.testing.assert_array_equal(ue2dof, space.cell_to_dof(1))
        np.testing.assert_array_equal(ve2dof, space.cell_to_dof(2))

    def test_transposed_components(self):
        mesh = TriangleMesh.from_box(nx=2, ny=2)
        space = make_space(mesh, [("L", 2, 'C'), ("L", 1, 'D')])
        A = EyeEyeIntegrator([1, 2, varying]).assembly(space)
        B = EyeEyeIntegrator([2, 1, varying]).assembly(space)
        np.testing.assert_allclose(A, np.swapaxes(B, -1, -2), atol=1e-14)

    @pytest.mark.parametrize("p", [1, 2, 3])
    def test_gradgrad_kernel(self, p):
        mesh = TetrahedronMesh.from_box(nx=1, ny=1, nz=1)
        space = make_space(mesh, [("L", p, 'C'), ("L", p, 'C')])
        M = GradGradIntegrator([1, 2, 1.0], dim=3).assembly(space)
        np.testing.assert_allclose(M, np.swapaxes(M, -1, -2), atol=1e-13)
        np.testing.assert_allclose(M.sum(axis=-1), 0.0, atol=1e-13)

    def test_flux_trace_divergence(self):
        # with a piecewise constant test function the integral over the
        # element boundary equals the integral of div q over the element
        mesh = TriangleMesh.from_box(nx=3, ny=2)
        space = make_space(mesh, [("RT", 0, None), ("L", 0, 'D')])
        M = FluxTraceIntegrator([1, 2, 1.0]).assembly(space)
        rt = space.component(0)
        bcs = np.array([[1/3, 1/3, 1/3]])
        div = rt.div_basis(bcs)[:, 0, :]
        cm = mesh.entity_measure('cell')
        np.testing.assert_allclose(M[:, 0, :], div*cm[:, None], atol=1e-13)

    def test_varying_coefficient(self):
        mesh = TriangleMesh.from_one_triangle()
        space = make_space(mesh, [("L", 0, 'D'), ("L", 0, 'D')])
        M = EyeEyeIntegrator([1, 2, varying], q=2).assembly(space)
        # int_T 1 + xy = 1/2 + 1/24
        np.testing.assert_allclose(M, [[[1/2 + 1/24]]], atol=1e-14)

    @pytest.mark.parametrize("specs", [
        [("RT", 0, None), ("RT", 0, None)],
        [("RT", 0, None), ("L", 1, 'D')],
    ])
    def test_flux_mass_default_order(self, specs):
        # the RT0 basis is linear, so the default rule must be exact for
        # products with it
        mesh = TriangleMesh.from_box(nx=3, ny=2)
        space = make_space(mesh, specs)
        I = EyeEyeIntegrator([1, 2, 1.0])
        assert I.quadrature_order(space.component(0), space.component(1)) == 2
        M = I.assembly(space)
        E = EyeEyeIntegrator([1, 2, 1.0], q=4).assembly(space)
        np.testing.assert_allclose(M, E, atol=1e-14)

    def test_robin_skips_interior_faces(self):
        mesh = TriangleMesh.from_box(nx=2, ny=2)
        space = make_space(mesh, [("L", 1, 'C'), ("L", 1, 'C')])
        R = RobinVolumeIntegrator([1, 2, 1.0]).assembly(space)
        T = TraceTraceIntegrator([1, 2, 1.0]).assembly(space)
        isBdCell = mesh.boundary_cell_flag()
        assert np.all(np.sum(np.abs(T), axis=(1, 2)) > 0)
        assert np.all(np.abs(R).sum(axis=(1, 2))[isBdCell] > 0)
        assert np.all(np.abs(R).sum(axis=(1, 2)) <= np.abs(T).sum(axis=(1, 2)) + 1e-12)


class TestValueTypes:

    def test_complex_coefficient(self):
        mesh = TriangleMesh.from_one_triangle()
        space = make_space(mesh, [("L", 1, 'C'), ("L", 1, 'C')])
        real = GradGradIntegrator([1, 2, 1.0]).assembly(space)
        I = GradGradIntegrator([1, 2, 2j])
        M = I.assembly(space)
        assert M.dtype == np.complex128
        np.testing.assert_allclose(M, 2j*real, atol=1e-14)
        np.testing.assert_allclose(I.assembly_complex(space), M)
        with pytest.raises(TypeError):
            I.assembly_real(space)

    def test_real_coefficient_complex_block(self):
        mesh = TriangleMesh.from_one_triangle()
        space = make_space(mesh, [("L", 1, 'C'), ("L", 1, 'C')])
        I = TraceTraceIntegrator([1, 2, 1.0])
        M = I.assembly_complex(space)
        assert M.dtype == np.complex128
        np.testing.assert_allclose(M.real, I.assembly_real(space), atol=1e-14)
        np.testing.assert_allclose(M.imag, 0.0)

    def test_out_accumulates(self):
        mesh = TriangleMesh.from_box(nx=2, ny=1)
        space = make_space(mesh, [("L", 1, 'C'), ("L", 1, 'C')])
        I = EyeEyeIntegrator([1, 2, 1.0])
        M = I.assembly(space)
        out = np.zeros_like(M)
        r = I.assembly(space, out=out)
        assert r is out
        I.assembly(space, out=out)
        np.testing.assert_allclose(out, 2*M)

        cout = np.zeros(M.shape, dtype=np.complex128)
        I.assembly(space, out=cout)
        np.testing.assert_allclose(cout.real, M)

        with pytest.raises(ValueError):
            I.assembly(space, out=np.zeros((1, 3, 3)))

    def test_indices(self):
        mesh = TriangleMesh.from_box(nx=2, ny=2)
        space = make_space(mesh, [("L", 2, 'C'), ("L", 1, 'C')])
        I = TraceTraceIntegrator([1, 2, varying])
        M = I.assembly(space)
        index = np.array([1, 5, 6])
        np.testing.assert_allclose(I.assembly(space, index), M[index], atol=1e-14)
        ue2dof, ve2dof = I.to_global_dof(space, index)
        np.testing.assert_array_equal(ue2dof, space.cell_to_dof(0)[index])


if __name__ == "__main__":
    pytest.main(['./test_dpg_integrator.py', '-k', 'TestElementMatrix'])
