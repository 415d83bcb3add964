
from .mesh_base import SimplexMesh, multi_index_matrix
from .triangle_mesh import TriangleMesh
from .tetrahedron_mesh import TetrahedronMesh
