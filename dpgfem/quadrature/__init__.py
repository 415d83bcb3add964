from .quadrature import Quadrature
from .stroud_quadrature import StroudQuadrature
