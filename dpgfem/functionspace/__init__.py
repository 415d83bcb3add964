
from .function import Function
from .space import FunctionSpace
from .lagrange_fe_space import LagrangeFESpace
from .raviart_thomas_fe_space import RaviartThomasFESpace
from .compound_fe_space import CompoundFESpace
