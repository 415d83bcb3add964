from .coefficient import (
    Coefficient, ConstantCoefficient, FunctionCoefficient, as_coefficient
)
