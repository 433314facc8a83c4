from ._exceptions import NotInvertibleError
from ._integers import Integers, IntegersModN, IntegersModP
from ._model import CoefficientModel, Field
from ._rationals import Rationals
