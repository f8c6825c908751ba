from .fun import Fun, Piecewise
from .fun import norm
from .pde import pde15s, pdeset, PDEOptions, PDESource
from .errors import ConfigError, UnsupportedInputError, ParseError
from .errors import ConvergenceError, DimensionMismatchError
from . import ball
