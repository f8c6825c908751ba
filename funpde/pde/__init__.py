from .pdeset import pdeset, PDEOptions
from .chebdouble import ChebDouble, diff, sum, cumsum, fred, volt
from .source import PDESource
from .parse import normalize
from .bcs import parse_bcs, BoundaryConditions, PointConstraint, NonlinearConstraint
from .assembler import DAEAssembler
from .pde15s import pde15s, PDE15s
