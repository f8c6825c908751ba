from .ballfun import BallFun, cart2sph, sph2cart
from .solvers import helmholtz, helmholtz_dirichlet, helmholtz_neumann, poisson
from .padding import pad_length, embed_centered
