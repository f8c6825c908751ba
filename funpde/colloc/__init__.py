from . import ultraS
from . import trigspec
