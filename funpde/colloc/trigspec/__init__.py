from .matrices import diffmat
from .matrices import multmat
