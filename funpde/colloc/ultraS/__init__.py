from .matrices import diffmat
from .matrices import convertmat
from .matrices import multmat
from .transform import spconvert
