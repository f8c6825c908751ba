from .bartels_stewart import bartels_stewart
from .bartels_stewart import qz_pencil
