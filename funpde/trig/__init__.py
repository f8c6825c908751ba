from .transform import trigpts
from .transform import wavenumbers
from .transform import vals2coeffs
from .transform import coeffs2vals
from .transform import alias
