from .chebtech import chebtech

from .detail import polyfit
from .detail import polyval
from .detail import clenshaw
from .detail import standardChop
from .detail import classic_check
from .detail import happiness_check
from .detail import alias

from .pts import quadwts
from .pts import barymat
from .pts import bary_weights
from .pts import chebpts
from .pts import chebpts_type2, chebpts_type1

from .diff import diffmat, colloc_diffmat
