"""
Crystallographic Coordinate Transforms and View Directions.

Convert between direct lattice, reciprocal lattice, and cartesian
coordinates and orient a camera along lattice directions or plane normals.

References
----------
C.T. Young and J.L. Lytton, Journal of Applied Physics 43:1408–1417, 1972
https://doi.org/10.1063/1.1661333
"""

from pathlib import Path as _Path
import re as _re
import logging

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

name = 'crystview'
with open(_Path(__file__).parent/_Path('VERSION')) as _f:
    version = _re.sub(r'^v','',_f.readline().strip())
    __version__ = version

from .                 import _typehints       # noqa
from .                 import errors           # noqa
from .                 import util             # noqa
from .                 import linalg           # noqa
from .                 import lattice          # noqa
# Modules that contain only one class (of the same name), are prefixed by a '_'.
# For example, '_unitcell' contains a class called 'UnitCell' which is imported as 'crystview.UnitCell'.
from ._unitcell        import UnitCell         # noqa
from ._unitcell        import LatticeParameters  # noqa
from ._viewrequest     import ViewRequest      # noqa
from ._viewbasis       import ViewBasis        # noqa
from .                 import view             # noqa
from ._config          import Config           # noqa
from ._session         import LatticeSession   # noqa
