"""Functionality for typehints."""

from typing import Sequence, Union, Literal, TextIO
from pathlib import Path

import numpy as np


FloatSequence = Union[np.ndarray,Sequence[float]]
FileHandle = Union[TextIO, str, Path]
LatticeBasis = Literal['direct', 'reciprocal']
