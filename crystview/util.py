"""Miscellaneous helper functionality."""

import contextlib as _contextlib
from pathlib import Path as _Path
import logging
from typing import Optional as _Optional, Literal as _Literal, Any as _Any, \
                   TextIO as _TextIO, Generator as _Generator

import numpy as _np

from ._typehints import FloatSequence as _FloatSequence, FileHandle as _FileHandle
from .errors import NoIntegerRepresentationError as _NoIntegerRepresentationError


logger = logging.getLogger(__name__)

MAX_INT = 100                                                                                       # largest scale factor searched
INTEGER_MATCH = 1e-2                                                                                # per-component distance to integer
ZERO_COMPONENT = 1e-3                                                                               # components below are zero


####################################################################################################
# Functions
####################################################################################################
def srepr(msg,
          glue: str = '\n',
          quote: bool = False) -> str:
    r"""
    Join (quoted) items with glue string.

    Parameters
    ----------
    msg : (sequence of) object with __repr__
        Items to join.
    glue : str, optional
        Glue used for joining operation. Defaults to '\n'.
    quote : bool, optional
        Quote items. Defaults to False.

    Returns
    -------
    joined : str
        String representation of the joined and quoted items.
    """
    q = '"' if quote else ''
    if (not hasattr(msg, 'strip') and
           (hasattr(msg, '__getitem__') or
            hasattr(msg, '__iter__'))):
        return glue.join(q+str(x)+q for x in msg)
    else:
        return q+(msg if isinstance(msg,str) else repr(msg))+q


@_contextlib.contextmanager
def open_text(fname: _FileHandle,
              mode: _Literal['r','w'] = 'r') -> _Generator[_TextIO, None, None]:                    # noqa
    """
    Open a text file with Unix line endings.

    If a path or string is given, a context manager ensures that
    the file handle is closed.
    If a file handle is given, it remains unmodified.

    Parameters
    ----------
    fname : file, str, or pathlib.Path
        Name or handle of file.
    mode : {'r','w'}, optional
        Access mode: 'r'ead or 'w'rite, defaults to 'r'.

    Returns
    -------
    f : file handle
        File handle for a text file.
    """
    if isinstance(fname, (str,_Path)):
        with open(_Path(fname).expanduser(),mode,newline=('\n' if mode == 'w' else None)) as fhandle:
            yield fhandle
    else:
        yield fname


def reduce_to_integers(v: _FloatSequence,
                       max_int: int = MAX_INT,
                       tolerance: float = INTEGER_MATCH,
                       zero: float = ZERO_COMPONENT,
                       strict: bool = False) -> _Optional[_np.ndarray]:
    """
    Scale vector to smallest integers (Miller indices).

    The vector is divided by its smallest non-zero component and scaled
    by i = 1, 2, ..., max_int until all components are integers within
    the given tolerance.

    Parameters
    ----------
    v : sequence of float, len (3)
        Vector to scale.
    max_int : int, optional
        Largest scale factor to test. Defaults to 100.
    tolerance : float, optional
        Maximum distance of each scaled component to the nearest integer.
        Defaults to 0.01.
    zero : float, optional
        Components with an absolute value below 'zero' are set to zero.
        Defaults to 1e-3.
    strict : bool, optional
        Raise NoIntegerRepresentationError instead of returning None
        if no integer representation is found. Defaults to False.

    Returns
    -------
    m : numpy.ndarray, shape (3), or None
        Vector scaled to integers or None if none of the scale factors
        results in (approximate) integers.

    Examples
    --------
    >>> from crystview import util
    >>> util.reduce_to_integers([0.7,0.7,0.7])
    array([1, 1, 1])
    >>> util.reduce_to_integers([-0.0731261447,0.0,0.0548446104])
    array([-4,  0,  3])
    """
    if int(max_int) != max_int or max_int < 1:
        raise ValueError(f'invalid maximum integer "{max_int}"')

    v_ = _np.array(v,dtype=float)
    v_[_np.abs(v_) < zero] = 0.0
    nonzero = _np.abs(v_[v_ != 0.0])

    if nonzero.size > 0:
        unit = v_/_np.min(nonzero)
        for i in range(1,int(max_int)+1):
            scaled = unit*i
            m = _np.rint(scaled)
            if _np.all(_np.abs(scaled-m) <= tolerance):
                return m.astype(_np.int64)

    if strict:
        raise _NoIntegerRepresentationError(f'no integer representation with factor ≤ {max_int} for {v_}')
    logger.debug(f'no integer representation with factor ≤ {max_int} for {v_}')
    return None


def Miller_label(v: _FloatSequence,
                 brackets: str = '[]',
                 max_int: int = MAX_INT,
                 tolerance: float = INTEGER_MATCH,
                 zero: float = ZERO_COMPONENT) -> str:
    """
    Format vector as Miller indices.

    Parameters
    ----------
    v : sequence of float, len (3)
        Vector to format.
    brackets : str, optional
        Opening and closing bracket. Defaults to '[]',
        use '()' for plane normals.
    max_int : int, optional
        Largest scale factor to test. Defaults to 100.
    tolerance : float, optional
        Maximum distance of each scaled component to the nearest integer.
        Defaults to 0.01.
    zero : float, optional
        Components with an absolute value below 'zero' are set to zero.
        Defaults to 1e-3.

    Returns
    -------
    label : str
        Integer indices if found, otherwise components with two decimals.

    Examples
    --------
    >>> from crystview import util
    >>> util.Miller_label([0.5,0.5,0.0])
    '[1 1 0]'
    >>> util.Miller_label([0.2,0.3,0.0],max_int=1)
    '[0.20 0.30 0.00]'
    """
    if len(brackets) != 2:
        raise ValueError(f'invalid brackets "{brackets}"')
    v_ = _np.asarray(v,dtype=float)
    m = reduce_to_integers(v_,max_int,tolerance,zero)
    items = [f'{x:0.2f}' for x in _np.where(_np.abs(v_) < zero,0.0,v_)] if m is None else \
            [f'{x:d}' for x in m]
    return brackets[0]+' '.join(items)+brackets[1]


def to_list(a: _Any) -> list:
    """
    Put into list.

    Parameters
    ----------
    a : any
        Variable to put into list or convert to list.

    Returns
    -------
    l : list
        Data in list.
    """
    return [a] if not hasattr(a,'__iter__') or isinstance(a,str) else list(a)
