"""
View-direction solver.

Construct orthonormal camera bases from projection and up vectors
given in direct or reciprocal lattice coordinates, and read the
lattice vectors back from an existing camera basis.
"""

import logging
from typing import Optional as _Optional, Union as _Union, NamedTuple as _NamedTuple

import numpy as _np

from ._typehints import FloatSequence as _FloatSequence, LatticeBasis as _LatticeBasis
from .errors import ParallelAxesError as _ParallelAxesError
from ._viewrequest import ViewRequest as _ViewRequest
from ._viewbasis import ViewBasis as _ViewBasis
from . import linalg as _linalg
from . import lattice as _lattice
from . import util as _util


logger = logging.getLogger(__name__)

PARALLEL = 1e-10                                                                                    # |z·y| > 1-PARALLEL is parallel
ORTHOGONALITY = 1e-2                                                                                # |z·y| > ORTHOGONALITY is corrected

_fallback_up = _np.array([[0.,1.,0.],
                          [1.,0.,0.],
                          [0.,0.,1.]])


class ViewVectors(_NamedTuple):
    projection: _Optional[_np.ndarray]
    up: _Optional[_np.ndarray]
    projection_raw: _np.ndarray
    up_raw: _np.ndarray


def _cartesian_axes(request: _ViewRequest,
                    cell) -> tuple[_np.ndarray, _np.ndarray]:
    return (_lattice.to_cartesian(request.projection,cell,request.basis),
            _lattice.to_cartesian(request.up,cell,request.up_basis))


def needs_orthogonalization(request: _ViewRequest,
                            cell,
                            tolerance: float = ORTHOGONALITY) -> bool:
    """
    Check whether the up vector deviates from orthogonality to the projection vector.

    Parameters
    ----------
    request : crystview.ViewRequest
        Projection and up vector.
    cell : crystview.UnitCell
        Unit cell defining the lattice bases.
    tolerance : float, optional
        Accepted absolute value of the scalar product of the
        normalized vectors. Defaults to 1e-2.

    Returns
    -------
    needs_orthogonalization : bool
        Whether 'solve_view' will correct the up vector.
    """
    z,y = _cartesian_axes(request,cell)
    return bool(abs(_linalg.dot(z,y)) > tolerance)


def solve_view(request: _ViewRequest,
               cell,
               tolerance: float = ORTHOGONALITY,
               parallel: float = PARALLEL) -> _ViewBasis:
    """
    Calculate camera basis for viewing along a lattice vector.

    Parameters
    ----------
    request : crystview.ViewRequest
        Projection and up vector.
    cell : crystview.UnitCell
        Unit cell defining the lattice bases.
    tolerance : float, optional
        Up vectors whose normalized scalar product with the projection
        vector exceeds this value are orthogonalized (and the correction
        is logged). Defaults to 1e-2.
    parallel : float, optional
        Up vectors whose normalized scalar product with the projection
        vector exceeds 1-parallel are replaced. Defaults to 1e-10.

    Returns
    -------
    view : crystview.ViewBasis
        Right-handed orthonormal basis with the projection direction as z.

    Raises
    ------
    DegenerateVectorError
        If a vector has zero length.
    ParallelAxesError
        If no replacement for a parallel up vector is found.

    Notes
    -----
    A parallel up vector is replaced by the first of the cartesian
    directions (0,1,0), (1,0,0), and (0,0,1) that is not parallel.
    The up vector is orthogonalized by Gram–Schmidt, which leaves an
    already orthogonal up vector unchanged.
    """
    z,y = _cartesian_axes(request,cell)

    if abs(_linalg.dot(z,y)) > 1.0-parallel:
        for candidate in _fallback_up:
            if abs(_linalg.dot(z,candidate)) <= 1.0-parallel:
                logger.warning(f'up vector {request.up} is parallel to projection vector {request.projection}, '
                               f'using cartesian {candidate}')
                y = candidate
                break
        else:
            raise _ParallelAxesError(f'no up vector found that is not parallel to {z}')

    if (deviation := abs(_linalg.dot(z,y))) > tolerance:
        logger.info(f'orthogonalizing up vector (|z·y|={deviation:.3g})')
    y = _linalg.normalize(y - _linalg.project(y,z))
    x = _linalg.normalize(_linalg.cross(y,z))

    return _ViewBasis(_np.stack([x,y,z]))


def read_view_vectors(view: _Union[_ViewBasis, _FloatSequence],
                      cell,
                      basis: _LatticeBasis = 'direct',
                      up_basis: _Optional[_LatticeBasis] = None,
                      max_int: int = _util.MAX_INT,
                      tolerance: float = _util.INTEGER_MATCH,
                      zero: float = _util.ZERO_COMPONENT) -> ViewVectors:
    """
    Determine projection and up vector of a camera basis in lattice coordinates.

    Parameters
    ----------
    view : crystview.ViewBasis or numpy.ndarray, shape (3,3) or (4,4)
        Camera basis or rotation matrix with rows x, y, z.
    cell : crystview.UnitCell
        Unit cell defining the lattice bases.
    basis : {'direct', 'reciprocal'}, optional
        Lattice basis of the projection vector. Defaults to 'direct'.
    up_basis : {'direct', 'reciprocal'}, optional
        Lattice basis of the up vector. Defaults to 'basis'.
    max_int : int, optional
        Largest scale factor tested for integer representation.
        Defaults to 100.
    tolerance : float, optional
        Maximum distance of each scaled component to the nearest integer.
        Defaults to 0.01.
    zero : float, optional
        Components with an absolute value below 'zero' are set to zero.
        Defaults to 1e-3.

    Returns
    -------
    vectors : crystview.view.ViewVectors
        Integer projection and up vector (None if no integer
        representation is found) and their floating point values.
    """
    view_ = view if isinstance(view,_ViewBasis) else _ViewBasis(view)
    up_basis_ = basis if up_basis is None else up_basis

    projection_raw = _lattice.from_cartesian(view_.z,cell,basis)
    up_raw = _lattice.from_cartesian(view_.y,cell,up_basis_)

    return ViewVectors(_util.reduce_to_integers(projection_raw,max_int,tolerance,zero),
                       _util.reduce_to_integers(up_raw,max_int,tolerance,zero),
                       projection_raw,
                       up_raw)


def axes_in_view(view: _Union[_ViewBasis, _FloatSequence],
                 cell) -> _np.ndarray:
    """
    Project lattice axes onto the screen plane.

    Parameters
    ----------
    view : crystview.ViewBasis or numpy.ndarray, shape (3,3) or (4,4)
        Camera basis or rotation matrix with rows x, y, z.
    cell : crystview.UnitCell
        Unit cell defining the lattice axes.

    Returns
    -------
    axes : numpy.ndarray, shape (3,2)
        Screen coordinates (x, y) of the unit vectors along a, b, and c.
    """
    view_ = view if isinstance(view,_ViewBasis) else _ViewBasis(view)
    abc = _linalg.normalize(cell.basis_direct.T)
    return _np.einsum('ij,kj->ik',abc,_np.stack([view_.x,view_.y]))
