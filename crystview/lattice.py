"""
Lattice bases and basis conversions.

Lattice vectors are stored as columns of 3x3 matrices in an orthonormal
cartesian frame with a along x and b in the x-y plane.
"""

import math as _math
from typing import Union as _Union

import numpy as _np

from ._typehints import FloatSequence as _FloatSequence, LatticeBasis as _LatticeBasis
from .errors import InvalidCellError as _InvalidCellError
from . import linalg as _linalg


SNAP_ZERO = 1e-5                                                                                    # basis entries below are numerical noise


def build_unit_cell(a: float, b: float, c: float,
                    alpha: float, beta: float, gamma: float,
                    snap: float = SNAP_ZERO) -> tuple[_np.ndarray, float]:
    """
    Calculate direct lattice basis from lattice parameters.

    Parameters
    ----------
    a : float
        Length of lattice parameter 'a'.
    b : float
        Length of lattice parameter 'b'.
    c : float
        Length of lattice parameter 'c'.
    alpha : float
        Angle between b and c lattice basis in degrees.
    beta : float
        Angle between c and a lattice basis in degrees.
    gamma : float
        Angle between a and b lattice basis in degrees.
    snap : float, optional
        Entries with an absolute value below 'snap' are set to zero.
        Defaults to 1e-5.

    Returns
    -------
    basis : numpy.ndarray, shape (3,3)
        Direct lattice basis with lattice vectors a, b, c as columns.
    volume : float
        Unit cell volume.

    Raises
    ------
    InvalidCellError
        If the parameters do not describe a physical cell.

    References
    ----------
    C.T. Young and J.L. Lytton, Journal of Applied Physics 43:1408–1417, 1972
    https://doi.org/10.1063/1.1661333
    """
    lengths = _np.array([a,b,c],dtype=float)
    angles = _np.array([alpha,beta,gamma],dtype=float)
    if not (_np.all(_np.isfinite(lengths)) and _np.all(_np.isfinite(angles))):
        raise _InvalidCellError(f'non-finite lattice parameters {a,b,c,alpha,beta,gamma}')
    if _np.any(lengths <= 0.0):
        raise _InvalidCellError(f'lattice lengths must be positive: {lengths}')
    if _np.any(angles <= 0.0) or _np.any(angles >= 180.0):
        raise _InvalidCellError(f'lattice angles must be within (0°,180°): {angles}')

    cos_alpha,cos_beta,cos_gamma = _np.cos(_np.radians(angles))
    sin_gamma = _math.sin(_math.radians(gamma))

    radicand = 1.0 - cos_alpha**2 - cos_beta**2 - cos_gamma**2 + 2.0*cos_alpha*cos_beta*cos_gamma
    if not radicand > 0.0:
        raise _InvalidCellError(f'non-physical cell {a,b,c,alpha,beta,gamma} (radicand={radicand})')
    volume = a*b*c*_math.sqrt(radicand)

    basis = _np.array([
                       [a, b*cos_gamma, c*cos_beta],
                       [0, b*sin_gamma, c*(cos_alpha-cos_beta*cos_gamma)/sin_gamma],
                       [0, 0,           volume/(a*b*sin_gamma)],
                      ])
    basis[_np.abs(basis) < snap] = 0.0

    return basis,float(volume)


def build_reciprocal(basis: _FloatSequence,
                     volume: float) -> _np.ndarray:
    """
    Calculate reciprocal lattice basis.

    Parameters
    ----------
    basis : numpy.ndarray, shape (3,3)
        Direct lattice basis with lattice vectors a, b, c as columns.
    volume : float
        Unit cell volume.

    Returns
    -------
    basis_reciprocal : numpy.ndarray, shape (3,3)
        Reciprocal lattice basis with a*, b*, c* as columns.
    """
    if not volume > 0.0:
        raise _InvalidCellError(f'unit cell volume must be positive: {volume}')
    a,b,c = _np.asarray(basis,dtype=float).T
    return _np.column_stack([_linalg.cross(b,c),
                             _linalg.cross(c,a),
                             _linalg.cross(a,b)])/volume


def _transform(M: _np.ndarray,
               v: _FloatSequence) -> _np.ndarray:
    v_ = _np.asarray(v,dtype=float)
    if v_.shape[-1:] != (3,):
        raise ValueError(f'invalid shape {v_.shape} for 3D vector')
    return _np.einsum('ij,...j',M,v_)


def direct_to_cartesian(v: _FloatSequence,
                        basis: _FloatSequence,
                        normalize: bool = True) -> _np.ndarray:
    """
    Convert direct lattice vector [uvw] to cartesian coordinates.

    Parameters
    ----------
    v : numpy.ndarray, shape (...,3)
        Direct lattice vector(s).
    basis : numpy.ndarray, shape (3,3)
        Direct lattice basis.
    normalize : bool, optional
        Return unit vector(s). Defaults to True.

    Returns
    -------
    v_cart : numpy.ndarray, shape (...,3)
        Cartesian vector(s).

    Notes
    -----
    The default discards the magnitude, whereas the inverse
    conversion 'cartesian_to_direct' retains it.
    """
    v_cart = _transform(_np.asarray(basis,dtype=float),v)
    return _linalg.normalize(v_cart) if normalize else v_cart


def cartesian_to_direct(v: _FloatSequence,
                        basis_inverse: _FloatSequence) -> _np.ndarray:
    """
    Convert cartesian vector to direct lattice coordinates [uvw].

    Parameters
    ----------
    v : numpy.ndarray, shape (...,3)
        Cartesian vector(s).
    basis_inverse : numpy.ndarray, shape (3,3)
        Inverse of the direct lattice basis.

    Returns
    -------
    uvw : numpy.ndarray, shape (...,3)
        Direct lattice vector(s).
    """
    return _transform(_np.asarray(basis_inverse,dtype=float),v)


def reciprocal_to_cartesian(v: _FloatSequence,
                            basis_reciprocal: _FloatSequence,
                            normalize: bool = True) -> _np.ndarray:
    """
    Convert reciprocal lattice vector (hkl) to cartesian coordinates.

    Parameters
    ----------
    v : numpy.ndarray, shape (...,3)
        Reciprocal lattice vector(s).
    basis_reciprocal : numpy.ndarray, shape (3,3)
        Reciprocal lattice basis.
    normalize : bool, optional
        Return unit vector(s). Defaults to True.

    Returns
    -------
    v_cart : numpy.ndarray, shape (...,3)
        Cartesian vector(s).
    """
    v_cart = _transform(_np.asarray(basis_reciprocal,dtype=float),v)
    return _linalg.normalize(v_cart) if normalize else v_cart


def cartesian_to_reciprocal(v: _FloatSequence,
                            basis_reciprocal_inverse: _FloatSequence) -> _np.ndarray:
    """
    Convert cartesian vector to reciprocal lattice coordinates (hkl).

    Parameters
    ----------
    v : numpy.ndarray, shape (...,3)
        Cartesian vector(s).
    basis_reciprocal_inverse : numpy.ndarray, shape (3,3)
        Inverse of the reciprocal lattice basis.

    Returns
    -------
    hkl : numpy.ndarray, shape (...,3)
        Reciprocal lattice vector(s).
    """
    return _transform(_np.asarray(basis_reciprocal_inverse,dtype=float),v)


def complementary(basis: _LatticeBasis) -> _LatticeBasis:
    """Return 'reciprocal' for 'direct' and vice versa."""
    if basis == 'direct':
        return 'reciprocal'
    elif basis == 'reciprocal':
        return 'direct'
    raise KeyError(f'invalid lattice basis "{basis}"')


def to_cartesian(v: _FloatSequence,
                 cell,
                 basis: _LatticeBasis,
                 normalize: bool = True) -> _np.ndarray:
    """
    Convert lattice vector to cartesian coordinates.

    Parameters
    ----------
    v : numpy.ndarray, shape (...,3)
        Lattice vector(s).
    cell : crystview.UnitCell
        Unit cell providing the bases.
    basis : {'direct', 'reciprocal'}
        Lattice basis of v.
    normalize : bool, optional
        Return unit vector(s). Defaults to True.

    Returns
    -------
    v_cart : numpy.ndarray, shape (...,3)
        Cartesian vector(s).
    """
    if basis == 'direct':
        return direct_to_cartesian(v,cell.basis_direct,normalize)
    elif basis == 'reciprocal':
        return reciprocal_to_cartesian(v,cell.basis_reciprocal,normalize)
    raise KeyError(f'invalid lattice basis "{basis}"')


def from_cartesian(v: _FloatSequence,
                   cell,
                   basis: _LatticeBasis) -> _np.ndarray:
    """
    Convert cartesian vector to lattice coordinates.

    Parameters
    ----------
    v : numpy.ndarray, shape (...,3)
        Cartesian vector(s).
    cell : crystview.UnitCell
        Unit cell providing the bases.
    basis : {'direct', 'reciprocal'}
        Lattice basis of the result.

    Returns
    -------
    uvw|hkl : numpy.ndarray, shape (...,3)
        Lattice vector(s).
    """
    if basis == 'direct':
        return cartesian_to_direct(v,cell.basis_direct_inverse)
    elif basis == 'reciprocal':
        return cartesian_to_reciprocal(v,cell.basis_reciprocal_inverse)
    raise KeyError(f'invalid lattice basis "{basis}"')


def check_basis(basis: _Union[str, None],
                optional: bool = False) -> None:
    """Raise KeyError for an invalid lattice basis keyword."""
    if basis is None and optional: return
    if basis not in ('direct','reciprocal'):
        raise KeyError(f'invalid lattice basis "{basis}"')
