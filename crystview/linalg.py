"""
Matrix and vector utilities.

Vector routines operate on numpy.ndarrays of shape (...,3),
matrix routines on single matrices of shape (3,3) or (4,4).
"""

import numpy as _np

from ._typehints import FloatSequence as _FloatSequence
from .errors import SingularMatrixError as _SingularMatrixError, \
                    DegenerateVectorError as _DegenerateVectorError

EPSILON = 1e-12                                                                                     # smallest accepted vector length


def _as_matrix(M: _FloatSequence,
               N: int) -> _np.ndarray:
    M_ = _np.asarray(M,dtype=float)
    if M_.shape != (N,N):
        raise ValueError(f'invalid shape {M_.shape} for {N}x{N} matrix')
    return M_


def cofactor3x3(M: _FloatSequence) -> _np.ndarray:
    """
    Calculate cofactor matrix of a 3x3 matrix.

    Parameters
    ----------
    M : numpy.ndarray, shape (3,3)
        Matrix.

    Returns
    -------
    C : numpy.ndarray, shape (3,3)
        Cofactor matrix, C_ij = (-1)^(i+j) times the minor of M_ij.
    """
    M_ = _as_matrix(M,3)
    C = _np.empty((3,3))
    for i in range(3):
        rows = [r for r in range(3) if r != i]
        for j in range(3):
            cols = [c for c in range(3) if c != j]
            minor = M_[rows[0],cols[0]]*M_[rows[1],cols[1]] - M_[rows[0],cols[1]]*M_[rows[1],cols[0]]
            C[i,j] = -minor if (i+j) & 1 else minor
    return C


def determinant3x3(M: _FloatSequence) -> float:
    """
    Calculate determinant of a 3x3 matrix by cofactor expansion along the first row.

    Parameters
    ----------
    M : numpy.ndarray, shape (3,3)
        Matrix.

    Returns
    -------
    det : float
        Determinant of M.
    """
    M_ = _as_matrix(M,3)
    return float(_np.dot(M_[0],cofactor3x3(M_)[0]))


def invert3x3(M: _FloatSequence) -> _np.ndarray:
    """
    Invert a 3x3 matrix using the adjugate.

    Parameters
    ----------
    M : numpy.ndarray, shape (3,3)
        Matrix to invert.

    Returns
    -------
    M_inv : numpy.ndarray, shape (3,3)
        Inverse of M.

    Raises
    ------
    SingularMatrixError
        If the determinant is zero or not finite.

    Notes
    -----
    No tolerance is applied to the determinant.
    Deciding whether a nearly singular matrix is acceptable
    is left to the caller.
    """
    M_ = _as_matrix(M,3)
    C = cofactor3x3(M_)
    det = float(_np.dot(M_[0],C[0]))
    if det == 0.0 or not _np.isfinite(det):
        raise _SingularMatrixError(f'non-invertible matrix (det={det})\n{M_}')
    return C.T/det


def to4x4(M: _FloatSequence) -> _np.ndarray:
    """
    Embed a 3x3 matrix in a 4x4 homogeneous matrix.

    Parameters
    ----------
    M : numpy.ndarray, shape (3,3)
        Linear map.

    Returns
    -------
    M_4 : numpy.ndarray, shape (4,4)
        Homogeneous matrix without translation.
    """
    M_4 = _np.eye(4)
    M_4[:3,:3] = _as_matrix(M,3)
    return M_4


def to3x3(M: _FloatSequence) -> _np.ndarray:
    """
    Extract the linear part of a 4x4 homogeneous matrix.

    Parameters
    ----------
    M : numpy.ndarray, shape (4,4)
        Homogeneous matrix.

    Returns
    -------
    M_3 : numpy.ndarray, shape (3,3)
        Linear map, translation is discarded.
    """
    return _as_matrix(M,4)[:3,:3].copy()


def dot(u: _FloatSequence,
        v: _FloatSequence) -> _np.ndarray:
    """Scalar product along the last axis."""
    return _np.einsum('...i,...i',_np.asarray(u,dtype=float),_np.asarray(v,dtype=float))


def cross(u: _FloatSequence,
          v: _FloatSequence) -> _np.ndarray:
    """Vector product along the last axis."""
    return _np.cross(_np.asarray(u,dtype=float),_np.asarray(v,dtype=float))


def norm(v: _FloatSequence) -> _np.ndarray:
    """Euclidean length along the last axis."""
    return _np.linalg.norm(_np.asarray(v,dtype=float),axis=-1)


def normalize(v: _FloatSequence) -> _np.ndarray:
    """
    Scale vector to unit length.

    Parameters
    ----------
    v : numpy.ndarray, shape (...,3)
        Vector(s) to normalize.

    Returns
    -------
    v_hat : numpy.ndarray, shape (...,3)
        Unit vector(s) along v.

    Raises
    ------
    DegenerateVectorError
        If any vector has (near) zero length.
    """
    v_ = _np.asarray(v,dtype=float)
    length = _np.linalg.norm(v_,axis=-1,keepdims=True)
    if _np.any(length <= EPSILON) or not _np.all(_np.isfinite(length)):
        raise _DegenerateVectorError(f'cannot normalize vector of length {_np.squeeze(length)}: {v_}')
    return v_/length


def project(u: _FloatSequence,
            v: _FloatSequence) -> _np.ndarray:
    """
    Project vector u onto vector v.

    Parameters
    ----------
    u : numpy.ndarray, shape (3)
        Vector to project.
    v : numpy.ndarray, shape (3)
        Vector to project onto.

    Returns
    -------
    p : numpy.ndarray, shape (3)
        Component of u along v.

    Raises
    ------
    DegenerateVectorError
        If v has (near) zero length.
    """
    u_ = _np.asarray(u,dtype=float)
    v_ = _np.asarray(v,dtype=float)
    vv = dot(v_,v_)
    if vv <= EPSILON**2:
        raise _DegenerateVectorError(f'cannot project onto vector of length {_np.sqrt(vv)}: {v_}')
    return dot(u_,v_)/vv * v_
