from typing import Optional

import numpy as np

from ._typehints import FloatSequence, LatticeBasis
from .errors import DegenerateVectorError
from . import util
from . import lattice


def _as_vector(v: FloatSequence,
               label: str) -> np.ndarray:
    v_ = np.array(v,dtype=float)
    if v_.shape != (3,):
        raise ValueError(f'invalid shape {v_.shape} for {label} vector')
    if not np.all(np.isfinite(v_)):
        raise ValueError(f'non-finite {label} vector {v_}')
    v_.setflags(write=False)
    return v_


class ViewRequest():
    """
    Requested view direction.

    The projection vector becomes the viewing axis (pointing towards the viewer),
    the up vector is the approximate upward direction on screen.

    Attributes
    ----------
    projection : numpy.ndarray, shape (3)
        Projection vector in lattice coordinates.
    up : numpy.ndarray, shape (3)
        Up vector in lattice coordinates.
    basis : {'direct', 'reciprocal'}
        Lattice basis of the projection vector.
    up_basis : {'direct', 'reciprocal'}
        Lattice basis of the up vector.
    up_given : bool
        Whether the up vector was specified explicitly.

    Examples
    --------
    View along [110] with the default up vector (001)
    from the reciprocal lattice:

    >>> import crystview
    >>> crystview.ViewRequest([1,1,0])
    Projection vector: [1 1 0]
    Up vector: (0 0 1)
    """

    def __init__(self,
                 projection: FloatSequence,
                 up: Optional[FloatSequence] = None,
                 basis: LatticeBasis = 'direct',
                 up_basis: Optional[LatticeBasis] = None):
        """
        New view request.

        Parameters
        ----------
        projection : numpy.ndarray, shape (3)
            Projection vector, i.e. direction [uvw] or plane normal (hkl).
        up : numpy.ndarray, shape (3), optional
            Up vector. Defaults to (0,0,1) in the basis
            complementary to 'basis'.
        basis : {'direct', 'reciprocal'}, optional
            Lattice basis of the projection vector. Defaults to 'direct'.
        up_basis : {'direct', 'reciprocal'}, optional
            Lattice basis of the up vector. Defaults to 'basis' if 'up'
            is given and to the complementary basis otherwise.
        """
        lattice.check_basis(basis)
        lattice.check_basis(up_basis,optional=True)

        self.projection = _as_vector(projection,'projection')
        if not np.any(self.projection):
            raise DegenerateVectorError('projection along zero vector')

        self.basis = basis
        self.up_given = up is not None
        if up is None:
            self.up = _as_vector([0,0,1],'up')
            self.up_basis = lattice.complementary(basis) if up_basis is None else up_basis
        else:
            self.up = _as_vector(up,'up')
            if not np.any(self.up):
                raise DegenerateVectorError('up vector is zero vector')
            self.up_basis = basis if up_basis is None else up_basis


    def __repr__(self) -> str:
        """
        Return repr(self).

        Give short, human-readable summary.
        """
        def label(v,basis):
            return util.Miller_label(v,'[]' if basis == 'direct' else '()')

        return util.srepr([f'Projection vector: {label(self.projection,self.basis)}',
                           f'Up vector: {label(self.up,self.up_basis)}'])


    def __eq__(self,
               other: object) -> bool:
        """
        Return self==other.

        Test equality of other.

        Parameters
        ----------
        other : ViewRequest
            View request to check for equality.

        Returns
        -------
        equal : bool
            Whether both requests specify identical vectors in identical bases.
        """
        return NotImplemented if not isinstance(other, ViewRequest) else \
               bool(np.array_equal(self.projection,other.projection) and
                    np.array_equal(self.up,other.up) and
                    self.basis == other.basis and
                    self.up_basis == other.up_basis)
