import numpy as np

from ._typehints import FloatSequence
from . import util
from . import linalg


class ViewBasis():
    """
    Orthonormal camera basis.

    Rows are the screen axes in cartesian coordinates:
    x (rightwards), y (upwards), and z (projection, towards the viewer).
    Applied as rotation matrix, it maps z onto the viewing axis.

    Examples
    --------
    Identity view:

    >>> import numpy as np
    >>> import crystview
    >>> crystview.ViewBasis(np.eye(3)).z
    array([0., 0., 1.])
    """

    def __init__(self,
                 matrix: FloatSequence):
        """
        New camera basis.

        Parameters
        ----------
        matrix : numpy.ndarray, shape (3,3) or (4,4)
            Rotation matrix with rows x, y, z.
            The translation of a homogeneous 4x4 matrix is ignored.
        """
        m = np.asarray(matrix,dtype=float)
        if m.shape == (4,4):
            m = linalg.to3x3(m)
        elif m.shape == (3,3):
            m = m.copy()
        else:
            raise ValueError(f'invalid shape {m.shape} for camera basis')
        if not np.all(np.isfinite(m)):
            raise ValueError(f'non-finite camera basis\n{m}')

        m.setflags(write=False)
        self._matrix = m


    def __repr__(self) -> str:
        """
        Return repr(self).

        Give short, human-readable summary.
        """
        return util.srepr([f'{label}: '+' '.join(f'{c:+1.3f}' for c in row)
                           for label,row in zip('xyz',self._matrix)])


    def __eq__(self,
               other: object) -> bool:
        """
        Return self==other.

        Test equality of other.

        Parameters
        ----------
        other : ViewBasis
            Camera basis to check for equality.

        Returns
        -------
        equal : bool
            Whether both bases are identical.
        """
        return NotImplemented if not isinstance(other, ViewBasis) else \
               bool(np.array_equal(self._matrix,other._matrix))


    def __array__(self, dtype=None, copy=None):
        """Return matrix with rows x, y, z."""
        return np.array(self._matrix,dtype=dtype)


    def allclose(self,
                 other: 'ViewBasis',
                 rtol: float = 1e-5,
                 atol: float = 1e-8) -> bool:
        """
        Test whether all axes of two bases are approximately equal.

        Parameters
        ----------
        other : ViewBasis
            Camera basis to compare against.
        rtol : float, optional
            Relative tolerance of equality.
        atol : float, optional
            Absolute tolerance of equality.

        Returns
        -------
        allclose : bool
            Whether all axes are approximately equal.
        """
        return bool(np.allclose(self._matrix,other._matrix,rtol=rtol,atol=atol))


    @property
    def x(self) -> np.ndarray:
        """Rightwards axis."""
        return self._matrix[0]

    @property
    def y(self) -> np.ndarray:
        """Upwards axis."""
        return self._matrix[1]

    @property
    def z(self) -> np.ndarray:
        """Projection axis."""
        return self._matrix[2]


    def as_matrix(self) -> np.ndarray:
        """
        Return rotation matrix.

        Returns
        -------
        matrix : numpy.ndarray, shape (3,3)
            Rotation matrix with rows x, y, z.
        """
        return self._matrix.copy()


    def as_matrix4(self) -> np.ndarray:
        """
        Return homogeneous rotation matrix.

        Returns
        -------
        matrix : numpy.ndarray, shape (4,4)
            Rotation matrix with rows x, y, z and no translation.
        """
        return linalg.to4x4(self._matrix)


    def is_orthonormal(self,
                       atol: float = 1e-9) -> bool:
        """
        Check for right-handed orthonormal basis.

        Parameters
        ----------
        atol : float, optional
            Absolute tolerance. Defaults to 1e-9.

        Returns
        -------
        orthonormal : bool
            Whether all axes have unit length, are mutually orthogonal,
            and x = y × z.
        """
        return bool(np.allclose(self._matrix@self._matrix.T,np.eye(3),rtol=0,atol=atol) and
                    np.allclose(linalg.cross(self.y,self.z),self.x,rtol=0,atol=atol))
