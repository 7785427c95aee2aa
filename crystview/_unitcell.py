from typing import NamedTuple

import numpy as np

from . import util
from . import linalg
from . import lattice


class LatticeParameters(NamedTuple):
    a: float
    b: float
    c: float
    alpha: float
    beta: float
    gamma: float


class UnitCell():
    """
    Unit cell defined by lattice parameters.

    Holds the direct and reciprocal lattice bases together with their inverses.
    All matrices are computed on initialization and are read-only;
    a change of lattice parameters requires a new unit cell.

    Attributes
    ----------
    parameters : crystview.LatticeParameters
        Lattice parameters a, b, c, alpha, beta, gamma (angles in degrees).
    snap : float
        Tolerance below which basis entries were set to zero.
    volume : float
        Unit cell volume.
    basis_direct : numpy.ndarray, shape (3,3)
        Direct lattice vectors a, b, c as columns.
    basis_direct_inverse : numpy.ndarray, shape (3,3)
        Inverse of the direct lattice basis.
    basis_reciprocal : numpy.ndarray, shape (3,3)
        Reciprocal lattice vectors a*, b*, c* as columns.
    basis_reciprocal_inverse : numpy.ndarray, shape (3,3)
        Inverse of the reciprocal lattice basis.

    Examples
    --------
    Cubic unit cell with a lattice parameter of 5 Å:

    >>> import crystview
    >>> crystview.UnitCell(5,5,5,90,90,90)
    Unit cell
    a=5 Å, b=5 Å, c=5 Å
    α=90°, β=90°, γ=90°
    V=125 Å³
    """

    def __init__(self,
                 a: float, b: float, c: float,
                 alpha: float, beta: float, gamma: float,
                 snap: float = lattice.SNAP_ZERO):
        """
        New unit cell.

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
            Basis entries with an absolute value below 'snap' are set to zero.
            Defaults to 1e-5.
        """
        basis,volume = lattice.build_unit_cell(a,b,c,alpha,beta,gamma,snap)
        basis_reciprocal = lattice.build_reciprocal(basis,volume)

        self._parameters = LatticeParameters(*map(float,(a,b,c,alpha,beta,gamma)))
        self._snap = float(snap)
        self._volume = volume
        self._basis_direct = basis
        self._basis_direct_inverse = linalg.invert3x3(basis)
        self._basis_reciprocal = basis_reciprocal
        self._basis_reciprocal_inverse = linalg.invert3x3(basis_reciprocal)
        for m in (self._basis_direct,self._basis_direct_inverse,
                  self._basis_reciprocal,self._basis_reciprocal_inverse):
            m.setflags(write=False)


    def __repr__(self) -> str:
        """
        Return repr(self).

        Give short, human-readable summary.
        """
        return util.srepr(['Unit cell',
                           'a={a:.5g} Å, b={b:.5g} Å, c={c:.5g} Å'.format(**self.parameters._asdict()),
                           'α={alpha:.5g}°, β={beta:.5g}°, γ={gamma:.5g}°'.format(**self.parameters._asdict()),
                           f'V={self.volume:.5g} Å³',
                          ])


    def __eq__(self,
               other: object) -> bool:
        """
        Return self==other.

        Test equality of other.

        Parameters
        ----------
        other : UnitCell
            Unit cell to check for equality.

        Returns
        -------
        equal : bool
            Whether both arguments have identical lattice parameters.
        """
        return NotImplemented if not isinstance(other, UnitCell) else \
               self.parameters == other.parameters


    @property
    def parameters(self) -> LatticeParameters:
        """Lattice parameters a, b, c, alpha, beta, gamma."""
        return self._parameters

    @property
    def snap(self) -> float:
        """Tolerance below which basis entries were set to zero."""
        return self._snap

    @property
    def volume(self) -> float:
        """Unit cell volume."""
        return self._volume

    @property
    def basis_direct(self) -> np.ndarray:
        """Direct lattice basis."""
        return self._basis_direct

    @property
    def basis_direct_inverse(self) -> np.ndarray:
        """Inverse of direct lattice basis."""
        return self._basis_direct_inverse

    @property
    def basis_reciprocal(self) -> np.ndarray:
        """Reciprocal lattice basis."""
        return self._basis_reciprocal

    @property
    def basis_reciprocal_inverse(self) -> np.ndarray:
        """Inverse of reciprocal lattice basis."""
        return self._basis_reciprocal_inverse


    def as_matrix4(self) -> np.ndarray:
        """
        Return direct lattice basis as homogeneous matrix.

        Returns
        -------
        basis : numpy.ndarray, shape (4,4)
            Direct lattice basis without translation,
            suitable for composition with 4x4 rotation matrices.
        """
        return linalg.to4x4(self.basis_direct)


    def to_frame(self, *,
                 uvw=None,
                 hkl=None,
                 normalize: bool = True) -> np.ndarray:                                             # numpydoc ignore=PR01,PR02
        """
        Calculate cartesian vector corresponding to lattice direction [uvw] or plane normal (hkl).

        Parameters
        ----------
        uvw|hkl : numpy.ndarray, shape (...,3)
            Miller indices of crystallographic direction or plane normal.
        normalize : bool, optional
            Return unit vector(s). Defaults to True.

        Returns
        -------
        vector : numpy.ndarray, shape (...,3)
            Cartesian vector along [uvw] direction or (hkl) plane normal.
        """
        if (uvw is not None) ^ (hkl is None):
            raise KeyError('specify either "uvw" or "hkl"')
        return lattice.to_cartesian(uvw if hkl is None else hkl,
                                    self,'direct' if hkl is None else 'reciprocal',normalize)


    def to_lattice(self, *,
                   direction=None,
                   plane=None) -> np.ndarray:                                                       # numpydoc ignore=PR01,PR02
        """
        Calculate lattice vector corresponding to cartesian direction or plane normal.

        Parameters
        ----------
        direction|plane : numpy.ndarray, shape (...,3)
            Cartesian vector along direction or plane normal.

        Returns
        -------
        Miller : numpy.ndarray, shape (...,3)
            Lattice vector [uvw] of direction or (hkl) of plane.
            Use util.reduce_to_integers to convert to (integer) Miller indices.
        """
        if (direction is not None) ^ (plane is None):
            raise KeyError('specify either "direction" or "plane"')
        return lattice.from_cartesian(direction if plane is None else plane,
                                      self,'direct' if plane is None else 'reciprocal')
