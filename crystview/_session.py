import logging
from typing import Optional, Union, Any

import numpy as np

from ._typehints import FloatSequence, LatticeBasis
from ._unitcell import UnitCell, LatticeParameters
from ._viewrequest import ViewRequest
from ._viewbasis import ViewBasis
from ._config import Config
from . import lattice
from . import util
from . import view as _view


logger = logging.getLogger(__name__)


class LatticeSession():
    """
    Lattice state of a viewer.

    Caches the unit cell of the current lattice parameters and
    solves view directions with the configured tolerances.

    Examples
    --------
    View a hexagonal lattice along [1 1 0]:

    >>> import crystview
    >>> s = crystview.LatticeSession()
    >>> s.set_lattice_parameters(3.2,3.2,5.2,90,90,120)
    True
    >>> s.view_labels(s.solve_view([1,1,0]))
    ('Projection vector: [1 1 0]', 'Upward vector: [0 0 1]')
    """

    def __init__(self,
                 config: Optional[Union[Config, dict[str, Any]]] = None):
        """
        New lattice session without unit cell.

        Parameters
        ----------
        config : crystview.Config or dict, optional
            Numerical tolerances. Defaults to crystview.Config().

        Raises
        ------
        ValueError
            If the configuration contains unknown keys or invalid values.
        """
        self._config = Config(config)
        if not self._config.is_valid:
            raise ValueError(f'invalid configuration\n{self._config}')
        self._cell: Optional[UnitCell] = None


    def __repr__(self) -> str:
        """
        Return repr(self).

        Give short, human-readable summary.
        """
        return util.srepr(['Lattice session',
                           'no unit cell' if self._cell is None else repr(self._cell)])


    @property
    def config(self) -> Config:
        """Numerical tolerances."""
        return self._config


    @property
    def unit_cell(self) -> UnitCell:
        """Unit cell of the current lattice parameters."""
        if self._cell is None:
            raise KeyError('missing lattice parameters')
        return self._cell


    def set_lattice_parameters(self,
                               a: float, b: float, c: float,
                               alpha: float, beta: float, gamma: float) -> bool:
        """
        Update lattice parameters.

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

        Returns
        -------
        updated : bool
            Whether the unit cell was recomputed.
            Identical parameters and snap tolerance keep the current unit cell.

        Raises
        ------
        InvalidCellError
            If the parameters do not describe a physical cell.
            The current unit cell is kept.
        """
        parameters = LatticeParameters(*map(float,(a,b,c,alpha,beta,gamma)))
        snap = float(self._config['snap_zero'])
        if self._cell is not None and self._cell.parameters == parameters and self._cell.snap == snap:
            logger.debug('lattice parameters unchanged')
            return False

        self._cell = UnitCell(*parameters,snap=snap)
        logger.debug(f'new lattice parameters {tuple(parameters)}, V={self._cell.volume}')
        return True


    def lattice_parameters(self) -> LatticeParameters:
        """Return lattice parameters a, b, c, alpha, beta, gamma."""
        return self.unit_cell.parameters

    def cell_volume(self) -> float:
        """Return unit cell volume."""
        return self.unit_cell.volume


    def direct_to_cartesian(self,
                            v: FloatSequence,
                            normalize: bool = True) -> np.ndarray:
        """Convert direct lattice vector [uvw] to cartesian coordinates."""
        return lattice.direct_to_cartesian(v,self.unit_cell.basis_direct,normalize)

    def cartesian_to_direct(self,
                            v: FloatSequence) -> np.ndarray:
        """Convert cartesian vector to direct lattice coordinates [uvw]."""
        return lattice.cartesian_to_direct(v,self.unit_cell.basis_direct_inverse)

    def reciprocal_to_cartesian(self,
                                v: FloatSequence,
                                normalize: bool = True) -> np.ndarray:
        """Convert reciprocal lattice vector (hkl) to cartesian coordinates."""
        return lattice.reciprocal_to_cartesian(v,self.unit_cell.basis_reciprocal,normalize)

    def cartesian_to_reciprocal(self,
                                v: FloatSequence) -> np.ndarray:
        """Convert cartesian vector to reciprocal lattice coordinates (hkl)."""
        return lattice.cartesian_to_reciprocal(v,self.unit_cell.basis_reciprocal_inverse)


    def solve(self,
              request: ViewRequest,
              tolerance: Optional[float] = None) -> ViewBasis:
        """
        Calculate camera basis for a view request.

        Parameters
        ----------
        request : crystview.ViewRequest
            Projection and up vector.
        tolerance : float, optional
            Orthogonality tolerance. Defaults to the configured value.

        Returns
        -------
        view : crystview.ViewBasis
            Right-handed orthonormal basis with the projection direction as z.
        """
        return _view.solve_view(request,self.unit_cell,
                                self._config['orthogonality'] if tolerance is None else tolerance,
                                self._config['parallel'])


    def solve_view(self,
                   projection: FloatSequence,
                   up: Optional[FloatSequence] = None,
                   basis: LatticeBasis = 'direct',
                   up_basis: Optional[LatticeBasis] = None,
                   tolerance: Optional[float] = None) -> ViewBasis:
        """
        Calculate camera basis for viewing along a lattice vector.

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
            Lattice basis of an explicit up vector. Defaults to 'basis'.
        tolerance : float, optional
            Orthogonality tolerance. Defaults to the configured value.

        Returns
        -------
        view : crystview.ViewBasis
            Right-handed orthonormal basis with the projection direction as z.
        """
        return self.solve(ViewRequest(projection,up,basis,up_basis),tolerance)


    def needs_orthogonalization(self,
                                projection: FloatSequence,
                                up: Optional[FloatSequence] = None,
                                basis: LatticeBasis = 'direct',
                                up_basis: Optional[LatticeBasis] = None,
                                tolerance: Optional[float] = None) -> bool:
        """
        Check whether the up vector deviates from orthogonality to the projection vector.

        Parameters are the same as for 'solve_view'.

        Returns
        -------
        needs_orthogonalization : bool
            Whether 'solve_view' will correct the up vector.
        """
        return _view.needs_orthogonalization(ViewRequest(projection,up,basis,up_basis),self.unit_cell,
                                             self._config['orthogonality'] if tolerance is None else tolerance)


    def reduce_to_integers(self,
                           v: FloatSequence,
                           max_int: Optional[int] = None) -> Optional[np.ndarray]:
        """
        Scale vector to smallest integers using the configured tolerances.

        Parameters
        ----------
        v : sequence of float, len (3)
            Vector to scale.
        max_int : int, optional
            Largest scale factor to test. Defaults to the configured value.

        Returns
        -------
        m : numpy.ndarray, shape (3), or None
            Vector scaled to integers or None if not found.
        """
        return util.reduce_to_integers(v,
                                       self._config['max_int'] if max_int is None else max_int,
                                       self._config['integer_match'],
                                       self._config['zero_component'])


    def read_view_vectors(self,
                          view: Union[ViewBasis, FloatSequence],
                          basis: LatticeBasis = 'direct',
                          up_basis: Optional[LatticeBasis] = None,
                          max_int: Optional[int] = None) -> _view.ViewVectors:
        """
        Determine projection and up vector of a camera basis in lattice coordinates.

        Parameters
        ----------
        view : crystview.ViewBasis or numpy.ndarray, shape (3,3) or (4,4)
            Camera basis or rotation matrix with rows x, y, z.
        basis : {'direct', 'reciprocal'}, optional
            Lattice basis of the projection vector. Defaults to 'direct'.
        up_basis : {'direct', 'reciprocal'}, optional
            Lattice basis of the up vector. Defaults to 'basis'.
        max_int : int, optional
            Largest scale factor to test. Defaults to the configured value.

        Returns
        -------
        vectors : crystview.view.ViewVectors
            Integer and floating point projection and up vector.
        """
        return _view.read_view_vectors(view,self.unit_cell,basis,up_basis,
                                       self._config['max_int'] if max_int is None else max_int,
                                       self._config['integer_match'],
                                       self._config['zero_component'])


    def axes_in_view(self,
                     view: Union[ViewBasis, FloatSequence]) -> np.ndarray:
        """
        Project lattice axes onto the screen plane.

        Parameters
        ----------
        view : crystview.ViewBasis or numpy.ndarray, shape (3,3) or (4,4)
            Camera basis or rotation matrix with rows x, y, z.

        Returns
        -------
        axes : numpy.ndarray, shape (3,2)
            Screen coordinates (x, y) of the unit vectors along a, b, and c.
        """
        return _view.axes_in_view(view,self.unit_cell)


    def view_labels(self,
                    view: Union[ViewBasis, FloatSequence],
                    basis: LatticeBasis = 'direct') -> tuple[str, str]:
        """
        Describe projection and up vector of a camera basis.

        Parameters
        ----------
        view : crystview.ViewBasis or numpy.ndarray, shape (3,3) or (4,4)
            Camera basis or rotation matrix with rows x, y, z.
        basis : {'direct', 'reciprocal'}, optional
            Lattice basis of both vectors. Defaults to 'direct'.

        Returns
        -------
        projection, up : str
            Labels with integer indices if found, otherwise
            with components rounded to two decimals.
        """
        vectors = self.read_view_vectors(view,basis)

        def label(v):
            return util.Miller_label(v,'[]' if basis == 'direct' else '()',
                                     self._config['max_int'],
                                     self._config['integer_match'],
                                     self._config['zero_component'])

        return (f'Projection vector: {label(vectors.projection_raw)}',
                f'Upward vector: {label(vectors.up_raw)}')
