import logging

import pytest
import numpy as np

from crystview import LatticeSession
from crystview import Config
from crystview import ViewRequest
from crystview import UnitCell
from crystview.errors import InvalidCellError


@pytest.fixture
def session():
    s = LatticeSession()
    s.set_lattice_parameters(5,5,5,90,90,90)
    return s


def test_no_cell():
    s = LatticeSession()
    with pytest.raises(KeyError):
        s.unit_cell
    with pytest.raises(KeyError):
        s.solve_view([1,0,0])
    with pytest.raises(KeyError):
        s.cell_volume()

def test_set_lattice_parameters(session):
    assert session.cell_volume() == pytest.approx(125.)
    assert session.lattice_parameters() == (5.,5.,5.,90.,90.,90.)
    assert session.unit_cell == UnitCell(5,5,5,90,90,90)

def test_unchanged(session,caplog):
    caplog.set_level(logging.DEBUG)
    cell = session.unit_cell
    assert not session.set_lattice_parameters(5.,5,5,90,90,90.)
    assert session.unit_cell is cell
    assert 'unchanged' in caplog.text

def test_changed(session):
    cell = session.unit_cell
    assert session.set_lattice_parameters(5,5,5,90,90,120)
    assert session.unit_cell is not cell
    assert session.cell_volume() == pytest.approx(125.*np.sqrt(3)/2)

def test_invalid_keeps_cell(session):
    cell = session.unit_cell
    with pytest.raises(InvalidCellError):
        session.set_lattice_parameters(1,1,1,0,0,0)
    assert session.unit_cell is cell
    assert np.allclose(session.direct_to_cartesian([1,0,0],normalize=False),[5,0,0])

def test_invalid_first():
    s = LatticeSession()
    with pytest.raises(InvalidCellError):
        s.set_lattice_parameters(1,1,1,150,150,150)
    with pytest.raises(KeyError):
        s.unit_cell

def test_transforms(session,np_rng,assert_allclose):
    v = np_rng.random(3)
    assert_allclose(session.cartesian_to_direct(session.direct_to_cartesian(v,normalize=False)),v)
    assert_allclose(session.cartesian_to_reciprocal(session.reciprocal_to_cartesian(v,normalize=False)),v)
    assert np.isclose(np.linalg.norm(session.direct_to_cartesian(v)),1.)
    assert np.isclose(np.linalg.norm(session.reciprocal_to_cartesian(v)),1.)

def test_solve_view(session):
    v = session.solve_view([0,0,1],[0,1,0])
    assert np.allclose(v.as_matrix(),np.eye(3))

def test_solve(session):
    r = ViewRequest([1,2,3],[1,0,0],'reciprocal','direct')
    assert session.solve(r) == session.solve_view([1,2,3],[1,0,0],'reciprocal','direct')

def test_needs_orthogonalization(session):
    assert not session.needs_orthogonalization([1,0,0],[0,1,0])
    assert session.needs_orthogonalization([1,0,0],[0.005,1,0],tolerance=1e-3)

def test_config_tolerance():
    s = LatticeSession(Config(orthogonality=1e-3))
    s.set_lattice_parameters(5,5,5,90,90,90)
    assert s.needs_orthogonalization([1,0,0],[0.005,1,0])
    assert not s.needs_orthogonalization([1,0,0],[0.005,1,0],tolerance=1e-2)

def test_config_dict():
    assert LatticeSession({'max_int':3}).config['max_int'] == 3

@pytest.mark.parametrize('config',[{'max_intt':5},
                                   {'orthogonality':-1.0},
                                   {'max_int':0}])
def test_config_invalid(config):
    with pytest.raises(ValueError):
        LatticeSession(config)

def test_snap_zero_changed():
    s = LatticeSession()
    assert s.set_lattice_parameters(5,5,5,90,90,89.999)
    assert s.unit_cell.basis_direct[0,1] != 0.
    s.config['snap_zero'] = 1e-1
    assert s.set_lattice_parameters(5,5,5,90,90,89.999)
    assert s.unit_cell.snap == 1e-1
    assert s.unit_cell.basis_direct[0,1] == 0.
    assert not s.set_lattice_parameters(5,5,5,90,90,89.999)

def test_reduce_to_integers(session):
    assert np.all(session.reduce_to_integers([0.333333,0.111111,0.777777]) == [3,1,7])
    assert session.reduce_to_integers([0.25,0.5,1/3],max_int=2) is None
    assert np.all(session.reduce_to_integers([0.25,0.5,1/3],max_int=3) == [3,6,4])

def test_reduce_to_integers_config():
    s = LatticeSession({'max_int':2})
    assert s.reduce_to_integers([0.25,0.5,1/3]) is None

def test_read_view_vectors(session):
    vectors = session.read_view_vectors(session.solve_view([1,1,0]))
    assert np.all(vectors.projection == [1,1,0])
    assert np.all(vectors.up == [0,0,1])

def test_axes_in_view(session):
    assert np.allclose(session.axes_in_view(np.eye(4)),[[1,0],[0,1],[0,0]])

def test_view_labels():
    s = LatticeSession()
    s.set_lattice_parameters(3.2,3.2,5.2,90,90,120)
    assert s.view_labels(s.solve_view([1,1,0])) == ('Projection vector: [1 1 0]',
                                                    'Upward vector: [0 0 1]')

def test_view_labels_reciprocal(session):
    assert session.view_labels(session.solve_view([1,1,1],basis='reciprocal'),'reciprocal') \
           == ('Projection vector: (1 1 1)','Upward vector: (-1 -1 2)')

def test_view_labels_float():
    angle = np.radians(10.)
    R = np.array([[ np.cos(angle),np.sin(angle),0],
                  [-np.sin(angle),np.cos(angle),0],
                  [0,0,1]])
    s = LatticeSession({'max_int':2})
    s.set_lattice_parameters(1,1,1,90,90,90)
    assert s.view_labels(R) == ('Projection vector: [0 0 1]',
                                'Upward vector: [-0.17 0.98 0.00]')

def test_repr(session):
    assert repr(LatticeSession()) == 'Lattice session\nno unit cell'
    assert repr(session).startswith('Lattice session\nUnit cell')
