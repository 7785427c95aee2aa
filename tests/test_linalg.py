import pytest
import numpy as np

from crystview import linalg
from crystview.errors import SingularMatrixError, DegenerateVectorError


def test_cofactor_adjugate(np_rng):
    M = np_rng.random((3,3))
    assert np.allclose(linalg.cofactor3x3(M).T@M,np.eye(3)*np.linalg.det(M))

def test_determinant(np_rng):
    M = np_rng.random((3,3))*2.-1.
    assert np.isclose(linalg.determinant3x3(M),np.linalg.det(M))

@pytest.mark.parametrize('M',[np.eye(3),
                              np.diag([5.,5.,5.]),
                              [[1.,2.,0.],[0.,1.,4.],[5.,6.,0.]],
                             ])
def test_invert(M,assert_allclose):
    assert_allclose(linalg.invert3x3(M)@np.array(M),np.eye(3),atol=1e-12)

def test_invert_random(np_rng,assert_allclose):
    M = np_rng.random((3,3))+np.eye(3)
    assert_allclose(linalg.invert3x3(M),np.linalg.inv(M))

@pytest.mark.parametrize('M',[np.zeros((3,3)),
                              [[1.,2.,3.],[2.,4.,6.],[0.,0.,1.]],
                              [[np.inf,0.,0.],[0.,1.,0.],[0.,0.,1.]],
                             ])
def test_invert_singular(M):
    with pytest.raises(SingularMatrixError):
        linalg.invert3x3(M)

@pytest.mark.parametrize('shape',[(2,2),(3,4),(4,4),(3,)])
def test_invalid_shape(shape):
    with pytest.raises(ValueError):
        linalg.invert3x3(np.ones(shape))

def test_4x4_3x3(np_rng):
    M = np_rng.random((3,3))
    M_4 = linalg.to4x4(M)
    assert np.all(M_4[3] == [0,0,0,1]) and np.all(M_4[:3,3] == 0)
    assert np.all(linalg.to3x3(M_4) == M)

def test_to3x3_discards_translation(np_rng):
    M_4 = np_rng.random((4,4))
    assert np.all(linalg.to3x3(M_4) == M_4[:3,:3])

def test_normalize(np_rng):
    v = np_rng.random((10,3))+.1
    assert np.allclose(linalg.norm(linalg.normalize(v)),1.0)

@pytest.mark.parametrize('v',[np.zeros(3),[[1.,0.,0.],[0.,0.,0.]]])
def test_normalize_zero(v):
    with pytest.raises(DegenerateVectorError):
        linalg.normalize(v)

def test_project(np_rng):
    u,v = np_rng.random((2,3))
    p = linalg.project(u,v)
    assert np.allclose(linalg.cross(p,v),0.0)
    assert np.isclose(linalg.dot(u-p,v),0.0)

def test_project_zero():
    with pytest.raises(DegenerateVectorError):
        linalg.project([1,2,3],[0,0,0])

def test_cross_dot(np_rng):
    u,v = np_rng.random((2,3))
    assert np.allclose(linalg.cross(u,v),np.cross(u,v))
    assert np.isclose(linalg.dot(u,v),np.dot(u,v))
