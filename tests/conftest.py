import numpy as np
import pytest

import crystview


def pytest_addoption(parser):
    parser.addoption('--rng-entropy',
                     help='Entropy for random seed generator.')

@pytest.fixture
def np_rng(request):
    """Instance of numpy.random.Generator."""
    e = request.config.getoption('--rng-entropy')
    print('\nrng entropy: ',sq := np.random.SeedSequence(e if e is None else int(e)).entropy)
    return np.random.default_rng(seed=sq)


@pytest.fixture
def cells():
    """Unit cells of all crystal families."""
    return {
            'cubic':        crystview.UnitCell(5.0,5.0,5.0,90,90,90),
            'tetragonal':   crystview.UnitCell(4.0,4.0,6.5,90,90,90),
            'orthorhombic': crystview.UnitCell(3.0,4.5,6.0,90,90,90),
            'hexagonal':    crystview.UnitCell(3.2,3.2,5.2,90,90,120),
            'monoclinic':   crystview.UnitCell(5.1,3.6,7.2,90,104.5,90),
            'triclinic':    crystview.UnitCell(4.3,5.7,6.1,82.0,71.5,95.3),
           }


@pytest.fixture
def random_cell(np_rng):
    """Unit cell with random (physical) lattice parameters."""
    while True:
        abc = np_rng.random(3)*9.+1.
        angles = np_rng.random(3)*100.+40.
        try:
            cell = crystview.UnitCell(*abc,*angles)
        except crystview.errors.InvalidCellError:
            continue
        if cell.volume/np.prod(abc) > 0.3: return cell


@pytest.fixture
def assert_allclose():
    """
    Asserts the element-wise equality of two arrays within relative+absolute tolerance.

    Parameters
    ----------
    a : np.ndarray
        Array to compare.
    b : np.ndarray
        Array to compare.
    rtol : float
        Relative tolerance.
    atol : float
        Absolute tolerance.
    N : int
        Maximum number of reported deviating values.
        Defaults to 16. N=None outputs all values.
    msg : str
        Informative message.

    """
    def _assert_allclose(a,b,
                         rtol: float = 1e-05,
                         atol: float = 1e-08,
                         N = 16,
                         msg = '',
                         ):
        assert np.logical_or(np.isclose(a,b, rtol=rtol,atol=atol),
                             np.isclose(b,a, rtol=rtol,atol=atol)).all(), \
               report_nonclose(a,b, rtol=rtol,atol=atol, N=N, msg=msg)

    return _assert_allclose


def report_nonclose(a, b, rtol, atol, N, msg):
    """
    Report where values of two arrays deviate from each other.

    Output is sorted from large to small magnitude of absolute difference.

    Parameters
    ----------
    a : np.ndarray
        Array to compare.
    b : np.ndarray
        Array to compare.
    rtol : float
        Relative tolerance.
    atol : float
        Absolute tolerance.
    N : int
        Maximum number of reported deviating values.
        Defaults to all.
    msg : str
        Informative message added to output.
        Defaults to None.

    Returns
    -------
    description : str
        Description of differences.

    """
    a_ = np.asarray(a)
    b_ = np.asarray(b)
    if a_.shape != b_.shape: b_ = np.broadcast_to(b_,a_.shape)

    absdiff = np.abs(a_ - b_)
    absmax  = np.max(np.abs(np.stack((a_, b_))), axis=0)

    idx = (absdiff > atol + rtol * absmax).nonzero()
    ids = np.argsort(absdiff[idx])[::-1]
    n = len(idx[0])
    split = N is not None and N<n
    head,tail = (slice(0,(N+1)//2),slice(n-N//2,n)) if split else (slice(0,n),slice(n,n))
    diffs = [ f'abs / rel diff {absdiff[idx][i]:>16.10g} / {absdiff[idx][i]/absmax[idx][i]:<16.10g}'
             +f' between {a_[idx][i]:>16.10g} and {b_[idx][i]:<16.10g}'
             +f' at {np.transpose(idx)[i]}' for i in list(ids[head])+list(ids[tail])]
    if split: diffs.insert(head.stop,'...')

    return '\n'.join(['']+diffs
                     +['',f'fraction {n}/{a_.size} outside tolerance']
                     +(['',msg] if msg is not None else [])
                     )
