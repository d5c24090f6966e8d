import matplotlib
import pytest

matplotlib.use('Agg')


@pytest.fixture
def scenario():
    """Parameters of the reference scenario: a packet at x0=8 in a well of length 10"""
    return dict(L=10.0, M=50, K=5, x0=8.0, f=2.0, sigma=0.5)
