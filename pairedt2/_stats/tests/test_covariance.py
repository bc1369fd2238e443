import sys

import numpy as np
from numpy.testing import assert_allclose, assert_array_equal
import pytest
from sklearn.covariance import LedoitWolf

from pairedt2 import SingularCovarianceError, StrategyUnavailableError, test
from pairedt2._stats import covariance
from pairedt2._stats.covariance import ClassicalCovariance, CovarianceStrategy, ShrinkageCovariance


class AsymmetricCovariance(CovarianceStrategy):
    name = 'asymmetric'

    def _estimate(self, d):
        return np.triu(np.ones((d.shape[1], d.shape[1])))


class WrongShapeCovariance(CovarianceStrategy):
    name = 'wrong'

    def _estimate(self, d):
        return np.eye(d.shape[1] + 1)


def test_classical():
    "Test the sample covariance estimator"
    random = np.random.RandomState(0)
    d = random.normal(0, 1, (20, 4))
    cov = ClassicalCovariance()(d)
    assert cov.shape == (4, 4)
    assert_allclose(cov, np.cov(d.T))
    assert_array_equal(cov, cov.T)

    # single variable
    cov = ClassicalCovariance()(d[:, :1])
    assert cov.shape == (1, 1)
    assert cov[0, 0] == pytest.approx(d[:, 0].var(ddof=1))

    # constant differences
    cov = ClassicalCovariance()(np.ones((5, 2)))
    assert_array_equal(cov, 0)

    # a single observation has no covariance
    with pytest.raises(SingularCovarianceError) as exc_info:
        ClassicalCovariance()(d[:1])
    assert exc_info.value.strategy == 'classical'
    assert exc_info.value.rcond == 0
    for use_shrinkage in (False, True):
        with pytest.raises(SingularCovarianceError):
            test.repeated_measures_test(d[:1], d[:1] + 1, match_by_label=False, use_shrinkage=use_shrinkage)
    with pytest.raises(ValueError):
        ClassicalCovariance()(d[:, 0, None, None])


def test_shrinkage():
    "Test the Ledoit-Wolf estimator"
    random = np.random.RandomState(0)
    d = random.normal(0, 1, (20, 4))
    strategy = ShrinkageCovariance()
    assert strategy.shrinkage_ is None
    cov = strategy(d)
    lw = LedoitWolf().fit(d)
    assert_allclose(cov, lw.covariance_)
    assert strategy.shrinkage_ == pytest.approx(lw.shrinkage_)
    assert 0 <= strategy.shrinkage_ <= 1

    # fewer observations than variables: sample covariance is rank deficient
    d = random.normal(0, 1, (4, 6))
    assert np.linalg.matrix_rank(ClassicalCovariance()(d)) < 6
    cov = ShrinkageCovariance()(d)
    assert np.linalg.matrix_rank(cov) == 6
    assert_allclose(cov, cov.T)


def test_shrinkage_unavailable(monkeypatch):
    "Test error when scikit-learn can not be imported"
    monkeypatch.setitem(sys.modules, 'sklearn.covariance', None)
    with pytest.raises(StrategyUnavailableError) as exc_info:
        ShrinkageCovariance()
    assert isinstance(exc_info.value, ImportError)
    assert 'scikit-learn' in str(exc_info.value)
    with pytest.raises(StrategyUnavailableError):
        covariance.get_strategy(True)
    # the test fails before processing any data
    with pytest.raises(StrategyUnavailableError):
        test.repeated_measures_test(np.ones((3, 2)), np.ones((4, 2)), use_shrinkage=True)
    # the classical estimator does not depend on it
    d = np.random.RandomState(0).normal(0, 1, (10, 2))
    ClassicalCovariance()(d)


def test_custom_strategy():
    "Test output checks for strategy subclasses"
    d = np.random.RandomState(0).normal(0, 1, (10, 3))
    cov = AsymmetricCovariance()(d)
    assert_array_equal(cov, cov.T)
    assert cov[0, 1] == 0.5
    with pytest.raises(RuntimeError):
        WrongShapeCovariance()(d)
    with pytest.raises(NotImplementedError):
        CovarianceStrategy()(d)


def test_get_strategy():
    "Test resolving covariance specifications"
    assert isinstance(covariance.get_strategy(False), ClassicalCovariance)
    assert isinstance(covariance.get_strategy(True), ShrinkageCovariance)
    assert isinstance(covariance.get_strategy('classical'), ClassicalCovariance)
    assert isinstance(covariance.get_strategy('shrinkage'), ShrinkageCovariance)
    strategy = AsymmetricCovariance()
    assert covariance.get_strategy(strategy) is strategy
    assert repr(strategy) == 'AsymmetricCovariance()'

    with pytest.raises(ValueError):
        covariance.get_strategy('oas')
    with pytest.raises(TypeError):
        covariance.get_strategy(ShrinkageCovariance)
    with pytest.raises(TypeError):
        covariance.get_strategy(1)
