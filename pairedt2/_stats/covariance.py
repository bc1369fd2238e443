"""Covariance estimators for paired differences

A strategy takes the ``(n_cases, n_vars)`` matrix of paired differences and
returns an ``(n_vars, n_vars)`` covariance matrix. Strategies do not check
whether the result is invertible; see :func:`.stats.inv_cov`.
"""
from __future__ import annotations

import logging
from typing import Union

import numpy as np

from .._exceptions import SingularCovarianceError, StrategyUnavailableError


class CovarianceStrategy:
    """Base class for covariance estimators

    Subclasses implement :meth:`_estimate`; calling the strategy coerces the
    input and guarantees a symmetric ``(n_vars, n_vars)`` output.
    """
    name = None

    def __call__(self, d: np.ndarray) -> np.ndarray:
        d = np.asarray(d, np.float64)
        if d.ndim != 2:
            raise ValueError(f"d with shape {d.shape}: needs 2 dimensions (observations, variables)")
        n_vars = d.shape[1]
        cov = np.atleast_2d(self._estimate(d))
        if cov.shape != (n_vars, n_vars):
            raise RuntimeError(f"{self} returned covariance with shape {cov.shape} for {n_vars} variables")
        # remove rounding asymmetry
        return (cov + cov.T) / 2

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def _estimate(self, d: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class ClassicalCovariance(CovarianceStrategy):
    "Unbiased sample covariance (normalized by ``n - 1``)"
    name = 'classical'

    def _estimate(self, d):
        if len(d) < 2:
            raise SingularCovarianceError(0., self.name)
        return np.cov(d, rowvar=False, ddof=1)


class ShrinkageCovariance(CovarianceStrategy):
    """Ledoit-Wolf linear shrinkage estimator

    Shrinks the sample covariance towards a scaled identity matrix, yielding a
    well-conditioned estimate even when there are fewer observations than
    variables [1]_. Requires :mod:`sklearn`.

    Attributes
    ----------
    shrinkage_ : float
        Shrinkage intensity used in the last estimate (0 = sample covariance,
        1 = scaled identity).

    References
    ----------
    .. [1] Ledoit O, Wolf M. 2004. A well-conditioned estimator for
       large-dimensional covariance matrices. Journal of Multivariate
       Analysis 88:365-411.
    """
    name = 'shrinkage'

    def __init__(self):
        try:
            from sklearn.covariance import ledoit_wolf
        except ImportError:
            raise StrategyUnavailableError("Shrinkage covariance estimation requires scikit-learn (pip install scikit-learn)", name='sklearn')
        self._ledoit_wolf = ledoit_wolf
        self.shrinkage_ = None

    def _estimate(self, d):
        cov, self.shrinkage_ = self._ledoit_wolf(d)
        logging.getLogger('pairedt2').debug("Ledoit-Wolf shrinkage intensity %.4f", self.shrinkage_)
        return cov


CovarianceArg = Union[bool, str, CovarianceStrategy]
STRATEGIES = {
    'classical': ClassicalCovariance,
    'shrinkage': ShrinkageCovariance,
}


def get_strategy(covariance: CovarianceArg) -> CovarianceStrategy:
    """Resolve a covariance specification

    Parameters
    ----------
    covariance : bool | 'classical' | 'shrinkage' | CovarianceStrategy
        ``True`` for the shrinkage estimator, ``False`` for the classical
        estimator, or a strategy instance.
    """
    if isinstance(covariance, CovarianceStrategy):
        return covariance
    elif isinstance(covariance, bool):
        return ShrinkageCovariance() if covariance else ClassicalCovariance()
    elif isinstance(covariance, str):
        if covariance not in STRATEGIES:
            raise ValueError(f"{covariance=}; needs to be one of {', '.join(map(repr, STRATEGIES))}")
        return STRATEGIES[covariance]()
    elif isinstance(covariance, type) and issubclass(covariance, CovarianceStrategy):
        raise TypeError(f"{covariance=}: needs a strategy instance, not a class")
    else:
        raise TypeError(f"{covariance=}")
