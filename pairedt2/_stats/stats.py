"""Statistics functions that work on numpy arrays."""
from __future__ import annotations

import logging
from typing import NamedTuple, Optional

import numpy as np
import scipy.stats
from scipy.linalg import LinAlgError, inv

from .._config import CONFIG
from .._exceptions import SingularCovarianceError
from .covariance import CovarianceArg, get_strategy


class PairedT2(NamedTuple):
    t2: float
    f: Optional[float]
    p: Optional[float]
    df1: int
    df2: Optional[int]
    mean_difference: np.ndarray
    cov: np.ndarray


def euclidean_distance(y1, y0):
    """Euclidean distance between the variable means of two samples

    Parameters
    ----------
    y1, y0 : array  (n_cases, n_vars)
        The two samples (the number of cases can differ).
    """
    return float(np.linalg.norm(np.mean(y1, 0) - np.mean(y0, 0)))


def inv_cov(cov: np.ndarray, strategy: str = None) -> np.ndarray:
    """Invert a covariance matrix, raising an error for singular matrices

    A matrix is considered singular when its reciprocal condition number is
    below ``CONFIG['singular_tol'] * n_vars`` (the criterion
    :func:`numpy.linalg.matrix_rank` uses for rank deficiency).
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        rcond = 1 / np.linalg.cond(cov)
    if not np.isfinite(rcond):
        rcond = 0.
    logging.getLogger('pairedt2').debug("Covariance reciprocal condition number: %.3g", rcond)
    if rcond < CONFIG['singular_tol'] * len(cov):
        raise SingularCovarianceError(rcond, strategy)
    try:
        return inv(cov, check_finite=False)
    except LinAlgError:
        raise SingularCovarianceError(rcond, strategy)


def t2_paired(d: np.ndarray, cov_inv: np.ndarray) -> float:
    "T**2-value for the mean of paired differences ``d`` (n_cases, n_vars)"
    n = len(d)
    mean = d.mean(0)
    return float(n * mean.dot(cov_inv).dot(mean))


def t2_f(t2, n, p):
    "Convert Hotelling's T**2 to F with ``(p, n - p)`` degrees of freedom"
    df2 = n - p
    return t2 / (p * (n - 1) / df2)


def ftest_p(f, df_num, df_den):
    "P values for given f values."
    f = np.asanyarray(f)
    p = scipy.stats.f.sf(f, df_num, df_den)
    return p


def hotelling_t2_paired(
        y1: np.ndarray,  # (n_cases, n_vars)
        y0: np.ndarray,  # (n_cases, n_vars)
        covariance: CovarianceArg = False,
) -> PairedT2:
    """Hotelling's T**2 test for paired multivariate observations

    Tests whether the mean of the differences ``y1 - y0`` is zero.

    Parameters
    ----------
    y1, y0 : array  (n_cases, n_vars)
        Observations with matching rows.
    covariance : bool | str | CovarianceStrategy
        Covariance estimator for the differences (see
        :func:`~.covariance.get_strategy`; default classical estimator).

    Returns
    -------
    result : PairedT2
        Test result. With ``n_cases <= n_vars``, ``T**2`` is reported but
        ``f``, ``p`` and ``df2`` are ``None``.

    Notes
    -----
    The differences are ``d = y1 - y0``, with mean ``d_bar`` and covariance
    ``S``. The test statistic is ``T**2 = n * d_bar' S^-1 d_bar``, which is
    converted to ``F = T**2 * (n - p) / (p * (n - 1))`` with ``(p, n - p)``
    degrees of freedom.
    """
    y1 = np.asarray(y1, np.float64)
    y0 = np.asarray(y0, np.float64)
    if y1.shape != y0.shape:
        raise ValueError(f"y1 and y0 need same shape; got {y1.shape} and {y0.shape}")
    elif y1.ndim != 2:
        raise ValueError(f"y1 with shape {y1.shape}: needs 2 dimensions (observations, variables)")
    n, p = y1.shape
    strategy = get_strategy(covariance)
    logger = logging.getLogger('pairedt2')
    logger.debug("Paired T**2 with n=%i, p=%i, %r", n, p, strategy)

    d = y1 - y0
    cov = strategy(d)
    cov_inv = inv_cov(cov, strategy.name)
    t2 = t2_paired(d, cov_inv)
    if n <= p:
        f = pval = df2 = None
    else:
        df2 = n - p
        f = float(t2_f(t2, n, p))
        pval = float(ftest_p(f, p, df2))
    return PairedT2(t2, f, pval, p, df2, d.mean(0), cov)
