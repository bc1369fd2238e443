"""Repeated measures test for multivariate observations"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import cached_property
import logging
from typing import Any, Dict, List, Literal, Optional, Tuple

import numpy as np

from .._data_obj import FlattenFunc, LabelsArg, ObservationMatrix, align1, asobservations
from .._exceptions import LabelMismatchError, ShapeMismatchError
from .covariance import CovarianceStrategy, get_strategy
from . import stats


__test__ = False
DEFAULT_LEVELS = {.05: '*', .01: '**', .001: '***'}

NoticeKind = Literal['label-matching', 'positional-matching', 'low-sample-size']


def star(p: Optional[float], levels: Dict[float, str] = None) -> str:
    """Stars for a p-value (``''`` for missing p-values)

    Parameters
    ----------
    p
        P-value.
    levels
        ``{p: str, ...}`` dictionary. The default is ``{.05 : '*',
        .01 : '**', .001: '***'}``.
    """
    if p is None:
        return ''
    if levels is None:
        levels = DEFAULT_LEVELS
    levels_descending = sorted(levels, reverse=True)
    symbols_descending = [''] + [levels[level] for level in levels_descending]
    n = sum(p <= level for level in levels_descending)
    return symbols_descending[n]


@dataclass(frozen=True)
class Notice:
    """Advisory notice about how a test was computed

    Notices do not affect the result; they are logged as warnings on the
    ``pairedt2`` logger and stored in :attr:`RepeatedMeasuresTest.notices`.
    """
    kind: NoticeKind
    message: str

    def __str__(self):
        return self.message


@dataclass(frozen=True)
class RepeatedMeasuresResult:
    """Result of :func:`repeated_measures_test`

    Attributes
    ----------
    EuclideanD : float
        Euclidean distance between the variable means of the two conditions.
    HotellingT2 : float
        Paired Hotelling's T**2 statistic.
    Fstat : float | None
        F statistic (``None`` if the number of observations does not exceed
        the number of variables).
    p_value : float | None
        P-value of the F statistic (``None`` when ``Fstat`` is ``None``).
    """
    EuclideanD: float
    HotellingT2: float
    Fstat: Optional[float]
    p_value: Optional[float]

    def as_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)

    def as_array(self) -> np.ndarray:
        "Values as float array, with NaN for missing values"
        return np.array([np.nan if v is None else v for v in asdict(self).values()], np.float64)


def _notice(notices: List[Notice], kind: NoticeKind, message: str):
    logging.getLogger('pairedt2').warning(message)
    notices.append(Notice(kind, message))


def align_observations(
        t1: Any,
        t2: Any,
        match_by_label: bool = True,
        flatten: FlattenFunc = None,
        labels1: LabelsArg = None,
        labels2: LabelsArg = None,
) -> Tuple[ObservationMatrix, ObservationMatrix, List[Notice]]:
    """Match and validate observations from two conditions

    Parameters
    ----------
    t1, t2 : ObservationMatrix | array_like
        Observations in the two conditions, as ``(n_observations,
        n_variables)`` matrices or ``(n_landmarks, n_dims, n_observations)``
        landmark arrays.
    match_by_label
        Reorder observations in ``t2`` to match the labels of ``t1``
        (default). If ``False``, assume that observations are in the same
        order.
    flatten
        Vectorization adapter for landmark arrays.
    labels1, labels2
        Observation labels for ``t1`` and ``t2`` (override labels carried
        by the data).

    Returns
    -------
    t1, t2 : ObservationMatrix
        Observations with matching rows.
    notices : list of Notice
        Advisory notices.
    """
    t1 = asobservations(t1, labels1, flatten, 'T1')
    t2 = asobservations(t2, labels2, flatten, 'T2')
    if t1.n_cases != t2.n_cases:
        raise ShapeMismatchError('rows', t1.n_cases, t2.n_cases)
    elif t1.n_vars != t2.n_vars:
        raise ShapeMismatchError('columns', t1.n_vars, t2.n_vars)

    notices = []
    if match_by_label:
        if t1.labels is None:
            raise LabelMismatchError((), "T1 has no labels for matching observations (provide labels or use match_by_label=False)")
        t2 = align1(t2, t1.labels, 'T2', 'T1')
        _notice(notices, 'label-matching', "The names of the observations in the two datasets will be used for matching them")
    else:
        _notice(notices, 'positional-matching', "Names are not used, the observations will be assumed to be in the same order")

    if t1.n_cases <= t1.n_vars:
        _notice(notices, 'low-sample-size', f"Number of cases ({t1.n_cases}) less or equal to the number of variables ({t1.n_vars})")
    return t1, t2, notices


class RepeatedMeasuresTest:
    """Test for a difference between two repeated multivariate measures

    Paired Hotelling's T**2 test of the null hypothesis that there is no
    systematic difference between two sets of measurements taken on the same
    observations (e.g., specimens measured at two time points, or before and
    after preservation). Analysing the paired differences instead of treating
    the two sets as independent samples respects the repeated measures design.

    Parameters
    ----------
    t1 : ObservationMatrix | array_like
        Observations in the first condition, as ``(n_observations,
        n_variables)`` matrix or ``(n_landmarks, n_dims, n_observations)``
        landmark array.
    t2 : ObservationMatrix | array_like
        Observations in the second condition, in the same form as ``t1``.
    match_by_label
        Use observation labels to match observations in ``t2`` to those in
        ``t1`` (default). If ``False``, observations are assumed to be in the
        same order.
    use_shrinkage
        Use a Ledoit-Wolf shrinkage estimator of the covariance of the
        differences instead of the sample covariance. This avoids singular
        covariance matrices when observations are few relative to variables.
        Requires :mod:`sklearn`.
    covariance
        Custom covariance estimator (overrides ``use_shrinkage``).
    flatten
        Vectorization adapter for landmark arrays (default
        :func:`flatten_landmarks`).
    labels1, labels2
        Observation labels for ``t1`` and ``t2`` (e.g., when supplying plain
        arrays).

    Attributes
    ----------
    result : RepeatedMeasuresResult
        Summary record.
    notices : list of Notice
        Advisory notices issued while preparing the data.
    euclidean_d : float
        Euclidean distance between the condition means.
    t2 : float
        Hotelling's T**2.
    f : float | None
        F statistic (``None`` if ``n <= n_vars``).
    p : float | None
        P-value (``None`` if ``n <= n_vars``).
    n : int
        Number of observations.
    df1, df2 : int
        Degrees of freedom of the F statistic (``df2`` is ``None`` if
        ``n <= n_vars``).
    mean_difference : array  (n_vars,)
        Mean of the differences ``t2 - t1``.
    cov : array  (n_vars, n_vars)
        Covariance of the differences.

    Notes
    -----
    The covariance matrix of the differences needs to be non-singular, which
    generally requires more observations than variables. For shape data, one
    solution is to use the scores on all principal components with
    non-zero eigenvalues. Alternatively, set ``use_shrinkage=True``.

    If the number of observations does not exceed the number of variables,
    T**2 is still reported (as long as the covariance matrix can be
    inverted), but the F statistic and p-value are undefined.

    References
    ----------
    Fruciano C. 2016. Measurement error in geometric morphometrics.
    Development Genes and Evolution 226:139-158.

    Fruciano C. et al. 2020. Tissue preservation can affect geometric
    morphometric analyses: a case study using fish body shape. Zoological
    Journal of the Linnean Society 188:148-162.

    See Also
    --------
    repeated_measures_test : function returning only the result record
    """
    def __init__(
            self,
            t1: Any,
            t2: Any,
            match_by_label: bool = True,
            use_shrinkage: bool = False,
            covariance: CovarianceStrategy = None,
            flatten: FlattenFunc = None,
            labels1: LabelsArg = None,
            labels2: LabelsArg = None,
    ):
        strategy = get_strategy(bool(use_shrinkage) if covariance is None else covariance)
        t1, t2, notices = align_observations(t1, t2, match_by_label, flatten, labels1, labels2)
        self.euclidean_d = stats.euclidean_distance(t1.x, t2.x)
        res = stats.hotelling_t2_paired(t2.x, t1.x, strategy)
        self.notices = notices
        self.covariance = strategy
        self.n = t1.n_cases
        self.t2 = res.t2
        self.f = res.f
        self.p = res.p
        self.df1 = res.df1
        self.df2 = res.df2
        self.mean_difference = res.mean_difference
        self.cov = res.cov
        self.result = RepeatedMeasuresResult(self.euclidean_d, self.t2, self.f, self.p)

    def __repr__(self):
        return f"<{self.__class__.__name__}: n={self.n}, {self.df1} variables, {self.covariance.name} covariance; {self.full}>"

    @property
    def stars(self):
        return star(self.p)

    @cached_property
    def full(self) -> str:
        "Full description of the test result"
        out = [f"D = {self.euclidean_d:.3g}", f"T2 = {self.t2:.3g}"]
        if self.f is None:
            out.append("F undefined (n <= p)")
        else:
            out.append(f"F({self.df1}, {self.df2}) = {self.f:.2f}")
            out.append(f"p = {self.p:.3f}" if self.p >= .001 else "p < .001")
        return ', '.join(out)


def repeated_measures_test(
        t1: Any,
        t2: Any,
        match_by_label: bool = True,
        use_shrinkage: bool = False,
        **kwargs,
) -> RepeatedMeasuresResult:
    """Test for a difference between two repeated multivariate measures

    Parameters
    ----------
    t1, t2 : ObservationMatrix | array_like
        Observations in the two conditions, as ``(n_observations,
        n_variables)`` matrices or ``(n_landmarks, n_dims, n_observations)``
        landmark arrays.
    match_by_label
        Use observation labels to match observations in ``t2`` to those in
        ``t1`` (default). If ``False``, observations are assumed to be in the
        same order.
    use_shrinkage
        Use a Ledoit-Wolf shrinkage estimator of covariance.
    ...
        See :class:`RepeatedMeasuresTest`.

    Returns
    -------
    result : RepeatedMeasuresResult
        ``EuclideanD``, ``HotellingT2``, ``Fstat`` and ``p_value``.

    See Also
    --------
    RepeatedMeasuresTest : the same test, with access to advisory notices and
        intermediate values
    """
    return RepeatedMeasuresTest(t1, t2, match_by_label, use_shrinkage, **kwargs).result
