"""Repeated measures tests for multivariate data."""
__test__ = False
from ._stats.covariance import CovarianceStrategy, ClassicalCovariance, ShrinkageCovariance
from ._stats.test import (
    Notice, RepeatedMeasuresResult, RepeatedMeasuresTest,
    align_observations, repeated_measures_test, star,
)
