"""Paired Hotelling's T**2 test for repeated multivariate measures.

Test whether two sets of multivariate measurements taken on the same
observations (e.g., shape variables of the same specimens measured before
and after preservation) differ systematically::

    >>> from pairedt2 import datasets, test
    >>> t1, t2 = datasets.get_paired()
    >>> test.repeated_measures_test(t1, t2)

"""
from ._config import configure
from ._data_obj import ObservationMatrix, asobservations, flatten_landmarks
from ._exceptions import LabelMismatchError, ShapeMismatchError, SingularCovarianceError, StrategyUnavailableError
from ._utils import set_log_level

from . import datasets
from . import test


__version__ = '0.1.0'
