"""Exceptions used throughout pairedt2"""
from typing import Collection

import numpy as np

from ._text import enumeration, plural


class ShapeMismatchError(ValueError):
    "The two sets of observations do not have the same shape"
    def __init__(self, axis: str, n1: int, n2: int):
        ValueError.__init__(self, axis, n1, n2)
        self.axis = axis
        self.n1 = n1
        self.n2 = n2

    def __str__(self):
        desc = 'observations' if self.axis == 'rows' else 'variables'
        return f"The two sets have different number of {self.axis} ({desc}): T1 has {self.n1}, T2 has {self.n2}"


class LabelMismatchError(KeyError):
    "Observations can not be matched by label (more information than KeyError)"
    def __init__(self, labels: Collection, problem: str = 'missing from T2'):
        KeyError.__init__(self, labels, problem)
        self.labels = labels

    def __str__(self):
        labels, problem = self.args
        if not labels:
            return problem
        n = len(labels)
        return f"{plural('Label', n)} {enumeration(labels)} {problem}"


class SingularCovarianceError(np.linalg.LinAlgError):
    "The covariance matrix of the differences can not be inverted"
    def __init__(self, rcond: float, strategy: str = None):
        np.linalg.LinAlgError.__init__(self, rcond, strategy)
        self.rcond = rcond
        self.strategy = strategy

    def __str__(self):
        desc = "Covariance matrix is singular"
        if self.strategy:
            desc = f"{self.strategy.capitalize()} covariance matrix is singular"
        if self.strategy == 'shrinkage':
            hint = "reduce the number of variables"
        else:
            hint = "use use_shrinkage=True or reduce the number of variables"
        return f"{desc} (reciprocal condition number {self.rcond:.3g}); {hint} (e.g., to principal component scores with non-zero variance)"


class StrategyUnavailableError(ImportError):
    "A covariance strategy requires a package that is not installed"
