"""Data containers for multivariate observations

Observations are stored as :class:`ObservationMatrix` objects, a 2-d array
with one row per observational unit (e.g., specimen) and one column per
measured variable, plus optional labels identifying the rows. Most functions
accept other representations and coerce them with :func:`asobservations`:

 - 2-d array-likes (optionally with separate ``labels``)
 - data frames (any object with ``.index`` and ``.to_numpy()``, such as a
   :class:`pandas.DataFrame`); the index supplies the labels
 - 3-d landmark arrays with shape ``(n_landmarks, n_dims, n_observations)``,
   which are converted to 2-d through a vectorization adapter
   (:func:`flatten_landmarks` by default)
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Sequence, Union

import numpy as np

from ._exceptions import LabelMismatchError
from ._text import n_of


FLOAT64 = np.dtype('float64')
FlattenFunc = Callable[[np.ndarray], np.ndarray]
LabelsArg = Union[Sequence[Any], None]


def flatten_landmarks(array: np.ndarray) -> np.ndarray:
    """Vectorize a landmark array

    Parameters
    ----------
    array : array  (n_landmarks, n_dims, n_observations)
        Landmark coordinates, with observations along the last axis.

    Returns
    -------
    x : array  (n_observations, n_dims * n_landmarks)
        One row per observation. Columns contain the first coordinate of all
        landmarks, followed by the second coordinate of all landmarks etc.

    Examples
    --------
    >>> landmarks = np.arange(12).reshape((2, 3, 2))
    >>> flatten_landmarks(landmarks)
    array([[ 0,  6,  2,  8,  4, 10],
           [ 1,  7,  3,  9,  5, 11]])
    """
    array = np.asarray(array)
    if array.ndim != 3:
        raise ValueError(f"array with shape {array.shape}: landmark arrays need 3 dimensions (landmarks, dimensions, observations)")
    n_landmarks, n_dims, n_cases = array.shape
    return array.transpose(2, 1, 0).reshape((n_cases, n_dims * n_landmarks))


def _aslabels(labels: LabelsArg, n: int):
    if labels is None:
        return None
    elif isinstance(labels, str):
        raise TypeError(f"{labels=}: needs to be a sequence with one label per observation")
    labels = tuple(str(label) for label in labels)
    if len(labels) != n:
        raise ValueError(f"labels: {n_of(len(labels), 'label')} for {n_of(n, 'observation')}")
    return labels


class ObservationMatrix:
    """Multivariate observations

    Parameters
    ----------
    x : array_like  (n_observations, n_variables)
        Data, one row per observation.
    labels : sequence of str
        Labels identifying the observations (used for matching observations
        between two conditions).
    name : str
        Description of the data.

    Attributes
    ----------
    x : array  (n_observations, n_variables)
        The data as float64 array.
    labels : tuple of str | None
        Observation labels.
    """
    def __init__(
            self,
            x: Any,
            labels: LabelsArg = None,
            name: str = None,
    ):
        x = np.asarray(x)
        if x.dtype != FLOAT64:
            if x.dtype.kind not in 'biuf':
                raise TypeError(f"x with dtype {x.dtype}: needs numeric data")
            x = x.astype(FLOAT64)
        if x.ndim == 1:
            x = x[:, None]
        elif x.ndim != 2:
            raise ValueError(f"x with shape {x.shape}: needs 2 dimensions (observations, variables)")
        if not np.all(np.isfinite(x)):
            raise ValueError(f"{dataobj_repr(name)}: data contains non-finite values (NaN or Inf)")
        self.x = x
        self.labels = _aslabels(labels, len(x))
        self.name = name

    def __repr__(self):
        args = [repr(self.x)]
        if self.labels is not None:
            args.append(f"labels={self.labels!r}")
        if self.name is not None:
            args.append(f"name={self.name!r}")
        return f"ObservationMatrix({', '.join(args)})"

    def __len__(self):
        return len(self.x)

    def __getitem__(self, index):
        x = self.x[index]
        if x.ndim != 2:
            raise IndexError(f"{index=}: ObservationMatrix can only be indexed along observations")
        if self.labels is None:
            labels = None
        else:
            labels = np.array(self.labels, object)[index]
        return ObservationMatrix(x, labels, self.name)

    @property
    def n_cases(self) -> int:
        return self.x.shape[0]

    @property
    def n_vars(self) -> int:
        return self.x.shape[1]

    @property
    def shape(self):
        return self.x.shape

    def mean(self) -> np.ndarray:
        "Mean of each variable"
        return self.x.mean(0)

    def index(self, label: str) -> np.ndarray:
        "Indices of the observations with ``label``"
        if self.labels is None:
            raise LabelMismatchError((), f"{dataobj_repr(self.name)} has no labels")
        return np.flatnonzero([v == label for v in self.labels])


def dataobj_repr(name: str = None, default: str = 'data'):
    return default if name is None else name


def asobservations(
        x: Any,
        labels: LabelsArg = None,
        flatten: FlattenFunc = None,
        name: str = None,
) -> ObservationMatrix:
    """Coerce ``x`` to an :class:`ObservationMatrix`

    Parameters
    ----------
    x : ObservationMatrix | array_like | data frame
        Data, 1-d (single variable), 2-d (observations, variables) or 3-d
        (landmarks, dimensions, observations).
    labels : sequence of str
        Observation labels (override labels carried by ``x``).
    flatten : callable
        Vectorization adapter converting 3-d landmark arrays to 2-d
        observation matrices (default :func:`flatten_landmarks`).
    name : str
        Name used in error messages.
    """
    if isinstance(x, ObservationMatrix):
        if labels is None and name is None:
            return x
        return ObservationMatrix(x.x, x.labels if labels is None else labels, x.name if name is None else name)
    elif hasattr(x, 'to_numpy') and hasattr(x, 'index'):
        if labels is None:
            labels = list(x.index)
        return ObservationMatrix(x.to_numpy(dtype=FLOAT64), labels, name)

    x = np.asarray(x)
    if x.ndim == 3:
        if flatten is None:
            flatten = flatten_landmarks
        x_flat = np.asarray(flatten(x))
        if x_flat.ndim != 2 or len(x_flat) != x.shape[2]:
            raise ValueError(f"flatten={flatten!r} returned array with shape {x_flat.shape} for landmark array with shape {x.shape}; needs one row for each of the {x.shape[2]} observations")
        x = x_flat
    elif x.ndim not in (1, 2):
        raise ValueError(f"{dataobj_repr(name)} with shape {x.shape}: needs 1 (single variable), 2 (observations, variables) or 3 (landmarks, dimensions, observations) dimensions")
    return ObservationMatrix(x, labels, name)


def align1(
        d: ObservationMatrix,
        to: Sequence[str],
        d_name: str = None,
        to_name: str = None,
) -> ObservationMatrix:
    """Align observations to a sequence of labels

    Parameters
    ----------
    d : ObservationMatrix
        Observations that should be aligned to ``to``; observations whose
        label does not occur in ``to`` are dropped.
    to : sequence of str
        Labels to which ``d`` should be aligned.
    d_name : str
        Name of ``d`` for error messages.
    to_name : str
        Name of ``to`` for error messages.

    Returns
    -------
    d_aligned : ObservationMatrix
        Copy of ``d`` with rows in the order of ``to``.
    """
    d_name = dataobj_repr(d_name or d.name)
    to_name = dataobj_repr(to_name, 'reference')
    if d.labels is None:
        raise LabelMismatchError((), f"{d_name} has no labels for matching observations")
    duplicates = [label for label, n in Counter(to).items() if n > 1]
    if duplicates:
        raise LabelMismatchError(duplicates, f"duplicated in {to_name}")

    align_idx = np.empty(len(to), int)
    missing = []
    ambiguous = []
    for i, label in enumerate(to):
        where = d.index(label)
        if len(where) == 1:
            align_idx[i] = where[0]
        elif len(where) == 0:
            missing.append(label)
        else:
            ambiguous.append(label)
    if missing:
        raise LabelMismatchError(missing, f"missing from {d_name}")
    elif ambiguous:
        raise LabelMismatchError(ambiguous, f"duplicated in {d_name}")
    return d[align_idx]
