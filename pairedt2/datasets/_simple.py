"""Some basic example datasets for testing."""
import numpy as np

from .._data_obj import ObservationMatrix


def get_paired(n=20, n_vars=4, effect=0.5, seed=0, shuffle=False):
    """Random repeated measures on the same observations

    Parameters
    ----------
    n : int
        Number of observations.
    n_vars : int
        Number of variables.
    effect : float | array_like
        Shift of the mean of ``t2`` relative to ``t1`` (scalar for all
        variables, or one value per variable).
    seed : None | int
        Seed the numpy random state before generating random data.
    shuffle : bool
        Shuffle the order of observations in ``t2`` (labels still identify the
        observations).

    Returns
    -------
    t1, t2 : ObservationMatrix
        Observations with labels ``'s000'``, ``'s001'``, ...
    """
    random = np.random if seed is None else np.random.RandomState(seed)
    labels = ['s%03i' % i for i in range(n)]
    # large between-observation variability shared by both conditions
    base = random.normal(0, 2, (n, n_vars))
    x1 = base + random.normal(0, .5, (n, n_vars))
    x2 = base + random.normal(0, .5, (n, n_vars)) + effect
    t1 = ObservationMatrix(x1, labels, 'T1')
    if shuffle:
        index = random.permutation(n)
        t2 = ObservationMatrix(x2[index], [labels[i] for i in index], 'T2')
    else:
        t2 = ObservationMatrix(x2, labels, 'T2')
    return t1, t2


def get_landmarks(n=15, n_landmarks=4, n_dims=2, effect=0.1, seed=0):
    """Random landmark configurations measured twice

    Parameters
    ----------
    n : int
        Number of specimens.
    n_landmarks : int
        Number of landmarks.
    n_dims : int
        Number of spatial dimensions.
    effect : float
        Displacement of the first landmark along the first dimension in the
        second measurement.
    seed : None | int
        Seed the numpy random state before generating random data.

    Returns
    -------
    t1, t2 : array  (n_landmarks, n_dims, n)
        Landmark arrays.
    labels : list of str
        Specimen labels (third axis).
    """
    random = np.random if seed is None else np.random.RandomState(seed)
    shape = (n_landmarks, n_dims, n)
    mean_shape = random.uniform(-1, 1, (n_landmarks, n_dims, 1))
    specimens = mean_shape + random.normal(0, .2, shape)
    t1 = specimens + random.normal(0, .02, shape)
    t2 = specimens + random.normal(0, .02, shape)
    t2[0, 0] += effect
    labels = ['s%03i' % i for i in range(n)]
    return t1, t2, labels
