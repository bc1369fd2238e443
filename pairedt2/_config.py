"""Configure pairedt2"""
import logging
from typing import Any, Dict

import numpy as np

from ._utils import ScreenHandler


CONFIG: Dict[str, Any] = {
    # relative singular value below which a covariance matrix is treated as singular (times n_vars)
    'singular_tol': np.finfo(np.float64).eps,
    'log': False,
}


def configure(
        log: bool = None,
        singular_tol: float = None,
):
    """Set basic configuration parameters for the current session

    Parameters
    ----------
    log
        Enable logging of computation details to the screen (for debugging).
    singular_tol
        Covariance matrices with a reciprocal condition number below this
        value times the number of variables are considered singular, and the
        test raises a :exc:`SingularCovarianceError`. The default is machine
        epsilon for double precision, which corresponds to the rank
        tolerance of :func:`numpy.linalg.matrix_rank`.
    """
    # don't change values before raising an error
    logger = logging.getLogger('pairedt2')
    new: Dict[str, Any] = {}
    if singular_tol is not None:
        if isinstance(singular_tol, bool) or not isinstance(singular_tol, (int, float)):
            raise TypeError(f"{singular_tol=}")
        elif not 0 < singular_tol < 1:
            raise ValueError(f"{singular_tol=}; needs to be in range (0, 1)")
        new['singular_tol'] = float(singular_tol)

    # logging
    if log is True and not CONFIG['log']:
        logger.setLevel(logging.DEBUG)
        handler = ScreenHandler()
        handler.setLevel(logging.DEBUG)
        logger.addHandler(handler)
        logger.debug("Enabling logger")
        new['log'] = handler
    elif log is False and CONFIG['log']:
        handler = CONFIG['log']
        logger.removeHandler(handler)
        new['log'] = False

    CONFIG.update(new)
