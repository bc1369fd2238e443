import pytest

pytest.register_assert_rewrite('pairedt2.testing._testing')

from ._testing import (
    ConfigContext, requires_pandas,
    assert_observations_equal, assert_result_allclose,
)
