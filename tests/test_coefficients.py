# mypy: ignore-errors

import jax.numpy as jnp
import pytest

from tinykrylov import Accepted, DependentVectorError, Rejected
from tinykrylov.test_utils import assert_allclose


def test_accepted():
    coef = Accepted(jnp.array([1.0, 2.0]))
    assert coef.accepted
    assert len(coef) == 2
    assert_allclose(coef.unwrap(), jnp.array([1.0, 2.0]))
    assert_allclose(coef.residual_norm, 2.0)


def test_rejected():
    coef = Rejected(jnp.array([2.0, 1.0, 0.0]))
    assert not coef.accepted
    assert_allclose(coef.residual_norm, 0.0)
    with pytest.raises(DependentVectorError) as excinfo:
        coef.unwrap()
    assert_allclose(excinfo.value.coef, jnp.array([2.0, 1.0, 0.0]))
    assert isinstance(excinfo.value, ValueError)
