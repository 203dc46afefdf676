# mypy: ignore-errors

import jax.numpy as jnp
import numpy as np
import pytest

from tinykrylov import linalg
from tinykrylov.test_utils import assert_allclose


def test_inner_is_conjugate_linear_in_first_argument():
    x = jnp.array([1.0 + 2.0j, 3.0 - 1.0j])
    y = jnp.array([2.0 - 1.0j, 0.5j])
    assert_allclose(linalg.inner(x, y), jnp.sum(jnp.conj(x) * y))
    assert_allclose(linalg.inner(1j * x, y), -1j * linalg.inner(x, y))
    assert_allclose(linalg.inner(x, 1j * y), 1j * linalg.inner(x, y))


def test_norm_consistent_with_inner(make_vectors):
    x = make_vectors(17)
    norm = linalg.norm_l2(x)
    assert jnp.isrealobj(norm)
    assert_allclose(norm, jnp.sqrt(linalg.inner(x, x).real))


def test_as_vector():
    v = linalg.as_vector([1, 2, 3], 3)
    assert v.shape == (3,)
    assert jnp.issubdtype(v.dtype, jnp.floating)

    v = linalg.as_vector(np.array([1j, 2.0]), 2)
    assert jnp.issubdtype(v.dtype, jnp.complexfloating)

    with pytest.raises(ValueError):
        linalg.as_vector(jnp.ones(3), 4)
    with pytest.raises(ValueError):
        linalg.as_vector(jnp.ones((3, 1)), 3)


def test_unit_phase():
    assert_allclose(linalg.unit_phase(jnp.array(-2.5)), -1.0)
    assert_allclose(linalg.unit_phase(jnp.array(0.0)), 1.0)
    assert_allclose(linalg.unit_phase(jnp.array(3.0j)), 1.0j)
    assert_allclose(linalg.unit_phase(jnp.array(0.0j)), 1.0 + 0.0j)


def test_default_rtol():
    eps = np.finfo(np.float64).eps
    assert_allclose(linalg.default_rtol(jnp.ones(3)), np.sqrt(eps))
    assert_allclose(
        linalg.default_rtol(jnp.ones(3, dtype=jnp.complex128)), np.sqrt(eps)
    )
