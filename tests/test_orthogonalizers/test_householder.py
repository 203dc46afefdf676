# mypy: ignore-errors

import jax.numpy as jnp
import pytest

from tinykrylov import Householder
from tinykrylov.linalg import norm_l2
from tinykrylov.test_utils import assert_allclose


def test_reflectors(make_vectors):
    dim = 6
    ortho = Householder(dim)
    for a in make_vectors(4, dim):
        ortho, _ = ortho.append(a, 1e-9)

    assert len(ortho) == 4
    assert ortho.reflectors.shape == (dim, dim)
    assert ortho.phases.shape == (dim,)
    for k in range(4):
        w = ortho.reflectors[k]
        assert_allclose(w[:k], jnp.zeros(k, dtype=w.dtype))
        assert_allclose(norm_l2(w), 1.0)
        assert_allclose(jnp.abs(ortho.phases[k]), 1.0)

    # Unused rows stay zero
    assert_allclose(ortho.reflectors[4:], jnp.zeros((2, dim), dtype=w.dtype))


def test_complex_pivot_phase():
    # The reflector must keep the phase of a complex pivot
    ortho, coef = Householder(2).append(jnp.array([1.0j, 0.0]), 1e-9)
    assert_allclose(coef.coef, jnp.array([1.0 + 0.0j]))
    assert_allclose(ortho.phases[0], 1.0j)
    assert_allclose(ortho.get_q()[:, 0], jnp.array([1.0j, 0.0]))


def test_mismatched_phases():
    with pytest.raises(ValueError):
        Householder(3, reflectors=jnp.zeros((3, 3)), phases=jnp.zeros(2))
    with pytest.raises(ValueError):
        Householder(3, reflectors=jnp.zeros((3, 3)))
