# mypy: ignore-errors

import jax.numpy as jnp
import pytest

from tinykrylov import MGS
from tinykrylov.test_utils import assert_allclose


def test_basis_buffer(make_vectors):
    dim = 5
    ortho = MGS(dim)
    for a in make_vectors(3, dim):
        ortho, _ = ortho.append(a, 1e-9)

    assert len(ortho) == 3
    assert ortho.basis.shape == (dim, dim)
    assert_allclose(ortho.get_q(), ortho.basis[:3].T)
    assert_allclose(ortho.basis[3:], jnp.zeros((2, dim), dtype=ortho.basis.dtype))


def test_invalid_basis_shape():
    with pytest.raises(ValueError):
        MGS(3, basis=jnp.zeros((2, 3)))
