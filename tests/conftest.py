# mypy: ignore-errors

import jax
import numpy as np
import pytest

jax.config.update("jax_enable_x64", True)


@pytest.fixture
def random():
    return np.random.default_rng(84930)


@pytest.fixture(params=["real", "complex"])
def dtype(request):
    if request.param == "complex":
        return np.complex128
    return np.float64


@pytest.fixture
def make_vectors(random, dtype):
    def impl(*shape):
        x = random.normal(size=shape)
        if np.issubdtype(dtype, np.complexfloating):
            x = x + 1j * random.normal(size=shape)
        return x.astype(dtype)

    return impl
