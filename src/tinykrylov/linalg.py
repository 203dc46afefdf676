"""
The small amount of scalar and vector glue that the orthogonalizers need. All
of the numerical work is delegated to ``jax.numpy``; these helpers only fix the
conventions: the inner product is conjugate-linear in its *first* argument, and
norms are always real.
"""

from __future__ import annotations

__all__ = ["inner", "norm_l2", "as_vector", "unit_phase", "default_rtol"]

from typing import Any

import jax.numpy as jnp

from tinykrylov.helpers import JAXArray


def inner(x: JAXArray, y: JAXArray) -> JAXArray:
    """The inner product ``sum(conj(x) * y)``"""
    return jnp.vdot(x, y)


def norm_l2(x: JAXArray) -> JAXArray:
    """The Euclidean norm of a vector as a real scalar"""
    return jnp.linalg.norm(x)


def as_vector(a: Any, dim: int) -> JAXArray:
    """Convert ``a`` to a 1-D inexact array of length ``dim``

    Integer input is promoted to the default floating point type.

    Raises:
        ValueError: If ``a`` is not one dimensional or if its length doesn't
            match ``dim``.
    """
    a = jnp.asarray(a)
    if not jnp.issubdtype(a.dtype, jnp.inexact):
        a = a.astype(jnp.result_type(float))
    if a.ndim != 1:
        raise ValueError(f"Invalid vector shape: expected ndim = 1, got ndim={a.ndim}")
    if a.shape[0] != dim:
        raise ValueError(
            f"Dimension mismatch: expected a vector of length {dim}, "
            f"got length {a.shape[0]}"
        )
    return a


def unit_phase(x: JAXArray) -> JAXArray:
    """The phase ``x / |x|`` of a scalar, taking the phase of zero to be one"""
    r = jnp.abs(x)
    return jnp.where(r > 0, x / jnp.where(r > 0, r, 1), jnp.ones_like(x))


def default_rtol(reference: JAXArray) -> JAXArray:
    """Default tolerance for detecting linear dependence

    We use sqrt(eps) for the dtype of the reference array because that seems
    to give sensible results in general.
    """
    return jnp.sqrt(jnp.finfo(jnp.asarray(reference).dtype).eps)
