from __future__ import annotations

__all__ = ["MGS"]

import equinox as eqx
import jax
import jax.numpy as jnp

from tinykrylov.helpers import JAXArray
from tinykrylov.linalg import inner, norm_l2
from tinykrylov.orthogonalizers.base import Orthogonalizer


class MGS(Orthogonalizer):
    """An orthogonalizer using the modified Gram-Schmidt procedure

    The basis is stored explicitly as orthonormal vectors, and new vectors are
    orthogonalized by projecting out each basis vector in turn, updating the
    working vector after every projection.

    The basis vectors are the leading rows of a ``(dimension, dimension)``
    buffer whose remaining rows are zero. A zero row contributes a zero
    coefficient, so the sweep always runs over the whole buffer and its shape
    doesn't change as the basis grows.

    Args:
        dimension: The length of the vectors in the ambient space.
        basis: Optionally, a ``(dimension, dimension)`` buffer whose first
            ``count`` rows are orthonormal and whose other rows are zero. This
            is not checked.
        count: The number of basis vectors in ``basis``.
    """

    basis: JAXArray
    count: int = eqx.field(static=True)

    def __init__(
        self, dimension: int, basis: JAXArray | None = None, count: int = 0
    ):
        if basis is None:
            basis = jnp.zeros((dimension, dimension), dtype=jnp.result_type(float))
        if basis.shape != (dimension, dimension):
            raise ValueError(
                "Invalid basis shape: "
                f"expected {(dimension, dimension)}, got {basis.shape}"
            )
        self.dimension = dimension
        self.basis = basis
        self.count = count

    def __len__(self) -> int:
        return self.count

    def project(self, a: JAXArray) -> tuple[JAXArray, JAXArray, JAXArray]:
        dtype = jnp.result_type(a, self.basis)
        coef, residual, norm = _mgs_sweep(self.basis.astype(dtype), a.astype(dtype))
        return coef[: self.count], residual, norm

    def extend(self, residual: JAXArray, norm: JAXArray) -> MGS:
        dtype = jnp.result_type(residual, self.basis)
        basis = self.basis.astype(dtype).at[self.count].set(residual / norm)
        return MGS(self.dimension, basis, self.count + 1)

    def basis_vector(self, k: int) -> JAXArray:
        self._check_index(k)
        return self.basis[k]

    def get_q(self) -> JAXArray:
        return self.basis[: self.count].T


@jax.jit
def _mgs_sweep(q: JAXArray, a: JAXArray) -> tuple[JAXArray, JAXArray, JAXArray]:
    def impl(a, q):  # type: ignore
        c = inner(q, a)
        return a - c * q, c

    a, coef = jax.lax.scan(impl, a, q)
    return coef, a, norm_l2(a)
