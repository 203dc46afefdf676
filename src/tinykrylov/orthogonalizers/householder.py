r"""
The Householder orthogonalizer never stores the basis explicitly. Instead, the
``k``-th accepted vector contributes a unit reflector :math:`w_k` that is zero
in its first ``k`` entries, and the reflection

.. math::

    P_k = I - 2\,w_k\,w_k^H

maps the residual of that vector onto the ``k``-th coordinate axis. Applying
:math:`P_0, P_1, \ldots` to a new vector leaves its coefficients with respect
to the basis in the leading entries and its residual in the trailing entries.
The basis itself is recovered by applying the reflectors in reverse order to
the columns of the identity.

The reflectors are stored as the leading rows of a ``(dim, dim)`` buffer. The
remaining rows are zero, and :math:`P = I` for :math:`w = 0`, so every kernel
sweeps the whole buffer and is only compiled once per dimension and dtype.
"""

from __future__ import annotations

__all__ = ["Householder"]

from functools import partial

import equinox as eqx
import jax
import jax.numpy as jnp

from tinykrylov.helpers import JAXArray
from tinykrylov.linalg import inner, norm_l2, unit_phase
from tinykrylov.orthogonalizers.base import Orthogonalizer


class Householder(Orthogonalizer):
    """An orthogonalizer using Householder reflections

    The sign (or, for complex vectors, the phase) of each reflector is chosen to
    match the pivot element so that no cancellation occurs when the reflector is
    constructed. The raw reflection maps the pivot to ``-phase * norm``, so the
    phases are stored alongside the reflectors and used to rotate the reported
    coefficients and the columns of :func:`Householder.get_q`. With this
    convention the last coefficient of every accepted vector is its (real,
    positive) residual norm, exactly as for :class:`tinykrylov.MGS`.

    Args:
        dimension: The length of the vectors in the ambient space.
        reflectors: Optionally, a ``(dimension, dimension)`` buffer with the
            unit reflectors of an existing basis in its first ``count`` rows and
            zeros elsewhere.
        phases: The ``(dimension,)`` pivot phases matching ``reflectors``.
        count: The number of reflectors in ``reflectors``.
    """

    reflectors: JAXArray
    phases: JAXArray
    count: int = eqx.field(static=True)

    def __init__(
        self,
        dimension: int,
        reflectors: JAXArray | None = None,
        phases: JAXArray | None = None,
        count: int = 0,
    ):
        if (reflectors is None) != (phases is None):
            raise ValueError("The reflectors and phases must be provided together")
        if reflectors is None:
            dtype = jnp.result_type(float)
            reflectors = jnp.zeros((dimension, dimension), dtype=dtype)
            phases = jnp.zeros(dimension, dtype=dtype)
        shapes = (reflectors.shape, phases.shape)
        if shapes != ((dimension, dimension), (dimension,)):
            raise ValueError(
                "Invalid reflector shapes: expected "
                f"{(dimension, dimension)} and {(dimension,)}, "
                f"got {reflectors.shape} and {phases.shape}"
            )
        self.dimension = dimension
        self.reflectors = reflectors
        self.phases = phases
        self.count = count

    def __len__(self) -> int:
        return self.count

    def project(self, a: JAXArray) -> tuple[JAXArray, JAXArray, JAXArray]:
        dtype = jnp.result_type(a, self.reflectors)
        a, norm = _householder_project(
            self.reflectors.astype(dtype), a.astype(dtype), self.count
        )
        coef = -jnp.conj(self.phases[: self.count]) * a[: self.count]
        return coef, a, norm

    def extend(self, residual: JAXArray, norm: JAXArray) -> Householder:
        k = self.count
        phase = unit_phase(residual[k])
        v = jnp.where(jnp.arange(self.dimension) < k, 0, residual)
        v = v.at[k].add(phase * norm)
        v = v / norm_l2(v)
        dtype = jnp.result_type(v, self.reflectors)
        return Householder(
            self.dimension,
            self.reflectors.astype(dtype).at[k].set(v),
            self.phases.astype(dtype).at[k].set(phase),
            k + 1,
        )

    def basis_vector(self, k: int) -> JAXArray:
        self._check_index(k)
        return _householder_column(self.reflectors, self.phases, k)

    def get_q(self) -> JAXArray:
        if self.count == 0:
            return jnp.zeros((self.dimension, 0), dtype=self.reflectors.dtype)
        q = _householder_basis(self.reflectors, self.phases)
        return q[:, : self.count]


def _reflect(a: JAXArray, w: JAXArray) -> JAXArray:
    return a - 2 * w * inner(w, a)


def _apply_reflectors(w: JAXArray, a: JAXArray, reverse: bool = False) -> JAXArray:
    a, _ = jax.lax.scan(lambda a, w: (_reflect(a, w), None), a, w, reverse=reverse)
    return a


@jax.jit
def _householder_project(
    w: JAXArray, a: JAXArray, count: JAXArray
) -> tuple[JAXArray, JAXArray]:
    a = _apply_reflectors(w, a)

    # Once the basis spans the space there is nothing left over
    residual = jnp.where(jnp.arange(a.shape[0]) >= count, a, 0)
    return a, norm_l2(residual)


@jax.jit
def _householder_basis(w: JAXArray, phases: JAXArray) -> JAXArray:
    eye = jnp.eye(w.shape[0], dtype=w.dtype)
    apply = partial(_apply_reflectors, w, reverse=True)
    q = jax.vmap(apply, in_axes=1, out_axes=1)(eye)
    return q * (-phases)[None, :]


@jax.jit
def _householder_column(w: JAXArray, phases: JAXArray, k: JAXArray) -> JAXArray:
    e = jnp.zeros(w.shape[0], dtype=w.dtype).at[k].set(1)
    return -phases[k] * _apply_reflectors(w, e, reverse=True)
