r"""
Krylov subspaces :math:`\mathcal{K}_m(A, v) = \mathrm{span}\{v, A\,v, \ldots,
A^{m-1}\,v\}` are the main customers of the orthogonalizers in this package.
This module provides a lazy producer for the Krylov sequence, a helper to
compute an orthonormal basis for the subspace, and the Arnoldi iteration.
"""

from __future__ import annotations

__all__ = ["Arnoldi", "krylov_vectors", "krylov_basis", "arnoldi"]

import logging
from collections.abc import Iterator
from typing import Any, Callable, NamedTuple, Union

import jax.numpy as jnp

from tinykrylov.helpers import JAXArray
from tinykrylov.orthogonalizers import Orthogonalizer
from tinykrylov.qr import QR, Strategy, assemble_columns, qr

logger = logging.getLogger(__name__)

Operator = Union[JAXArray, Callable[[JAXArray], JAXArray]]


class Arnoldi(NamedTuple):
    """The result of an Arnoldi iteration

    Args:
        q (dim, n): The orthonormal basis of the Krylov subspace.
        h (n, m): The upper Hessenberg matrix with ``A @ q[:, :m] = q @ h``.
    """

    q: JAXArray
    h: JAXArray


def _as_matvec(operator: Operator) -> Callable[[JAXArray], JAXArray]:
    if callable(operator):
        return operator
    matrix = jnp.asarray(operator)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(
            f"The operator must be a square matrix, got shape {matrix.shape}"
        )
    return lambda x: matrix @ x


def krylov_vectors(
    operator: Operator, v: Any, maxiter: int | None = None
) -> Iterator[JAXArray]:
    """Generate the Krylov sequence ``v, A v, A^2 v, ...``

    Args:
        operator: A square matrix or a callable computing the matrix-vector
            product.
        v: The starting vector.
        maxiter: The number of vectors to generate. If ``None``, the generator
            never terminates.
    """
    matvec = _as_matvec(operator)
    v = jnp.asarray(v)
    count = 0
    while maxiter is None or count < maxiter:
        yield v
        v = matvec(v)
        count += 1


def krylov_basis(
    operator: Operator,
    v: Any,
    ortho: Orthogonalizer,
    rtol: Any | None = None,
    maxiter: int | None = None,
) -> QR:
    """Compute an orthonormal basis for the Krylov subspace of ``operator``

    The Krylov sequence is fed through :func:`tinykrylov.qr` with the
    :attr:`tinykrylov.Strategy.TERMINATE` strategy, so the iteration stops at
    the first vector that is dependent on the previous ones. This always
    happens after at most ``ortho.dim() + 1`` vectors, so ``maxiter`` can be
    omitted.

    Args:
        operator: A square matrix or a callable computing the matrix-vector
            product.
        v: The starting vector.
        ortho: An empty orthogonalizer.
        rtol: The tolerance used to detect linear dependence.
        maxiter: The maximum number of Krylov vectors to consider.
    """
    return qr(
        krylov_vectors(operator, v, maxiter=maxiter),
        ortho,
        rtol=rtol,
        strategy=Strategy.TERMINATE,
    )


def arnoldi(
    operator: Operator,
    v: Any,
    ortho: Orthogonalizer,
    rtol: Any | None = None,
    maxiter: int | None = None,
) -> Arnoldi:
    """Run the Arnoldi iteration

    Starting from ``q_0 = v / |v|``, each step orthogonalizes ``A q_k`` against
    the basis so far. The coefficients of each step are the columns of the
    Hessenberg matrix. The iteration stops after ``maxiter`` steps (default:
    ``ortho.dim()``) or as soon as ``A q_k`` is dependent on the basis, in which
    case the Krylov subspace is invariant under ``A``.

    Args:
        operator: A square matrix or a callable computing the matrix-vector
            product.
        v: The starting vector. It must not be zero.
        ortho: An empty orthogonalizer.
        rtol: The tolerance used to detect linear dependence.
        maxiter: The maximum number of matrix-vector products.

    Returns:
        The :class:`Arnoldi` result. After ``m`` steps without breakdown ``q``
        has ``m + 1`` columns and ``h`` has shape ``(m + 1, m)``. If the last
        step broke down, ``h`` is square.

    Raises:
        ValueError: If ``ortho`` is not empty, or if ``v`` has the wrong shape
            or is numerically zero.
    """
    if len(ortho):
        raise ValueError(
            f"The orthogonalizer must be empty, but it has {len(ortho)} vectors"
        )
    matvec = _as_matvec(operator)
    maxiter = ortho.dim() if maxiter is None else maxiter

    ortho, coef = ortho.append(v, rtol)
    if not coef.accepted:
        raise ValueError("The starting vector of the Arnoldi iteration is zero")

    q = ortho.basis_vector(0)
    columns = []
    for step in range(maxiter):
        ortho, coef = ortho.append(matvec(q), rtol)
        columns.append(coef.coef)
        if not coef.accepted:
            logger.debug(
                "Arnoldi iteration broke down at step %d (residual norm %s)",
                step,
                coef.residual_norm,
            )
            break
        q = ortho.basis_vector(len(ortho) - 1)

    return Arnoldi(q=ortho.get_q(), h=assemble_columns(columns, len(ortho)))
