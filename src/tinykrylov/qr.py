"""
Online QR decomposition: the input vectors are consumed one at a time from any
iterable, orthogonalized against the basis built so far, and never stacked into
a full matrix. What happens when a vector turns out to be linearly dependent on
the earlier ones is controlled by a :class:`Strategy`.
"""

from __future__ import annotations

__all__ = ["Strategy", "QR", "qr", "mgs", "householder"]

import enum
import logging
from collections.abc import Iterable, Sequence
from typing import Any, NamedTuple

import jax.numpy as jnp

from tinykrylov.helpers import JAXArray
from tinykrylov.orthogonalizers import MGS, Householder, Orthogonalizer

logger = logging.getLogger(__name__)


class Strategy(enum.Enum):
    """Strategy for linearly dependent vectors in an online QR decomposition"""

    #: Stop consuming input at the first dependent vector
    TERMINATE = "terminate"

    #: Drop dependent vectors and continue with the next one
    SKIP = "skip"

    #: Keep the coefficients of dependent vectors without extending the basis.
    #: The resulting ``R`` has a column for every input vector but fewer rows
    #: than columns, so it is not of full rank:
    #:
    #: .. code-block:: text
    #:
    #:     x x x x x
    #:     0 x x x x
    #:     0 0 0 x x
    #:     0 0 0 0 x
    FULL = "full"


class QR(NamedTuple):
    """The factors of an online QR decomposition

    Args:
        q (dim, n): The orthonormal basis, one column per accepted vector.
        r (n, m): The coefficients of each retained input vector in the basis.
    """

    q: JAXArray
    r: JAXArray


def qr(
    vectors: Iterable[Any],
    ortho: Orthogonalizer,
    rtol: Any | None = None,
    strategy: Strategy = Strategy.TERMINATE,
) -> QR:
    """Compute the QR decomposition of a sequence of vectors

    Args:
        vectors: An iterable of vectors with length ``ortho.dim()``. This is
            consumed lazily and only once, so it can be a generator; it must
            terminate unless ``strategy`` is :attr:`Strategy.TERMINATE` and a
            dependent vector is guaranteed to appear.
        ortho: An empty orthogonalizer.
        rtol: The tolerance on the residual norm used to detect linear
            dependence. See :func:`tinykrylov.Orthogonalizer.append`.
        strategy: What to do with dependent vectors.

    Returns:
        The :class:`QR` factors. With ``n`` accepted vectors and ``m`` retained
        coefficient vectors, ``q`` has shape ``(dim, n)`` and ``r`` has shape
        ``(n, m)``. Column ``j`` of ``r`` holds the coefficients of the ``j``-th
        retained vector, padded with zeros.

    Raises:
        ValueError: If ``ortho`` is not empty, or if any vector has the wrong
            shape.
    """
    if len(ortho):
        raise ValueError(
            f"The orthogonalizer must be empty, but it has {len(ortho)} vectors"
        )
    strategy = Strategy(strategy)

    coefs = []
    for index, a in enumerate(vectors):
        ortho, coef = ortho.append(a, rtol)
        if coef.accepted:
            coefs.append(coef.coef)
            continue

        logger.debug(
            "Vector %d is linearly dependent (residual norm %s); strategy: %s",
            index,
            coef.residual_norm,
            strategy.value,
        )
        if strategy is Strategy.TERMINATE:
            break
        elif strategy is Strategy.FULL:
            coefs.append(coef.coef)
        # Strategy.SKIP drops the coefficients

    logger.debug(
        "Online QR finished with %d basis vectors and %d columns",
        len(ortho),
        len(coefs),
    )
    return QR(q=ortho.get_q(), r=assemble_columns(coefs, len(ortho)))


def mgs(
    vectors: Iterable[Any],
    dim: int,
    rtol: Any | None = None,
    strategy: Strategy = Strategy.TERMINATE,
) -> QR:
    """Online QR decomposition using modified Gram-Schmidt

    See :func:`qr` for the arguments.
    """
    return qr(vectors, MGS(dim), rtol=rtol, strategy=strategy)


def householder(
    vectors: Iterable[Any],
    dim: int,
    rtol: Any | None = None,
    strategy: Strategy = Strategy.TERMINATE,
) -> QR:
    """Online QR decomposition using Householder reflections

    See :func:`qr` for the arguments.
    """
    return qr(vectors, Householder(dim), rtol=rtol, strategy=strategy)


def assemble_columns(coefs: Sequence[JAXArray], n: int) -> JAXArray:
    """Stack coefficient vectors of varying length as the columns of a matrix

    Each column is truncated or zero padded to ``n`` rows.
    """
    if not coefs:
        return jnp.zeros((n, 0))
    dtype = jnp.result_type(*coefs)
    columns = [
        jnp.zeros(n, dtype=dtype).at[: min(n, c.shape[0])].set(c[:n]) for c in coefs
    ]
    return jnp.stack(columns, axis=1)
