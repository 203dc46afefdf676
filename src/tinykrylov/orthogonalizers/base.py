from __future__ import annotations

__all__ = ["Orthogonalizer"]

from abc import abstractmethod
from typing import Any

import equinox as eqx
import jax.numpy as jnp

from tinykrylov.coefficients import Accepted, Coefficients, Rejected
from tinykrylov.helpers import JAXArray
from tinykrylov.linalg import as_vector, default_rtol


class Orthogonalizer(eqx.Module):
    """The base class for incremental orthogonalizers

    An orthogonalizer holds a basis for a subspace of a ``dim``-dimensional
    space and extends it one vector at a time. Orthogonalizers are immutable
    pytrees, so the "mutating" operation :func:`Orthogonalizer.append` returns
    an updated orthogonalizer alongside the coefficients.

    Subclasses must implement :func:`Orthogonalizer.project`,
    :func:`Orthogonalizer.extend`, :func:`Orthogonalizer.get_q`,
    :func:`Orthogonalizer.basis_vector`, and ``__len__``.

    Args:
        dimension: The length of the vectors in the ambient space.
    """

    dimension: int = eqx.field(static=True)

    def dim(self) -> int:
        """The dimension of the ambient space"""
        return self.dimension

    @abstractmethod
    def __len__(self) -> int:
        """The number of vectors in the current basis"""
        raise NotImplementedError

    def is_full(self) -> bool:
        """Does the basis span the full space?"""
        return len(self) >= self.dimension

    @abstractmethod
    def project(self, a: JAXArray) -> tuple[JAXArray, JAXArray, JAXArray]:
        """Project a vector onto the orthogonal complement of the basis

        Args:
            a (dim,): A vector with the correct dimension; this is not checked.

        Returns:
            A tuple ``(coef, residual, norm)`` where ``coef`` has length
            ``len(self)`` and gives the coefficients of ``a`` with respect to the
            current basis, ``residual`` is the implementation specific working
            vector that :func:`Orthogonalizer.extend` accepts, and ``norm`` is
            the Euclidean norm of the component of ``a`` orthogonal to the
            basis.
        """
        raise NotImplementedError

    @abstractmethod
    def extend(self, residual: JAXArray, norm: JAXArray) -> Orthogonalizer:
        """A new orthogonalizer with the residual from :func:`project` added"""
        raise NotImplementedError

    @abstractmethod
    def get_q(self) -> JAXArray:
        """The orthonormal basis as a ``(dim, len)`` matrix"""
        raise NotImplementedError

    @abstractmethod
    def basis_vector(self, k: int) -> JAXArray:
        """The ``k``-th basis vector, equal to ``get_q()[:, k]``

        This avoids building the full basis when only one vector is needed.

        Raises:
            IndexError: If ``k`` is not in ``[0, len(self))``.
        """
        raise NotImplementedError

    def _check_index(self, k: int) -> None:
        if not 0 <= k < len(self):
            raise IndexError(
                f"Basis vector index {k} is out of range for a basis of size "
                f"{len(self)}"
            )

    def orthogonalize(self, a: Any) -> tuple[JAXArray, JAXArray]:
        """Orthogonalize a vector against the current basis

        Args:
            a (dim,): The input vector.

        Returns:
            The working residual vector and the norm of the residual.

        Raises:
            ValueError: If the shape of ``a`` doesn't match the dimension.
        """
        _, residual, norm = self.project(as_vector(a, self.dimension))
        return residual, norm

    def append(
        self, a: Any, rtol: Any | None = None
    ) -> tuple[Orthogonalizer, Coefficients]:
        """Add a vector to the basis if its residual is larger than ``rtol``

        .. code-block:: python

            mgs = MGS(3)
            mgs, coef = mgs.append([0.0, 1.0, 0.0], 1e-9)
            # coef == Accepted(coef=[1.0])
            mgs, coef = mgs.append([1.0, 1.0, 0.0], 1e-9)
            # coef == Accepted(coef=[1.0, 1.0])
            mgs, coef = mgs.append([1.0, 2.0, 0.0], 1e-9)
            # coef == Rejected(coef=[2.0, 1.0, 0.0])

        This method branches on the value of the residual norm so it can't be
        called inside of a ``jax.jit`` transformed function.

        Args:
            a (dim,): The input vector.
            rtol: The tolerance on the norm of the residual. Vectors with a
                residual norm below this value are treated as linearly
                dependent. Defaults to :func:`tinykrylov.linalg.default_rtol`
                for the dtype of ``a``.

        Returns:
            A tuple ``(ortho, coef)``. If the vector was accepted, ``ortho`` is
            a new orthogonalizer with one more basis vector and ``coef`` is
            :class:`tinykrylov.Accepted`. Otherwise ``ortho`` is ``self`` and
            ``coef`` is :class:`tinykrylov.Rejected`.

        Raises:
            ValueError: If the shape of ``a`` doesn't match the dimension, or if
                ``rtol`` is negative.
        """
        a = as_vector(a, self.dimension)
        if rtol is None:
            rtol = default_rtol(a)
        elif rtol < 0:
            raise ValueError(f"The tolerance must be non-negative, got rtol={rtol}")
        coef, residual, norm = self.project(a)
        coef = jnp.append(coef, norm.astype(coef.dtype))

        # A zero residual can never be normalized, even when rtol is zero
        if norm < rtol or norm <= 0:
            return self, Rejected(coef)
        return self.extend(residual, norm), Accepted(coef)
