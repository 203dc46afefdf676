"""
Every call to :func:`tinykrylov.orthogonalizers.Orthogonalizer.append` returns
the projection coefficients of the input vector, whether or not it was added to
the basis. The two outcomes are distinguished by type: :class:`Accepted` when
the basis grew, and :class:`Rejected` when the vector was numerically dependent
on the current basis. Both carry the same payload so that callers who want to
keep the coefficients of a dependent vector (see
:attr:`tinykrylov.Strategy.FULL`) can do so.
"""

from __future__ import annotations

__all__ = ["Coefficients", "Accepted", "Rejected", "DependentVectorError"]

from abc import abstractmethod

import equinox as eqx

from tinykrylov.helpers import JAXArray


class DependentVectorError(ValueError):
    """Raised when unwrapping the coefficients of a rejected vector

    Args:
        coef: The coefficients of the rejected vector. The last element is the
            norm of the residual that fell below the tolerance.
    """

    def __init__(self, coef: JAXArray):
        super().__init__(
            "The vector is linearly dependent on the current basis "
            f"(residual norm {coef[-1]})"
        )
        self.coef = coef


class Coefficients(eqx.Module):
    """The projection coefficients of a vector onto the basis

    Args:
        coef (k + 1,): The coefficients with respect to the ``k`` existing
            basis vectors followed by the norm of the residual.
    """

    coef: JAXArray

    @property
    @abstractmethod
    def accepted(self) -> bool:
        """Was the vector added to the basis?"""
        raise NotImplementedError

    @property
    def residual_norm(self) -> JAXArray:
        return self.coef[-1].real

    def __len__(self) -> int:
        return self.coef.shape[0]

    def unwrap(self) -> JAXArray:
        """The coefficients of an accepted vector

        Raises:
            DependentVectorError: If the vector was rejected.
        """
        if not self.accepted:
            raise DependentVectorError(self.coef)
        return self.coef


class Accepted(Coefficients):
    """Coefficients of a vector that extended the basis"""

    @property
    def accepted(self) -> bool:
        return True


class Rejected(Coefficients):
    """Coefficients of a vector that was dependent on the basis"""

    @property
    def accepted(self) -> bool:
        return False
