"""
``tinykrylov`` is a lightweight library for incremental orthogonalization and
online QR decomposition in Python, built on top of `jax
<https://github.com/google/jax>`_. Vectors are consumed one at a time by an
:class:`Orthogonalizer` (either :class:`MGS` or :class:`Householder`), which
detects linearly dependent vectors numerically, and :func:`qr` assembles the
``Q`` and ``R`` factors without ever building the full input matrix. The same
machinery powers :func:`krylov_basis` and the :func:`arnoldi` iteration.
"""

__version__ = "0.1.0"
__author__ = "tinykrylov developers"
__email__ = "tinykrylov@users.noreply.github.com"
__uri__ = "https://github.com/tinykrylov/tinykrylov"
__license__ = "BSD"
__description__ = "Online QR decomposition and Krylov subspaces in jax"

from tinykrylov import linalg as linalg, orthogonalizers as orthogonalizers
from tinykrylov.coefficients import (
    Accepted as Accepted,
    Coefficients as Coefficients,
    DependentVectorError as DependentVectorError,
    Rejected as Rejected,
)
from tinykrylov.krylov import (
    Arnoldi as Arnoldi,
    arnoldi as arnoldi,
    krylov_basis as krylov_basis,
    krylov_vectors as krylov_vectors,
)
from tinykrylov.orthogonalizers import (
    MGS as MGS,
    Householder as Householder,
    Orthogonalizer as Orthogonalizer,
)
from tinykrylov.qr import (
    QR as QR,
    Strategy as Strategy,
    householder as householder,
    mgs as mgs,
    qr as qr,
)
