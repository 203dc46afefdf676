"""
Orthogonalizers build an orthonormal basis one vector at a time. Two
interchangeable implementations are included:

1. :class:`MGS`: The modified Gram-Schmidt procedure. The basis vectors are
   stored explicitly, so :func:`MGS.get_q` is cheap.

2. :class:`Householder`: Householder reflections. Only the reflectors are
   stored and the basis is reconstructed on demand. This is more robust to
   loss of orthogonality when the input vectors are nearly dependent.

Both implement the :class:`Orthogonalizer` protocol and can be passed to
:func:`tinykrylov.qr`, :func:`tinykrylov.krylov_basis`, or
:func:`tinykrylov.arnoldi`.
"""

__all__ = ["Orthogonalizer", "MGS", "Householder"]

from tinykrylov.orthogonalizers.base import Orthogonalizer
from tinykrylov.orthogonalizers.householder import Householder
from tinykrylov.orthogonalizers.mgs import MGS
