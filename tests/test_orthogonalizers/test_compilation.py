# mypy: ignore-errors

# The jitted kernels see buffers with a fixed shape, so they must only be
# traced once per dimension and dtype, however many vectors are appended.

from tinykrylov import MGS, Householder, arnoldi
from tinykrylov.orthogonalizers.householder import (
    _householder_basis,
    _householder_column,
    _householder_project,
)
from tinykrylov.orthogonalizers.mgs import _mgs_sweep


def test_mgs_compiles_once(make_vectors):
    dim = 23
    before = _mgs_sweep._cache_size()
    ortho = MGS(dim)
    for a in make_vectors(15, dim):
        ortho, coef = ortho.append(a, 1e-9)
        assert coef.accepted
    ortho.orthogonalize(make_vectors(dim))
    assert _mgs_sweep._cache_size() - before == 1


def test_householder_compiles_once(make_vectors):
    dim = 23
    kernels = [_householder_project, _householder_basis, _householder_column]
    before = [f._cache_size() for f in kernels]
    ortho = Householder(dim)
    for a in make_vectors(15, dim):
        ortho, coef = ortho.append(a, 1e-9)
        assert coef.accepted
        ortho.get_q()
        ortho.basis_vector(len(ortho) - 1)
    after = [f._cache_size() for f in kernels]
    assert [b - a for a, b in zip(before, after)] == [1, 1, 1]


def test_arnoldi_compiles_once(make_vectors):
    dim = 19
    operator = make_vectors(dim, dim)
    before = _householder_column._cache_size()
    arnoldi(operator, make_vectors(dim), Householder(dim), rtol=1e-9, maxiter=10)
    assert _householder_column._cache_size() - before == 1
