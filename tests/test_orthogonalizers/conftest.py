# mypy: ignore-errors

import pytest

from tinykrylov import MGS, Householder


@pytest.fixture(params=[MGS, Householder], ids=["mgs", "householder"])
def ortho_type(request):
    return request.param
