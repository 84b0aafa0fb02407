import pytest

from organizations.models import Organization


@pytest.fixture
def organization(db):
    return Organization.objects.create(name='Acme Shops')
