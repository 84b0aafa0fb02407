import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from organizations.models import Organization
from websites.models import Website


@pytest.fixture
def organization(db):
    return Organization.objects.create(name='Acme Shops', email='ops@acme.example')


@pytest.fixture
def website(organization):
    return Website.objects.create(organization=organization, name='Acme Store', domain='shop.example.com')


@pytest.fixture
def inactive_website(organization):
    return Website.objects.create(
        organization=organization,
        name='Old Store',
        domain='old.example.com',
        is_active=False,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def staff_user(db):
    return get_user_model().objects.create_user(username='staff', password='pass', is_staff=True)
