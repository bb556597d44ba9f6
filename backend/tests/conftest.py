# tests/conftest.py
"""
Pytest fixtures for ledger tests.

Database fixtures build a USD host, a USD collective hosted by it, and a
payee. `make_expense` creates expenses against that collective; pass
`collective=` to use another one.
"""

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache

from collectives.models import Collective
from expenses.models import Expense, PayoutMethod


User = get_user_model()


@pytest.fixture(autouse=True)
def _clear_cache():
    """FX rates are cached; keep tests independent."""
    cache.clear()
    yield
    cache.clear()


# =============================================================================
# Collective Fixtures
# =============================================================================

@pytest.fixture
def host(db):
    """A USD fiscal host."""
    return Collective.objects.create(
        slug="open-source-host",
        name="Open Source Host",
        type=Collective.Type.ORGANIZATION,
        currency="USD",
        is_host=True,
    )


@pytest.fixture
def eur_host(db):
    """A EUR fiscal host."""
    return Collective.objects.create(
        slug="europe-host",
        name="Europe Host",
        type=Collective.Type.ORGANIZATION,
        currency="EUR",
        is_host=True,
    )


@pytest.fixture
def collective(db, host):
    """A USD collective hosted by the USD host."""
    return Collective.objects.create(
        slug="webpack",
        name="Webpack",
        currency="USD",
        host=host,
    )


@pytest.fixture
def payee(db):
    """The person submitting expenses."""
    return Collective.objects.create(
        slug="jane-doe",
        name="Jane Doe ",
        type=Collective.Type.USER,
        currency="USD",
    )


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username="jane",
        email="jane@example.com",
        password="testpass123",
    )


@pytest.fixture
def payout_method(db, payee):
    return PayoutMethod.objects.create(
        collective=payee,
        type=PayoutMethod.Type.PAYPAL,
        data={"email": "jane@example.com"},
    )


# =============================================================================
# Expense Fixtures
# =============================================================================

@pytest.fixture
def make_expense(db, collective, payee, payout_method, user):
    """Factory creating a 100.00 USD invoice against `collective`."""

    def _make(**overrides):
        fields = {
            "collective": collective,
            "from_collective": payee,
            "payout_method": payout_method,
            "user": user,
            "type": Expense.Type.INVOICE,
            "status": Expense.Status.APPROVED,
            "description": "Server hosting",
            "amount": 10000,
            "currency": "USD",
        }
        fields.update(overrides)
        return Expense.objects.create(**fields)

    return _make


@pytest.fixture
def expense(make_expense):
    return make_expense()
