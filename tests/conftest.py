import pytest

from core import services
from core.adapters.native_adapter import NativeAdapter
from core.constants import tao_to_units
from core.services import DemoServices

OWNER = "0xa11ce00000000000000000000000000000000000"
OTHER = "0xb0b0000000000000000000000000000000000000"
THIRD = "0xc4a2100000000000000000000000000000000000"


@pytest.fixture
def token(db):
    return DemoServices.seed_token()


@pytest.fixture
def owner():
    return OWNER


@pytest.fixture
def other():
    return OTHER


@pytest.fixture
def third():
    return THIRD


@pytest.fixture
def funded(token):
    """Native TAO for every test account, so deposits can be paid for."""
    for account in (OWNER, OTHER, THIRD):
        NativeAdapter.fund(account, tao_to_units("10000000"))
    return token


@pytest.fixture
def wrap(funded):
    """Pay native TAO in and receive WTAO, the way a real caller would."""

    def _wrap(account, amount_units):
        services.pay_and_deposit(funded, account, amount_units)

    return _wrap