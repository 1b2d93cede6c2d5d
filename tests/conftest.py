import pytest
import respx

from moniewave.services.paystack_client import PaystackClient
from moniewave.tools.registry import build_registry
from moniewave.utils.config import DevelopmentConfig

TEST_SECRET = "sk_test_0123456789abcdef"
BASE_URL = "https://api.paystack.test"


@pytest.fixture
def test_settings():
    return DevelopmentConfig(
        PAYSTACK_SECRET_KEY=TEST_SECRET,
        PAYSTACK_BASE_URL=BASE_URL,
        RATE_LIMIT_REQUESTS=1000,
        _env_file=None,
    )


@pytest.fixture
def paystack_client():
    return PaystackClient(TEST_SECRET, base_url=BASE_URL)


@pytest.fixture
def registry(paystack_client):
    return build_registry(paystack_client)


@pytest.fixture
def paystack_api():
    # Every Paystack call in a test must hit a mocked route
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as respx_mock:
        yield respx_mock
