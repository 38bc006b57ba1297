import pytest

from apps.orders import providers


@pytest.fixture(autouse=True)
def fresh_adapters():
    # shared in-memory adapters must not leak orders or stock between tests
    providers.reset_adapters()
    yield
    providers.reset_adapters()
