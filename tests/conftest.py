import pytest

from shopify_resource import Connection, RestResponse


class FakeTransport:
    """records REST calls, answering them with canned bodies in order"""

    def __init__(self, *bodies):
        self.bodies = list(bodies)
        self.calls = []

    def queue(self, *bodies):
        self.bodies.extend(bodies)

    def rest(self, method, path, params=None):
        self.calls.append((method, path, params))
        return RestResponse(200, self.bodies.pop(0))


@pytest.fixture(autouse=True)
def clear_connection():
    Connection.clear()
    yield
    Connection.clear()


@pytest.fixture
def transport():
    fake = FakeTransport()
    Connection.set(
        True,
        "example.myshopify.com",
        {"key": "k", "password": "p"},
        client=fake,
    )
    return fake


@pytest.fixture
def make_transport():
    return FakeTransport
