import pytest

from .utils import StubSession


@pytest.fixture
def stub_session() -> StubSession:
    session = StubSession()
    session._session = object()
    return session
