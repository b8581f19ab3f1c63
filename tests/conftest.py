import httpx
import pytest

from coupeapi import ClientConfig, CoupeAPI, MemoryStore, Session, SessionStore
from coupeapi.models import User

from .mocks.backend import BASE_URL, MockBackend, user_json


@pytest.fixture
def backend():
	return MockBackend()


@pytest.fixture
def sessions():
	return SessionStore(MemoryStore())


@pytest.fixture
def api(backend, sessions):
	"""Client wired to the mock backend with an empty in-memory session."""
	config = ClientConfig(base_url=BASE_URL)
	return CoupeAPI(config, sessions=sessions, client=httpx.AsyncClient(transport=backend.transport))


@pytest.fixture
def logged_in(sessions):
	"""Session as if a login had happened earlier."""
	sessions.save(Session(token="stored-token", user=User.model_validate(user_json())))
	return sessions
