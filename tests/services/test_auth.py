"""
Tests for the auth and users services.
"""
import pytest

from coupeapi.exceptions import ApiError, ConfigurationError

from ..mocks.backend import MockBackend, tournament_json, user_json


@pytest.mark.asyncio
async def test_login_stores_session_used_by_later_calls(api, backend):
	backend.add("POST", "/auth/login", {"message": "ok", "access_token": "T", "user": user_json()})
	backend.add("GET", "/coupes", [tournament_json()])

	result = await api.auth.login("sami@example.com", "secret")
	assert result.ok
	assert "Authorization" not in backend.last.headers
	assert MockBackend.body(backend.last) == {"email": "sami@example.com", "password": "secret"}
	assert api.sessions.token == "T"
	assert api.sessions.user.id == "u1"

	await api.tournaments.list()
	assert backend.last.headers["Authorization"] == "Bearer T"


@pytest.mark.asyncio
async def test_failed_login_keeps_previous_session(api, backend, logged_in):
	backend.add("POST", "/auth/login", {"message": "Invalid credentials"}, status=401)
	result = await api.auth.login("sami@example.com", "wrong")
	assert isinstance(result.error, ApiError)
	assert result.error.message == "Invalid credentials"
	assert api.sessions.token == "stored-token"


@pytest.mark.asyncio
async def test_token_without_user_is_not_stored(api, backend):
	backend.add("POST", "/auth/login", {"access_token": "T"})
	result = await api.auth.login("sami@example.com", "secret")
	assert result.ok
	assert api.sessions.current is None


@pytest.mark.asyncio
async def test_register_then_verify(api, backend):
	backend.add("POST", "/auth/register", {"message": "Code sent"})
	backend.add("POST", "/auth/verify-code", {"access_token": "T2", "user": user_json("u2")})

	result = await api.auth.register(
		nom="Ben Ali", prenom="Sami", tel="20123456", email="s@e.com", age="31", role="OWNER", password="pw",
	)
	assert result.value.message == "Code sent"
	assert api.sessions.current is None

	await api.auth.verify_code("s@e.com", "123456")
	assert api.sessions.user.id == "u2"


@pytest.mark.asyncio
async def test_reset_password_body(api, backend):
	backend.add("POST", "/auth/forgot-password/reset", {"message": "Password updated"})
	result = await api.auth.reset_password("s@e.com", "1234", "new", "new")
	assert result.ok
	assert MockBackend.body(backend.last) == {
		"email": "s@e.com", "code": "1234", "newPassword": "new", "confirmPassword": "new",
	}


@pytest.mark.asyncio
async def test_resend_code_accepts_empty_body(api, backend):
	backend.add("POST", "/auth/send-code", status=204)
	result = await api.auth.resend_code("s@e.com")
	assert result.ok


def test_logout_clears_session(api, logged_in):
	api.auth.logout()
	assert api.sessions.token is None
	assert api.sessions.user is None


@pytest.mark.asyncio
async def test_update_profile_requires_session(api, backend):
	result = await api.users.update_profile(nom="X")
	assert isinstance(result.error, ConfigurationError)
	assert backend.requests == []


@pytest.mark.asyncio
async def test_update_profile_sends_only_given_fields(api, backend, logged_in):
	backend.add("PATCH", "/users/u1", {"message": "updated", "user": user_json(tel="55000000")})
	result = await api.users.update_profile(tel="55000000", picture=None)
	assert result.ok
	assert MockBackend.body(backend.last) == {"tel": "55000000"}
	assert api.sessions.user.tel == "55000000"
	assert api.sessions.token == "stored-token"


@pytest.mark.asyncio
async def test_get_user(api, backend, logged_in):
	backend.add("GET", "/users/u1", user_json())
	result = await api.users.get("u1")
	assert result.value.full_name == "Sami Ben Ali"


@pytest.mark.asyncio
async def test_forgot_password_flow(api, backend):
	backend.add("POST", "/auth/forgot-password", {"message": "Code sent"})
	backend.add("POST", "/auth/forgot-password/verify-code", {"message": "Code valid"})

	sent = await api.auth.forgot_password("s@e.com")
	assert sent.value.message == "Code sent"
	verified = await api.auth.verify_reset_code("s@e.com", "1234")
	assert MockBackend.body(backend.last) == {"email": "s@e.com", "code": "1234"}
	assert verified.value.message == "Code valid"
	assert api.sessions.current is None


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   "])
async def test_blank_arbitre_search_makes_no_request(api, backend, logged_in, query):
	result = await api.users.search_arbitres(query)
	assert result.ok
	assert result.value == []
	assert backend.requests == []
