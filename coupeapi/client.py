import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .config import ClientConfig, load_config
from .dates import format_wire_date
from .decoding import decode_response
from .exceptions import ConfigurationError, CoupeException, DecodeError, NetworkError
from .result import Result
from .search import ArbitreSearch
from .session import JsonFileStore, SessionStore

from .auth import AuthService
from .forum import ForumService
from .leaderboard import LeaderboardService
from .matches import MatchesService
from .stadiums import StadiumsService
from .staff import StaffService
from .teams import TeamsService
from .tournaments import TournamentsService
from .users import UsersService

logger = logging.getLogger(__name__)


def _json_default(value):
	if isinstance(value, datetime):
		return format_wire_date(value)
	raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_body(body: Any) -> bytes:
	"""Serialize a request body; models are dumped by alias without unset fields."""
	if isinstance(body, BaseModel):
		body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
	return json.dumps(body, default=_json_default, ensure_ascii=False).encode("utf-8")


class CoupeAPI:
	""" Async client for the coupe tournament backend. """

	def __init__(
		self,
		config: Optional[ClientConfig] = None,
		sessions: Optional[SessionStore] = None,
		client: Optional[httpx.AsyncClient] = None,
	):
		self.config = config if config is not None else load_config()
		if sessions is None:
			sessions = SessionStore(JsonFileStore(self.config.session_path))
		self.sessions = sessions
		if client is None:
			kwargs = {} if self.config.timeout is None else {"timeout": self.config.timeout}
			client = httpx.AsyncClient(**kwargs)
		self._client = client
		# Feature services
		self.auth = AuthService(self._request, self)
		self.users = UsersService(self._request, self)
		self.teams = TeamsService(self._request, self)
		self.stadiums = StadiumsService(self._request, self)
		self.staff = StaffService(self._request, self)
		self.tournaments = TournamentsService(self._request, self)
		self.matches = MatchesService(self._request, self)
		self.leaderboard = LeaderboardService(self._request, self)
		self.forum = ForumService(self._request, self)

	async def __aenter__(self) -> "CoupeAPI":
		return self

	async def __aexit__(self, *exc) -> None:
		await self.aclose()

	async def aclose(self) -> None:
		await self._client.aclose()

	def arbitre_search(self) -> ArbitreSearch:
		"""Debounced referee search using the configured delay."""
		return ArbitreSearch(self.users, delay=self.config.search_delay)

	def url_for(self, template: str, *params: str) -> httpx.URL:
		"""
		Join the base URL and a path template such as ``/users/{}``.

		Each parameter is percent-encoded as one path segment.

		Raises:
			ConfigurationError: empty parameter or unusable URL
		"""
		segments = []
		for param in params:
			if not isinstance(param, str) or not param:
				raise ConfigurationError(f"Invalid path parameter {param!r} for {template}")
			segments.append(quote(param, safe=""))
		try:
			path = template.format(*segments)
		except (IndexError, KeyError) as e:
			raise ConfigurationError(f"Path template {template} does not match {len(params)} parameters") from e

		base = (self.config.base_url or "").rstrip("/")
		try:
			url = httpx.URL(base + path)
		except httpx.InvalidURL as e:
			raise ConfigurationError(f"Invalid URL {base + path!r}: {e}") from e
		if url.scheme not in ("http", "https") or not url.host:
			raise ConfigurationError(f"Invalid base URL {self.config.base_url!r}")
		return url

	def build_request(
		self,
		method: str,
		template: str,
		*params: str,
		body: Any = None,
		query: Optional[Dict[str, str]] = None,
		token: Optional[str] = None,
		authenticated: bool = True,
	) -> httpx.Request:
		"""
		Build the request for an endpoint.

		Args:
			method: HTTP method
			template: path template relative to the base URL
			params: path parameters
			body: JSON body (model, dict or list); None sends no body
			query: query string parameters
			token: bearer token overriding the stored session's
			authenticated: False for public endpoints, no token is attached

		Raises:
			ConfigurationError: the URL cannot be built
		"""
		url = self.url_for(template, *params)
		headers = {"Accept": "application/json"}
		content = None
		if body is not None:
			content = encode_body(body)
			headers["Content-Type"] = "application/json"
		if authenticated:
			auth_token = token if token is not None else self.sessions.token
			if auth_token:
				headers["Authorization"] = f"Bearer {auth_token}"
		return self._client.build_request(method, url, params=query, headers=headers, content=content)

	async def _request(
		self,
		method: str,
		template: str,
		*params: str,
		shape=None,
		envelope: Sequence[str] = (),
		body: Any = None,
		query: Optional[Dict[str, str]] = None,
		token: Optional[str] = None,
		authenticated: bool = True,
	) -> Result:
		"""Low-level request helper. Never raises a CoupeException; returns a Result."""
		try:
			request = self.build_request(
				method, template, *params,
				body=body, query=query, token=token, authenticated=authenticated,
			)
		except CoupeException as e:
			logger.error(f"Could not build {method} {template}: {e}")
			return Result.failure(e)

		logger.debug(f"{method} {request.url}")
		try:
			response = await self._client.send(request)
		except httpx.DecodingError as e:
			logger.warning(f"Could not decode body of {method} {request.url}: {e}")
			return Result.failure(DecodeError("Response body could not be decoded", cause=e))
		except httpx.RequestError as e:
			logger.warning(f"Failed to connect to {method} {request.url}: {e}")
			return Result.failure(NetworkError(e))

		logger.debug(f"Response ({response.status_code} [{response.reason_phrase}]) for {method} {request.url.path}")
		return decode_response(response, shape, envelope)
