"""
Client session (bearer token + user snapshot) and its key-value persistence.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .models import User

logger = logging.getLogger(__name__)

TOKEN_KEY = "userToken"
USER_KEY = "currentUser"


class Session(BaseModel):
	"""The one process-wide credential. Replaced whole, never merged."""
	model_config = ConfigDict(frozen=True)

	token: str
	user: User


class MemoryStore:
	"""In-process key-value store."""

	def __init__(self, initial: Optional[Dict[str, Any]] = None):
		self._data: Dict[str, Any] = dict(initial or {})

	def get(self, key: str) -> Any:
		return self._data.get(key)

	def replace(self, values: Dict[str, Any], remove: Iterable[str] = ()) -> None:
		data = dict(self._data)
		for key in remove:
			data.pop(key, None)
		data.update(values)
		self._data = data


class JsonFileStore:
	"""Key-value store kept in one JSON file, rewritten atomically on every change."""

	def __init__(self, path):
		self.path = Path(path)

	def _read(self) -> Dict[str, Any]:
		if not self.path.exists():
			return {}
		try:
			with open(self.path, encoding="utf-8") as f:
				data = json.load(f)
		except (ValueError, OSError):
			logger.warning(f"Ignoring unreadable session file {self.path}")
			return {}
		return data if isinstance(data, dict) else {}

	def get(self, key: str) -> Any:
		return self._read().get(key)

	def replace(self, values: Dict[str, Any], remove: Iterable[str] = ()) -> None:
		data = self._read()
		for key in remove:
			data.pop(key, None)
		data.update(values)
		self.path.parent.mkdir(parents=True, exist_ok=True)
		fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
		try:
			with os.fdopen(fd, "w", encoding="utf-8") as f:
				json.dump(data, f, ensure_ascii=False, indent=2)
			os.replace(tmp, self.path)
		except BaseException:
			if os.path.exists(tmp):
				os.unlink(tmp)
			raise


class SessionStore:
	"""
	Reads and writes the session under the ``userToken``/``currentUser`` keys.

	Login sets it, logout clears it; request construction only reads it.
	"""

	def __init__(self, store=None):
		self._store = store if store is not None else MemoryStore()
		self._cached: Optional[Session] = None
		self._loaded = False

	@property
	def current(self) -> Optional[Session]:
		if not self._loaded:
			self._cached = self._load()
			self._loaded = True
		return self._cached

	@property
	def token(self) -> Optional[str]:
		session = self.current
		return session.token if session is not None else None

	@property
	def user(self) -> Optional[User]:
		session = self.current
		return session.user if session is not None else None

	def _load(self) -> Optional[Session]:
		token = self._store.get(TOKEN_KEY)
		raw_user = self._store.get(USER_KEY)
		if not token or not raw_user:
			return None
		try:
			return Session(token=token, user=User.model_validate(raw_user))
		except ValidationError as e:
			logger.warning(f"Stored user snapshot is unreadable, ignoring session: {e}")
			return None

	def save(self, session: Session) -> None:
		self._store.replace({
			TOKEN_KEY: session.token,
			USER_KEY: session.user.model_dump(mode="json", by_alias=True),
		})
		self._cached = session
		self._loaded = True
		logger.info(f"Session stored for user {session.user.id}")

	def update_user(self, user: User) -> None:
		"""Refresh the user snapshot, keeping the token."""
		session = self.current
		if session is None:
			return
		self.save(Session(token=session.token, user=user))

	def clear(self) -> None:
		self._store.replace({}, remove=(TOKEN_KEY, USER_KEY))
		self._cached = None
		self._loaded = True
		logger.info("Session cleared")
