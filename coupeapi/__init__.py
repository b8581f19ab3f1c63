from .client import CoupeAPI
from .config import ClientConfig, load_config
from .exceptions import (
	ApiError, ConfigurationError, CoupeException, DecodeError, EmptyBodyError,
	MalformedReferenceError, NetworkError, Unauthorized,
)
from .result import Result
from .search import ArbitreSearch
from .session import JsonFileStore, MemoryStore, Session, SessionStore

__all__ = [
	"CoupeAPI", "ClientConfig", "load_config", "Result", "ArbitreSearch",
	"Session", "SessionStore", "JsonFileStore", "MemoryStore",
	"CoupeException", "ApiError", "Unauthorized", "ConfigurationError", "DecodeError",
	"EmptyBodyError", "MalformedReferenceError", "NetworkError",
]
