"""
Client configuration.

Sources, later ones winning: defaults, ``[coupe]`` section of an INI file,
``COUPE_*`` environment variables (a ``.env`` file is loaded first).
"""
import configparser
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_BASE_URL = "http://localhost:3001/api/v1"
DEFAULT_SESSION_FILE = "~/.coupeapi/session.json"
SEARCH_DEBOUNCE_SECONDS = 0.5

ENV_PREFIX = "COUPE_"


class ClientConfig(BaseModel):
	base_url: str = DEFAULT_BASE_URL
	session_file: str = DEFAULT_SESSION_FILE
	# None keeps httpx's default timeout
	timeout: Optional[float] = None
	search_delay: float = SEARCH_DEBOUNCE_SECONDS

	@property
	def session_path(self) -> Path:
		return Path(self.session_file).expanduser()


def load_config(config_path: str = "config.ini", env_file: Optional[str] = None) -> ClientConfig:
	"""
	Build the client configuration.

	Args:
		config_path: INI file with an optional ``[coupe]`` section; missing file is fine
		env_file: explicit .env path (defaults to python-dotenv's lookup)

	Returns:
		ClientConfig
	"""
	load_dotenv(env_file)
	values = {}

	parser = configparser.ConfigParser()
	parser.read(config_path)
	if "coupe" in parser:
		section = parser["coupe"]
		for key in ClientConfig.model_fields:
			if key in section:
				values[key] = section[key]

	for key in ClientConfig.model_fields:
		env_value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
		if env_value:
			values[key] = env_value

	return ClientConfig(**values)
