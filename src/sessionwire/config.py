# SessionWire — Configuration via Pydantic BaseSettings
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
	"""Session defaults.

	Environment variables are prefixed with SESSIONWIRE_. Values here form the
	lowest-precedence option layer of every Session.
	"""

	model_config = SettingsConfigDict(env_prefix="SESSIONWIRE_", env_file=".env", extra="ignore")

	connect_timeout: float = Field(default=2.0)
	timeout: float = Field(default=10.0)
	max_redirects: int = Field(default=10)
	cookie_dir: Optional[str] = Field(default=None)
	cookie_prefix: str = Field(default="sessionwire_")
	log_level: str = Field(default="INFO")
	log_dir: str = Field(default="logs")

	def default_options(self) -> dict:
		return {
			"connect_timeout": self.connect_timeout,
			"timeout": self.timeout,
			"max_redirects": self.max_redirects,
		}


settings = Settings()
