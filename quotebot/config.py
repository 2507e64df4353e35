from __future__ import annotations

import os

from pydantic import BaseModel
from dotenv import load_dotenv


DEFAULT_API_URL = "https://en.wikiquote.org/w/api.php"
DEFAULT_USER_AGENT = "quotebot/0.1 (https://github.com/quotebot/quotebot)"


class AppConfig(BaseModel):
	# Remote API
	api_url: str = DEFAULT_API_URL
	user_agent: str = DEFAULT_USER_AGENT
	timeout_s: int = 10

	# Resolution behavior
	capitalize_queries: bool = True
	section_retries: int = 0  # extra sections to try when the chosen one is empty

	log_level: str = "WARNING"

	@classmethod
	def load(cls) -> "AppConfig":
		# Load .env if present
		load_dotenv(override=False)

		return cls(
			api_url=os.getenv("WIKIQUOTE_API_URL", DEFAULT_API_URL),
			user_agent=os.getenv("WIKIQUOTE_USER_AGENT", DEFAULT_USER_AGENT),
			timeout_s=max(1, int(os.getenv("WIKIQUOTE_TIMEOUT_S", "10"))),
			capitalize_queries=os.getenv("CAPITALIZE_QUERIES", "true").lower() == "true",
			section_retries=max(0, int(os.getenv("SECTION_RETRIES", "0"))),
			log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
		)
