from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import logging

import requests

from .config import AppConfig
from .errors import TransportError


logger = logging.getLogger(__name__)


class WikiquoteTransport:
	"""Thin GET-and-decode wrapper around the MediaWiki action API.

	Flags like ``redirects`` or ``noimages`` are switched on by presence, so
	callers pass them with an empty string value.
	"""

	def __init__(
		self,
		api_url: str,
		user_agent: str,
		timeout_seconds: int = 10,
		session: Optional[requests.Session] = None,
	):
		self.api_url = api_url
		self.timeout_seconds = max(1, int(timeout_seconds))
		self.session = session or requests.Session()
		self.session.headers.update({"User-Agent": user_agent})

	@classmethod
	def from_config(cls, config: AppConfig) -> "WikiquoteTransport":
		return cls(config.api_url, config.user_agent, timeout_seconds=config.timeout_s)

	def get_json(self, params: Mapping[str, Any]) -> Any:
		query: Dict[str, Any] = {"format": "json", **params}
		logger.debug("GET %s %s", self.api_url, query)
		try:
			resp = self.session.get(self.api_url, params=query, timeout=self.timeout_seconds)
			resp.raise_for_status()
		except requests.Timeout as e:
			raise TransportError(f"Request timed out after {self.timeout_seconds}s", params=query) from e
		except requests.HTTPError as e:
			status = e.response.status_code if e.response is not None else None
			raise TransportError(f"HTTP {status} from {self.api_url}", params=query, status_code=status) from e
		except requests.RequestException as e:
			raise TransportError(f"Request failed: {e}", params=query) from e

		try:
			data = resp.json()
		except ValueError as e:
			raise TransportError("Response is not valid JSON", params=query, status_code=resp.status_code) from e

		# API-level errors come back with HTTP 200
		if isinstance(data, dict) and isinstance(data.get("error"), dict):
			err = data["error"]
			code = err.get("code")
			raise TransportError(
				f"API error {code}: {err.get('info', 'Unknown error')}",
				params=query,
				status_code=resp.status_code,
				api_code=code,
			)
		return data
