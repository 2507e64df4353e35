"""Errors raised while resolving a query into a quote.

Every resolution step either returns its value or raises exactly one of the
``WikiquoteError`` subclasses below. Nothing is retried internally.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


class WikiquoteError(Exception):
	"""Base exception for quote resolution failures."""

	pass


class TransportError(WikiquoteError):
	"""The remote call failed: network, HTTP status, or a malformed response."""

	def __init__(
		self,
		message: str,
		params: Optional[Mapping[str, Any]] = None,
		status_code: Optional[int] = None,
		api_code: Optional[str] = None,
	):
		super().__init__(message)
		self.params = dict(params or {})
		self.status_code = status_code
		self.api_code = api_code


class NotFoundError(WikiquoteError):
	"""The title query matched no existing page."""

	def __init__(self, query: str):
		super().__init__(f"No page found for '{query}'")
		self.query = query


class EmptySectionError(WikiquoteError):
	"""Every section tried for a page yielded no quotes."""

	def __init__(self, page_id: int, canonical_title: str, sections: Sequence[str]):
		tried = ", ".join(sections)
		super().__init__(f"No quotes in section(s) {tried} of '{canonical_title}'")
		self.page_id = page_id
		self.canonical_title = canonical_title
		self.sections = tuple(sections)
