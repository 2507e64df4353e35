from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Sequence

import logging
import random

from .config import AppConfig
from .errors import EmptySectionError, NotFoundError, TransportError
from .markup import extract_quotes_from_html
from .models import (
	InterwikiLink,
	PageEntry,
	PageReference,
	QuoteSet,
	ResolvedQuote,
	SectionEntry,
	SectionSet,
)
from .text import capitalize_words
from .transport import WikiquoteTransport


logger = logging.getLogger(__name__)

# Quotes usually live under the first top-level section's sub-headings
QUOTE_SECTION = "1"


class JsonTransport(Protocol):
	def get_json(self, params: Mapping[str, Any]) -> Any:
		...


def _parse_body(data: Any, params: Mapping[str, Any]) -> Mapping[str, Any]:
	parse = data.get("parse") if isinstance(data, dict) else None
	if not isinstance(parse, dict):
		raise TransportError("Response has no 'parse' object", params=params)
	return parse


def _malformed(what: str, params: Mapping[str, Any], exc: Exception) -> TransportError:
	return TransportError(f"Malformed {what} in response: {exc}", params=params)


class WikiquoteClient:
	"""Resolve free-text queries into quotes from a Wikiquote-style wiki.

	Every public method makes at most one remote call, except
	``get_random_quote`` which chains title -> sections -> quotes.
	"""

	def __init__(
		self,
		transport: JsonTransport,
		rng: Optional[random.Random] = None,
		capitalize_queries: bool = True,
		section_retries: int = 0,
	):
		self.transport = transport
		self.rng = rng if rng is not None else random.Random()
		self.capitalize_queries = capitalize_queries
		self.section_retries = max(0, int(section_retries))

	@classmethod
	def from_config(cls, config: AppConfig, rng: Optional[random.Random] = None) -> "WikiquoteClient":
		return cls(
			WikiquoteTransport.from_config(config),
			rng=rng,
			capitalize_queries=config.capitalize_queries,
			section_retries=config.section_retries,
		)

	def resolve_title(self, query: str) -> PageReference:
		"""Map a query to the first existing page, following redirects.

		The API may answer with several entries, including synthetic negative
		ids for missing titles. The first eligible one in response order wins.
		"""
		titles = capitalize_words(query) if self.capitalize_queries else query
		params = {"action": "query", "redirects": "", "titles": titles}
		data = self.transport.get_json(params)
		query_obj = data.get("query") if isinstance(data, dict) else None
		pages = (query_obj or {}).get("pages") or {}
		if not isinstance(pages, dict):
			raise TransportError("Response 'query.pages' is not a mapping", params=params)

		try:
			for raw in pages.values():
				entry = PageEntry.from_api(raw)
				if entry.eligible:
					logger.debug("Resolved '%s' to page %s (%s)", query, entry.page_id, entry.title)
					return PageReference(page_id=entry.page_id, canonical_title=entry.title or titles)
		except (TypeError, ValueError) as e:
			raise _malformed("page entry", params, e) from e
		raise NotFoundError(query)

	def resolve_sections(self, page_id: int) -> SectionSet:
		"""Sections ``1.x`` of a page, or ``["1"]`` when it has none."""
		params = {"action": "parse", "prop": "sections", "pageid": page_id}
		parse = _parse_body(self.transport.get_json(params), params)
		try:
			entries = [SectionEntry.from_api(raw) for raw in parse.get("sections") or []]
		except (TypeError, ValueError) as e:
			raise _malformed("section list", params, e) from e

		indexes = [e.index for e in entries if len(e.path) > 1 and e.path[0] == QUOTE_SECTION]
		if not indexes:
			logger.info("Page %s has no %s.x sections; using section %s", page_id, QUOTE_SECTION, QUOTE_SECTION)
			indexes = [QUOTE_SECTION]
		try:
			return SectionSet(canonical_title=parse.get("title") or "", section_indexes=tuple(indexes))
		except ValueError as e:
			raise _malformed("section set", params, e) from e

	def extract_quotes(self, page_id: int, section_index: str) -> QuoteSet:
		params = {"action": "parse", "noimages": "", "pageid": page_id, "section": section_index}
		parse = _parse_body(self.transport.get_json(params), params)
		text = parse.get("text")
		if not isinstance(text, dict) or "*" not in text:
			raise TransportError("Response has no 'parse.text' markup", params=params)

		markup = text["*"] or ""
		if not isinstance(markup, str):
			raise TransportError("Response 'parse.text' markup is not a string", params=params)

		quotes = extract_quotes_from_html(markup)
		try:
			return QuoteSet(canonical_title=parse.get("title") or "", quotes=tuple(quotes))
		except ValueError as e:
			raise _malformed("quote set", params, e) from e

	def find_wiki_link(self, title: str, page_id: int, section: str = "0") -> Optional[str]:
		"""URL of the first interwiki link whose text mentions ``title``.

		Section 0 of a person's page usually links to their encyclopedia article.
		"""
		params = {"action": "parse", "noimages": "", "pageid": page_id, "section": section}
		parse = _parse_body(self.transport.get_json(params), params)
		try:
			links = [InterwikiLink.from_api(raw) for raw in parse.get("iwlinks") or []]
		except (TypeError, ValueError) as e:
			raise _malformed("interwiki link", params, e) from e
		for link in links:
			if title in link.text:
				return link.url or None
		return None

	def open_search(self, query: str) -> List[str]:
		params = {"action": "opensearch", "namespace": 0, "suggest": "", "search": query}
		data = self.transport.get_json(params)
		if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
			raise TransportError("Unexpected opensearch response", params=params)
		return [str(t) for t in data[1]]

	def _choose(self, items: Sequence[str]) -> str:
		return items[self.rng.randrange(len(items))]

	def get_random_quote(self, query: str) -> ResolvedQuote:
		"""Pick a random quote from a random quote section of the query's page.

		When the chosen section has no quotes, up to ``section_retries`` other
		sections are drawn before giving up with ``EmptySectionError``.
		"""
		page = self.resolve_title(query)
		sections = self.resolve_sections(page.page_id)

		remaining = list(sections.section_indexes)
		tried: List[str] = []
		while remaining and len(tried) <= self.section_retries:
			section = remaining.pop(self.rng.randrange(len(remaining)))
			tried.append(section)
			quote_set = self.extract_quotes(page.page_id, section)
			if quote_set.quotes:
				quote = self._choose(quote_set.quotes)
				title = quote_set.canonical_title or sections.canonical_title or page.canonical_title
				return ResolvedQuote(canonical_title=title, quote=quote)
			logger.info("Section %s of page %s has no quotes", section, page.page_id)

		raise EmptySectionError(page.page_id, sections.canonical_title or page.canonical_title, tried)
