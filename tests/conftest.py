"""Shared fixtures: an in-memory stand-in for the wiki API."""

from __future__ import annotations

import random
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pytest

from quotebot.errors import TransportError
from quotebot.wikiquote_client import WikiquoteClient


class FakeTransport:
	"""Answers get_json from canned data, keyed the way the real API is queried."""

	def __init__(self):
		self.calls: List[Dict[str, Any]] = []
		self.pages: Dict[str, Dict[str, Any]] = {}
		self.sections: Dict[int, Tuple[str, List[Dict[str, Any]]]] = {}
		self.html: Dict[Tuple[int, str], Tuple[str, str]] = {}
		self.iwlinks: Dict[Tuple[int, str], List[Dict[str, Any]]] = {}
		self.suggestions: Dict[str, List[str]] = {}
		self.fail_on: Optional[str] = None

	def add_page(self, page_id: int, title: str) -> None:
		self.pages[str(page_id)] = {"pageid": page_id, "ns": 0, "title": title}

	def add_sections(self, page_id: int, title: str, numbers: Sequence[str]) -> None:
		raw = [{"number": n, "index": str(i + 1), "line": f"Heading {n}"} for i, n in enumerate(numbers)]
		self.sections[page_id] = (title, raw)

	def add_html(self, page_id: int, section: str, title: str, html: str) -> None:
		self.html[(page_id, section)] = (title, html)

	def get_json(self, params: Mapping[str, Any]) -> Any:
		self.calls.append(dict(params))
		action = params["action"]
		step = "sections" if params.get("prop") == "sections" else action
		if self.fail_on == step:
			raise TransportError(f"simulated failure in {step}", params=params)

		if action == "query":
			return {"batchcomplete": "", "query": {"pages": self.pages}}
		if action == "opensearch":
			search = params["search"]
			return [search, self.suggestions.get(search, []), [], []]
		page_id = params["pageid"]
		if step == "sections":
			title, raw = self.sections[page_id]
			return {"parse": {"title": title, "pageid": page_id, "sections": raw}}
		section = params["section"]
		if (page_id, section) in self.iwlinks:
			return {"parse": {"title": "", "pageid": page_id, "iwlinks": self.iwlinks[(page_id, section)]}}
		title, html = self.html[(page_id, section)]
		return {"parse": {"title": title, "pageid": page_id, "text": {"*": html}}}


class ScriptedRandom(random.Random):
	"""Random source whose randrange returns scripted values in turn."""

	def __init__(self, picks: Sequence[int]):
		super().__init__(0)
		self.picks = list(picks)

	def randrange(self, *args, **kwargs):  # type: ignore[override]
		return self.picks.pop(0)


@pytest.fixture
def transport() -> FakeTransport:
	return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> WikiquoteClient:
	return WikiquoteClient(transport, rng=random.Random(1234))


@pytest.fixture
def mark_twain(transport: FakeTransport) -> FakeTransport:
	transport.add_page(7228, "Mark Twain")
	transport.add_sections(7228, "Mark Twain", ["1", "1.1", "2"])
	transport.add_html(
		7228,
		"2",
		"Mark Twain",
		"<h3>Quotes</h3><ul><li>Quote A<ul><li>Letter, 1870</li></ul></li><li>Quote B</li></ul>",
	)
	return transport


@pytest.fixture
def scripted_rng():
	return ScriptedRandom
