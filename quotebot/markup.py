"""Quote extraction from rendered section markup.

A quote page section is rendered roughly as::

	<h3>Title</h3>
	<ul>
	  <li>Quote text, possibly with a <b>memorable part</b>
	    <ul><li>citation / attribution</li></ul>
	  </li>
	  <li>Next quote</li>
	</ul>

Only list items that are not inside another list item are quotes. When an
item has bold text, the bold part alone is the quote; otherwise the whole
item (minus its nested lists) is. Both branches return inner markup. Items
that reduce to nothing are dropped.
"""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup, Tag


logger = logging.getLogger(__name__)

LIST_TAGS = ["ul", "ol", "dl"]
BOLD_TAGS = ["b", "strong"]


def top_level_items(soup: BeautifulSoup) -> List[Tag]:
	"""List items with no list item ancestor, in document order."""
	return [li for li in soup.find_all("li") if li.find_parent("li") is None]


def _strip_nested_lists(item: Tag) -> None:
	for nested in list(item.find_all(LIST_TAGS)):
		# Already removed along with an enclosing list
		if nested.decomposed:
			continue
		nested.decompose()


def quote_text(item: Tag) -> str:
	"""Reduce one top-level list item to its quote markup.

	Mutates ``item``: nested lists are removed first so bold text inside a
	citation never counts. Returns an empty string when no text is left.
	"""
	_strip_nested_lists(item)
	if not item.get_text(strip=True):
		return ""
	# Whitespace-only bold is layout, not emphasis
	bolds = [
		b for b in item.find_all(BOLD_TAGS)
		if b.find_parent(BOLD_TAGS) is None and b.get_text(strip=True)
	]
	if bolds:
		return "".join(b.decode_contents() for b in bolds).strip()
	return item.decode_contents().strip()


def extract_quotes_from_html(html: str) -> List[str]:
	if not html or not html.strip():
		return []
	soup = BeautifulSoup(html, "lxml")
	items = top_level_items(soup)
	quotes = [q for q in (quote_text(li) for li in items) if q]
	logger.debug("Extracted %d quote(s) from %d top-level item(s)", len(quotes), len(items))
	return quotes
