from __future__ import annotations

import re

from bs4 import BeautifulSoup


def capitalize_words(text: str) -> str:
	"""Upper-case the first letter of each space-separated word.

	Page titles are case-sensitive per word upstream, so "mark twain" only
	resolves once it reads "Mark Twain". The rest of each word is left alone,
	which keeps the transform idempotent.
	"""
	return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def to_plain_text(markup: str) -> str:
	# Flatten inline markup for terminal output, collapse whitespace
	if not markup:
		return ""
	text = BeautifulSoup(markup, "lxml").get_text()
	return re.sub(r"\s+", " ", text).strip()
