from __future__ import annotations

import sys
from typing import NoReturn, Optional
import logging
import random

import typer

from .config import AppConfig
from .errors import WikiquoteError
from .text import to_plain_text
from .wikiquote_client import WikiquoteClient


app = typer.Typer(help="Random quotes from Wikiquote")


def _load_components(
	verbose: bool = False,
	seed: Optional[int] = None,
) -> tuple[AppConfig, WikiquoteClient]:
	config = AppConfig.load()
	logging.basicConfig(
		level=logging.DEBUG if verbose else config.log_level,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	rng = random.Random(seed) if seed is not None else None
	client = WikiquoteClient.from_config(config, rng=rng)
	return config, client


def _fail(exc: WikiquoteError) -> NoReturn:
	print(f"[error] {exc}", file=sys.stderr)
	raise typer.Exit(code=1)


def _render(quote: str, plain: bool) -> str:
	return to_plain_text(quote) if plain else quote


@app.command("random-quote")
def random_quote(
	query: str = typer.Argument(..., help="Person, work or topic to quote"),
	plain: bool = typer.Option(False, "--plain/--markup", help="Strip inline markup from the quote"),
	capitalize: Optional[bool] = typer.Option(
		None,
		"--capitalize/--no-capitalize",
		help="If set, overrides config default for capitalizing each word of the query.",
	),
	seed: Optional[int] = typer.Option(None, help="Seed the random choices for a repeatable pick"),
	retries: Optional[int] = typer.Option(None, min=0, help="Extra sections to try when one is empty"),
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every API call"),
):
	"""Print one random quote for QUERY followed by the resolved page title."""
	_, client = _load_components(verbose=verbose, seed=seed)
	if capitalize is not None:
		client.capitalize_queries = capitalize
	if retries is not None:
		client.section_retries = retries
	try:
		resolved = client.get_random_quote(query)
	except WikiquoteError as e:
		_fail(e)
	print(_render(resolved.quote, plain))
	print(f"- {resolved.canonical_title}")


@app.command()
def search(
	query: str = typer.Argument(..., help="Free text to search page titles for"),
	verbose: bool = typer.Option(False, "--verbose", "-v"),
):
	"""List page titles suggested for QUERY."""
	_, client = _load_components(verbose=verbose)
	try:
		titles = client.open_search(query)
	except WikiquoteError as e:
		_fail(e)
	if not titles:
		print(f"[empty] No suggestions for '{query}'")
		return
	for title in titles:
		print(title)


@app.command()
def sections(
	query: str = typer.Argument(..., help="Page to inspect"),
	verbose: bool = typer.Option(False, "--verbose", "-v"),
):
	"""Show which sections of QUERY's page are searched for quotes."""
	_, client = _load_components(verbose=verbose)
	try:
		page = client.resolve_title(query)
		section_set = client.resolve_sections(page.page_id)
	except WikiquoteError as e:
		_fail(e)
	print(f"{section_set.canonical_title or page.canonical_title} (page {page.page_id})")
	print("sections: " + ", ".join(section_set.section_indexes))


@app.command()
def quotes(
	query: str = typer.Argument(..., help="Page to read quotes from"),
	section: str = typer.Argument(..., help="Section index, as listed by 'sections'"),
	plain: bool = typer.Option(False, "--plain/--markup", help="Strip inline markup from quotes"),
	verbose: bool = typer.Option(False, "--verbose", "-v"),
):
	"""Print every quote found in one section of QUERY's page."""
	_, client = _load_components(verbose=verbose)
	try:
		page = client.resolve_title(query)
		quote_set = client.extract_quotes(page.page_id, section)
	except WikiquoteError as e:
		_fail(e)
	if not quote_set.quotes:
		print(f"[empty] No quotes in section {section} of '{quote_set.canonical_title or page.canonical_title}'")
		return
	for i, q in enumerate(quote_set.quotes):
		print(f"{i+1}. {_render(q, plain)}")


@app.command("wiki-link")
def wiki_link(
	query: str = typer.Argument(..., help="Page whose encyclopedia article to find"),
	section: str = typer.Option("0", help="Section to scan for interwiki links"),
	verbose: bool = typer.Option(False, "--verbose", "-v"),
):
	"""Print the encyclopedia URL linked from QUERY's page."""
	_, client = _load_components(verbose=verbose)
	try:
		page = client.resolve_title(query)
		url = client.find_wiki_link(page.canonical_title, page.page_id, section=section)
	except WikiquoteError as e:
		_fail(e)
	if not url:
		print(f"[empty] No link mentioning '{page.canonical_title}' in section {section}")
		raise typer.Exit(code=1)
	print(url)


@app.command()
def health():
	"""Show the effective configuration."""
	config = AppConfig.load()
	print(f"api_url: {config.api_url}")
	print(f"user_agent: {config.user_agent}")
	print(f"timeout_s: {config.timeout_s}")
	print(f"capitalize_queries: {config.capitalize_queries}")
	print(f"section_retries: {config.section_retries}")
	print(f"log_level: {config.log_level}")


def run():
	app()


if __name__ == "__main__":
	run()
