from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageReference(BaseModel):
	model_config = ConfigDict(frozen=True)

	page_id: int = Field(gt=0)
	canonical_title: str


class SectionSet(BaseModel):
	model_config = ConfigDict(frozen=True)

	canonical_title: str
	section_indexes: Tuple[str, ...]

	@field_validator("section_indexes")
	@classmethod
	def _not_empty(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
		if not value:
			raise ValueError("section_indexes must not be empty")
		return value


class QuoteSet(BaseModel):
	model_config = ConfigDict(frozen=True)

	canonical_title: str
	quotes: Tuple[str, ...] = ()


class ResolvedQuote(BaseModel):
	model_config = ConfigDict(frozen=True)

	canonical_title: str
	quote: str


def _require_mapping(raw: Any, kind: str) -> None:
	if not isinstance(raw, Mapping):
		raise TypeError(f"{kind} entry must be an object, got {type(raw).__name__}")


# Typed views of raw API entries. The API marks flags like "missing" by key
# presence (value is an empty string), so they are read with `in`.


class PageEntry(BaseModel):
	model_config = ConfigDict(frozen=True)

	page_id: Optional[int] = None
	title: Optional[str] = None
	missing: bool = False
	invalid: bool = False

	@classmethod
	def from_api(cls, raw: Mapping[str, Any]) -> "PageEntry":
		_require_mapping(raw, "PageEntry")
		page_id = raw.get("pageid")
		return cls(
			page_id=int(page_id) if page_id is not None else None,
			title=raw.get("title"),
			missing="missing" in raw,
			invalid="invalid" in raw,
		)

	@property
	def eligible(self) -> bool:
		return not self.missing and not self.invalid and (self.page_id or 0) > 0


class SectionEntry(BaseModel):
	model_config = ConfigDict(frozen=True)

	number: str
	index: str
	line: str = ""

	@classmethod
	def from_api(cls, raw: Mapping[str, Any]) -> "SectionEntry":
		_require_mapping(raw, "SectionEntry")
		return cls(
			number=str(raw.get("number", "")),
			index=str(raw.get("index", "")),
			line=str(raw.get("line") or ""),
		)

	@property
	def path(self) -> Tuple[str, ...]:
		return tuple(self.number.split("."))


class InterwikiLink(BaseModel):
	model_config = ConfigDict(frozen=True)

	prefix: str = ""
	text: str = ""
	url: str = ""

	@classmethod
	def from_api(cls, raw: Mapping[str, Any]) -> "InterwikiLink":
		_require_mapping(raw, "InterwikiLink")
		return cls(
			prefix=str(raw.get("prefix") or ""),
			text=str(raw.get("*") or ""),
			url=str(raw.get("url") or ""),
		)
