"""
Query-string encoding for endpoint option objects.

Each options type is a pydantic model whose field aliases are the query
keys. Fields left at their declared default are omitted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidURLError, QueryEncodingError

_SCALARS = (str, int, float)


class QueryOptions(BaseModel):
    """Base class for endpoint options that travel as query parameters."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def query_items(self) -> Iterator[Tuple[str, Any, bool]]:
        """Yield (key, value, is_set) for every field, in declaration order."""
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            default = field.get_default(call_default_factory=True)
            is_set = value is not None and value != default
            yield field.alias or name, value, is_set


class ListOptions(QueryOptions):
    page_num: int = Field(default=0, alias="pageNum")
    items_per_page: int = Field(default=0, alias="itemsPerPage")
    include_count: bool = Field(default=False, alias="includeCount")


def _encode_scalar(key: str, value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    # bool first: it is also an int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _SCALARS):
        return str(value)
    raise QueryEncodingError(
        f"cannot encode {type(value).__name__} value for query key {key!r}"
    )


def encode_options(options: QueryOptions) -> Dict[str, List[str]]:
    """Map the set fields of an options object to query values."""
    if not isinstance(options, QueryOptions):
        raise QueryEncodingError(
            f"expected QueryOptions, got {type(options).__name__}"
        )

    values: Dict[str, List[str]] = {}
    for key, value, is_set in options.query_items():
        if not is_set:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            items = sorted(value) if isinstance(value, (set, frozenset)) else value
            values[key] = [_encode_scalar(key, v) for v in items]
        else:
            values[key] = [_encode_scalar(key, value)]
    return values


def set_query_params(url: str, options: Optional[QueryOptions]) -> str:
    """
    Return url with the options merged into its query string.

    Derived keys replace same-named keys already in url. When options is
    None or sets nothing, url comes back unchanged.
    """
    if options is None:
        return url

    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidURLError(f"invalid URL {url!r}: {exc}") from exc

    new_values = encode_options(options)
    if not new_values:
        return url

    merged: Dict[str, List[str]] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        merged.setdefault(key, []).append(value)
    merged.update(new_values)

    query = urlencode(
        [(key, v) for key in sorted(merged) for v in merged[key]]
    )
    return urlunsplit(parts._replace(query=query))


__all__ = ["QueryOptions", "ListOptions", "encode_options", "set_query_params"]
