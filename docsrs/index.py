"""Throwaway full-text index for keyword search over a catalog.

A fresh in-memory Whoosh index is built for every query and dropped when the
query returns. Only item labels are searchable; categories and links are
stored so hits can be reported, but never matched.

Query syntax is Whoosh's default grammar applied to the label field only:
bare terms are OR-combined, ``AND``/``OR``/``NOT``, quoted phrases, ``*`` and
``?`` wildcards and ``term~N`` fuzzy terms are supported, and ``field:``
prefixes are not. Labels are split on ``::``, ``_`` and case changes, so
``Deserializer`` finds ``de::value::BoolDeserializer``.

Ranking is Whoosh's default BM25F; equal scores keep catalog order.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from whoosh.analysis import IntraWordFilter, LowercaseFilter, RegexTokenizer
from whoosh.fields import STORED, TEXT, Schema
from whoosh.filedb.filestore import RamStorage
from whoosh.index import Index
from whoosh.qparser import FieldsPlugin, FuzzyTermPlugin, OrGroup, QueryParser
from whoosh.query import NullQuery, Query

from .config import SEARCH_RESULT_LIMIT
from .document import Item
from .errors import QueryParseError, SearchIndexError

LOGGER = logging.getLogger(__name__)

LABEL_FIELD = "label"


def label_analyzer():
    """Tokenizer chain for Rust item paths and identifiers."""
    return (
        RegexTokenizer(r"\w+")
        | IntraWordFilter(mergewords=True, mergenums=True)
        | LowercaseFilter()
    )


def catalog_schema() -> Schema:
    return Schema(
        category=STORED,
        href=STORED,
        label=TEXT(analyzer=label_analyzer(), stored=True, multitoken_query="or"),
    )


def build_index(items: Sequence[Item]) -> Index:
    """Index *items* in memory. Document numbers follow catalog order.

    Raises:
        SearchIndexError: If the index cannot be created or written.
    """
    try:
        index = RamStorage().create_index(catalog_schema())
        writer = index.writer()
        for item in items:
            fields = {
                name: value
                for name, value in (
                    ("category", item.category),
                    ("href", item.href),
                    ("label", item.label),
                )
                if value is not None
            }
            writer.add_document(**fields)
        writer.commit()
    except Exception as exc:
        LOGGER.error("Failed to build search index: %s", exc)
        raise SearchIndexError(f"Failed to build search index: {exc}") from exc
    return index


def parse_keyword(keyword: str, index_schema: Schema) -> Query:
    """Parse *keyword* into a query over the label field.

    Raises:
        QueryParseError: If the keyword is blank, does not parse, or
            contains no searchable terms.
    """
    if not keyword or not keyword.strip():
        raise QueryParseError("Search keyword must not be empty", keyword=keyword)

    parser = QueryParser(LABEL_FIELD, schema=index_schema, group=OrGroup)
    parser.remove_plugin_class(FieldsPlugin)
    parser.add_plugin(FuzzyTermPlugin())

    try:
        query = parser.parse(keyword)
    except Exception as exc:
        raise QueryParseError(
            f"Invalid search keyword {keyword!r}: {exc}", keyword=keyword
        ) from exc

    if query is NullQuery:
        raise QueryParseError(
            f"Search keyword {keyword!r} contains no searchable terms",
            keyword=keyword,
        )
    return query


def search_catalog(
    items: Sequence[Item], keyword: str, limit: int = SEARCH_RESULT_LIMIT
) -> List[Item]:
    """Return the catalog items whose labels best match *keyword*.

    At most ``min(limit, 10)`` items are returned, best match first.

    Raises:
        QueryParseError: If *keyword* is not a valid query.
        SearchIndexError: If building or querying the index fails.
    """
    limit = min(max(1, limit), SEARCH_RESULT_LIMIT)
    query = parse_keyword(keyword, catalog_schema())
    if not items:
        return []

    index = build_index(items)
    try:
        with index.searcher() as searcher:
            hits = searcher.search(query, limit=None)
            ranked = sorted(
                ((hit.score or 0.0, hit.docnum) for hit in hits),
                key=lambda pair: (-pair[0], pair[1]),
            )
    except Exception as exc:
        LOGGER.error("Search index query failed: %s", exc)
        raise SearchIndexError(f"Search index query failed: {exc}") from exc
    finally:
        index.close()

    LOGGER.debug(
        "Keyword %r matched %d of %d items", keyword, len(ranked), len(items)
    )
    return [items[docnum] for _, docnum in ranked[:limit]]
