"""
Cache key builders for the application.

This module contains functions to generate consistent cache keys for the
cached read endpoints, so that routes and invalidation share one format.
Parameters are joined in a fixed order and missing filters encode as empty
segments, so identical logical queries always map to the same key.
"""


def _part(value: object) -> str:
    return "" if value is None else str(value)


def posts_list_key(
    page: int,
    limit: int,
    search: str | None = None,
    category: str | None = None,
    author: int | None = None,
) -> str:
    """Generate cache key for a page of published posts."""
    return f"posts:{page}:{limit}:{_part(search)}:{_part(category)}:{_part(author)}"


def post_slug_key(slug: str) -> str:
    """Generate cache key for a single post by slug."""
    return f"post:{slug}"


def categories_list_key() -> str:
    """Generate cache key for the category list."""
    return "categories:all"


def authors_list_key() -> str:
    """Generate cache key for the author list."""
    return "authors:all"


def search_key(
    query: str,
    page: int,
    limit: int,
    category: str | None = None,
    author: int | None = None,
) -> str:
    """Generate cache key for a page of search results."""
    return f"search:{query}:{page}:{limit}:{_part(category)}:{_part(author)}"
