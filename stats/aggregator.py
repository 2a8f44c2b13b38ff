"""
Aggregations over a list of blogs.

Every function takes an ordered sequence of blog mappings with at least
``title``, ``author`` and ``likes`` keys and returns a plain dict, so the
result can be sent straight back as JSON. Empty input gives 0 or ``{}``.

Ties go to the first candidate that reaches the maximum when scanning
left to right. For the per-author functions the candidates are authors in
order of first appearance.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence


BlogLike = Mapping[str, Any]


@dataclass
class AuthorTally:
    """Running per-author totals."""
    author: str
    blogs: int = 0
    likes: int = 0


def _tally_by_author(blogs: Iterable[BlogLike]) -> list[AuthorTally]:
    tallies: dict[str, AuthorTally] = {}
    for blog in blogs:
        author = blog["author"]
        tally = tallies.get(author)
        if tally is None:
            tally = tallies[author] = AuthorTally(author=author)
        tally.blogs += 1
        tally.likes += blog.get("likes", 0)
    # dicts keep insertion order, so this is first-appearance order
    return list(tallies.values())


def total_likes(blogs: Sequence[BlogLike]) -> int:
    """Sum of likes over all blogs."""
    return sum(blog["likes"] for blog in blogs)


def favorite_blog(blogs: Sequence[BlogLike]) -> dict[str, Any]:
    """
    The blog with the most likes.

    Returns:
        {"title", "author", "likes"} of the winner, or {} for no blogs
    """
    favorite = None
    for blog in blogs:
        if favorite is None or blog["likes"] > favorite["likes"]:
            favorite = blog

    if favorite is None:
        return {}

    return {
        "title": favorite["title"],
        "author": favorite["author"],
        "likes": favorite["likes"],
    }


def most_blogs(blogs: Sequence[BlogLike]) -> dict[str, Any]:
    """
    The author with the most blogs.

    Returns:
        {"author", "blogs"}, or {} for no blogs
    """
    best = None
    for tally in _tally_by_author(blogs):
        if best is None or tally.blogs > best.blogs:
            best = tally

    if best is None:
        return {}
    return {"author": best.author, "blogs": best.blogs}


def most_likes(blogs: Sequence[BlogLike]) -> dict[str, Any]:
    """
    The author whose blogs have the most likes combined.

    Returns:
        {"author", "likes"}, or {} for no blogs
    """
    best = None
    for tally in _tally_by_author(blogs):
        if best is None or tally.likes > best.likes:
            best = tally

    if best is None:
        return {}
    return {"author": best.author, "likes": best.likes}


def summarize(blogs: Sequence[BlogLike]) -> dict[str, Any]:
    """All four aggregations in one dict."""
    return {
        "total_likes": total_likes(blogs),
        "favorite_blog": favorite_blog(blogs),
        "most_blogs": most_blogs(blogs),
        "most_likes": most_likes(blogs),
    }
