"""
Blog list statistics.
"""

from stats.aggregator import (
    AuthorTally,
    favorite_blog,
    most_blogs,
    most_likes,
    summarize,
    total_likes,
)

__all__ = [
    "AuthorTally",
    "favorite_blog",
    "most_blogs",
    "most_likes",
    "summarize",
    "total_likes",
]
