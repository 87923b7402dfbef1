"""
Web Access Package

Provider clients and result adapters for the search pipeline.
"""

from .search import GoogleSearchClient, ResultSourceAdapter, SearchCache

__all__ = ["GoogleSearchClient", "ResultSourceAdapter", "SearchCache"]
