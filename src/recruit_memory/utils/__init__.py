"""Utility functions for recruit-memory."""

from recruit_memory.utils.text_search import matches_all_terms, search_terms

__all__ = ["matches_all_terms", "search_terms"]
