"""
Intelligence components for conversation sessions.

Provides LLM-based session titling and summarization.
"""

from recruit_memory.intelligence.session_summarizer import SessionSummarizer, SessionSummary

__all__ = ["SessionSummarizer", "SessionSummary"]
