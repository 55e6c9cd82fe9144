"""Intent service package - query analysis for universal search"""

from .query_analyzer import QueryAnalyzer

__all__ = ["QueryAnalyzer"]
