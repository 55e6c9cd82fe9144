"""
Search error taxonomy.

Individual strategy failures are not represented here: they are logged and
swallowed at the strategy boundary. Only store-level unavailability escapes.
"""


class SearchError(Exception):
    """Base class for search errors surfaced to callers"""


class StoreUnavailableError(SearchError):
    """The catalog data store could not be reached at all"""


class SearchUnavailableError(SearchError):
    """Every selected strategy failed because the store was unreachable"""

    def __init__(self, query: str, message: str = "Search temporarily unavailable"):
        super().__init__(message)
        self.query = query
        self.message = message
