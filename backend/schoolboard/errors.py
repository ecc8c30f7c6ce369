"""Exceptions raised by SchoolBoard services and repositories."""


class SchoolBoardError(Exception):
    """Base class for all SchoolBoard errors."""


class InvalidScopeError(SchoolBoardError):
    """A required scope identifier or parameter is missing or invalid."""


class StoreError(SchoolBoardError):
    """A document store read or write failed."""


class RankingError(SchoolBoardError):
    """Rank computation or a leaderboard query failed."""


class RecordNotFoundError(SchoolBoardError):
    """The requested record does not exist."""


class DuplicateRecordError(SchoolBoardError):
    """A record with the same identifier already exists."""
