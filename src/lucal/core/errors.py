class LucalError(Exception):
    """Base error."""

class YearOutOfRangeError(LucalError, ValueError):
    """Raised when a year falls outside the range the lunar tables cover."""

class InvalidMonthError(LucalError, ValueError):
    """Raised when a month is not in 1..12."""

class RequestError(LucalError, ValueError):
    """Raised for command line arguments that do not form a valid request."""

class HolidayDataError(LucalError):
    """Raised when holiday data cannot be read, parsed or downloaded."""

class GridShapeError(LucalError, ValueError):
    """Raised when a week row handed to the grid builder is not 7 days long."""
