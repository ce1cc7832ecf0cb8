"""Exceptions for jcal library."""


class CalendarError(Exception):
    """Base exception for all jcal errors."""


class CalendarParseError(CalendarError):
    """Exception raised when parsing iCalendar or vCard content.

    Raised for structural problems in the content (a missing delimiter,
    an unterminated quote or component, an invalid recurrence rule part, etc).
    Scalar values with an invalid literal (e.g. a non numeric INTEGER) are
    not structural problems and are coerced to a default instead.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the content line that failed to
    parse, useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the CalendarParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error
