"""
Custom exceptions for the serde module.

Skipped rows are not errors: the parser signals them by returning None.
Everything raised from here means a row could not be turned into a record.
"""


class SerDeError(Exception):
    """
    Base exception for all deserialization errors.

    All other serde exceptions inherit from this class,
    allowing for broad exception catching when needed.
    """

    pass


class ParseError(SerDeError):
    """
    Raised when a log row cannot be parsed.

    Covers rows that do not match the CloudFront grammar and rows whose
    user-agent could not be classified. The underlying cause, if any, is
    chained as ``__cause__``.

    Attributes:
        line_content: The full text of the problematic row (optional)
        line_number: The line number where parsing failed (optional)
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        line_content: str | None = None,
        line_number: int | None = None,
    ):
        self.line_content = line_content
        self.line_number = line_number
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with row context."""
        if self.line_content is None:
            if self.line_number is not None:
                return f"{self.message} (line {self.line_number})"
            return self.message

        # Truncate long rows for readability; line_content keeps the full text
        content = (
            self.line_content[:100] + "..."
            if len(self.line_content) > 100
            else self.line_content
        )
        if self.line_number is not None:
            return f"{self.message} (line {self.line_number}: {content!r})"
        return f"{self.message}: {content!r}"
