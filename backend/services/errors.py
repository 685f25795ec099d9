"""Errors raised by the PDF services.

Every error here is recoverable: routers and the panel dispatcher turn them
into user-facing messages and the service keeps running.
"""


class PdfToolsError(Exception):
    """Base class for all PDF PowerTools errors."""


class RangeInputError(PdfToolsError):
    """Page range text rejected before any PDF work starts."""


class FormatError(RangeInputError):
    def __init__(self):
        super().__init__('Please use the format "1-3, 4-6, 7-10"')


class RangeBoundsError(RangeInputError):
    def __init__(self, start: int, end: int, page_count: int):
        self.start = start
        self.end = end
        self.page_count = page_count
        super().__init__(
            f"Page range {start}-{end} is invalid. PDF has pages 1-{page_count}"
        )


class RangeOrderError(RangeInputError):
    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        super().__init__(
            f"Invalid range: {start}-{end}. "
            "Start page must be less than or equal to end page"
        )


class ReadError(PdfToolsError):
    """Source PDF missing, unreadable or not a valid PDF."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")


class WriteError(PdfToolsError):
    """Output PDF could not be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")
