"""
Parse and validate page range text such as "1-3, 4-6, 7-10".

Grammar:
    RangeList := Range ("," WS* Range)*
    Range     := Digits "-" Digits

Bounds are only checked when the page count is already known. Without it,
out-of-range pages are left for split_pdf to skip.
"""
import re
from typing import List, Optional

from services.errors import FormatError, RangeBoundsError, RangeOrderError
from services.pdf_service import PageRange

RANGE_LIST_PATTERN = re.compile(r"\d+-\d+(?:,\s*\d+-\d+)*", re.ASCII)


def parse_page_ranges(text: str, page_count: Optional[int] = None) -> List[PageRange]:
    if not RANGE_LIST_PATTERN.fullmatch(text):
        raise FormatError()

    ranges = []
    for token in text.split(","):
        start, end = (int(part) for part in token.strip().split("-"))
        if page_count is not None and (start < 1 or end > page_count):
            raise RangeBoundsError(start, end, page_count)
        if start > end:
            raise RangeOrderError(start, end)
        ranges.append(PageRange(start, end))
    return ranges


def validate_page_ranges(text: str, page_count: Optional[int] = None) -> Optional[str]:
    """Message to show under the input box, or None when the text is valid."""
    try:
        parse_page_ranges(text, page_count)
    except (FormatError, RangeBoundsError, RangeOrderError) as e:
        return str(e)
    return None
