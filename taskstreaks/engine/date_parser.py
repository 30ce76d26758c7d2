"""Due-date parsing for taskstreaks.

Task exports carry due dates such as "2024年3月5日". Anything else goes
through a generic parser. Parsing never raises: a value that cannot be read
is logged and replaced with today's date so the row still has a place in the
chronological ordering.
"""

import logging
import re
from datetime import date
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

JAPANESE_DATE_PATTERN = re.compile(r"(\d+)年(\d+)月(\d+)日")


def parse_due_date(date_string: str) -> date:
    """Convert a due date string into a calendar date.

    Args:
        date_string: Raw due value, e.g. "2024年3月5日" or "2024-03-05"

    Returns:
        The parsed date, or today's date if the string cannot be parsed
    """
    try:
        match = JAPANESE_DATE_PATTERN.search(date_string)
        if match:
            year, month, day = (int(group) for group in match.groups())
            return date(year, month, day)
        return dateutil_parser.parse(date_string).date()
    except (ValueError, TypeError, OverflowError) as e:
        logger.warning(f"Error parsing date {date_string!r}, using today: {type(e).__name__}: {str(e)[:100]}")
        return date.today()
