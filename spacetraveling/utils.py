import datetime
import math
from typing import Iterable, Optional

WORDS_PER_MINUTE = 200

PT_BR_MONTHS = (
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
)  # fmt: skip


def as_text(blocks: Iterable, join_string: str = " ") -> str:
    """Plain text of a rich-text field, block texts joined by ``join_string``."""
    return join_string.join(_block_text(block) for block in blocks)


def calculate_reading_time(sections: Iterable) -> int:
    """
    Minutes to read a post: each section is rounded up on its own and the
    rounded minutes are summed, so [199, 1] words gives 2, not 1.
    """
    minutes = 0
    for section in sections:
        body = section.body if hasattr(section, "body") else section.get("body", [])
        words = len(as_text(body).split(" "))
        minutes += math.ceil(words / WORDS_PER_MINUTE)
    return minutes


def parse_publication_date(value) -> Optional[datetime.datetime]:
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        return value
    try:
        # Prismic sends offsets without a colon, e.g. 2021-03-15T19:25:28+0000
        return datetime.datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        return datetime.datetime.fromisoformat(value)


def format_publication_date(value) -> Optional[str]:
    """Format a publication timestamp as ``dd MMM yyyy`` in pt-BR (15 mar 2021)."""
    parsed = parse_publication_date(value)
    if parsed is None:
        return None
    return f"{parsed.day:02d} {PT_BR_MONTHS[parsed.month - 1]} {parsed.year}"


def _block_text(block) -> str:
    if isinstance(block, dict):
        return block.get("text") or ""
    return block.text or ""
