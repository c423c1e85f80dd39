import base64
import binascii
from typing import Optional

from .config import FIELD_SEPARATOR, MAX_TIMESTAMP
from .models import Entry, encode_value

__all__ = ["encode_value", "encode_entry", "decode_entry"]


def encode_entry(entry: Entry) -> str:
    """Serializes an entry to its on-disk line (without the trailing newline)."""
    return FIELD_SEPARATOR.join([entry.encoded, str(entry.last_used), str(entry.count)])


def _parse_int(raw: str) -> Optional[int]:
    raw = raw.strip()
    # int() would also accept "+5", "1_000" and non-ASCII digits
    if not raw.isascii() or not raw.isdigit():
        return None
    return int(raw)


def decode_entry(line: str) -> Optional[Entry]:
    """
    Parses one history line back into an Entry.

    Accepts the current "<payload>|<last_used>|<count>" layout as well as the
    older "<payload>|<last_used>" one (count defaults to 1). Any malformed
    line yields None instead of raising, so a corrupt or half-written file
    only loses the affected lines.
    """
    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(fields) == 3:
        payload, raw_ts, raw_count = fields
    elif len(fields) == 2:
        payload, raw_ts = fields
        raw_count = "1"
    else:
        return None

    last_used = _parse_int(raw_ts)
    count = _parse_int(raw_count)
    if last_used is None or last_used > MAX_TIMESTAMP or count is None or count < 1:
        return None

    try:
        value = base64.b64decode(payload.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    if not value:
        return None

    return Entry(value=value, last_used=last_used, count=count)
