import base64
from dataclasses import dataclass, field


def encode_value(value: str) -> str:
    """Base64 of the UTF-8 bytes; safe for newlines and the field separator."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


@dataclass
class Entry:
    """One deduplicated clipboard value with its usage metadata."""
    value: str
    last_used: int # Unix timestamp (seconds)
    count: int = 1 # Number of captures/promotions merged into this entry

    # On-disk payload, derived from value
    encoded: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.value:
            raise ValueError("Entry value cannot be empty.")
        if self.count < 1:
            raise ValueError("Entry count must be at least 1.")
        self.encoded = encode_value(self.value)
