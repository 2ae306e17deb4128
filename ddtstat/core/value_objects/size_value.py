from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import re

from ..exceptions.dedup_exceptions import MalformedSizeToken


# Binary unit ranks as printed by the DDT histogram
UNIT_RANKS = {
    "": 0,
    "K": 1,
    "M": 2,
    "G": 3,
    "T": 4,
}

_SIZE_TOKEN_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)([KMGT]?)$')


@dataclass(frozen=True)
class SizeValue:
    """Exact byte count of one histogram size token."""
    bytes: int

    def __post_init__(self):
        if self.bytes < 0:
            raise ValueError("Size cannot be negative")

    @classmethod
    def from_zfs_string(cls, size_str: str) -> 'SizeValue':
        """Parse ZFS size string (e.g., '128K', '4.50G') to bytes.

        The mantissa is kept as a Decimal so fractional units such as
        '2.43K' are scaled exactly before truncation to whole bytes.
        """
        if size_str is None:
            raise MalformedSizeToken("None", "empty input")

        token = size_str.strip()
        if not token:
            raise MalformedSizeToken(size_str, "empty input")

        match = _SIZE_TOKEN_PATTERN.match(token)
        if not match:
            raise MalformedSizeToken(size_str, "expected <digits>[.<digits>][K|M|G|T]")

        try:
            mantissa = Decimal(match.group(1))
        except InvalidOperation as e:
            raise MalformedSizeToken(size_str, str(e)) from e

        rank = UNIT_RANKS[match.group(2)]
        return cls(int(mantissa * (1024 ** rank)))


def parse_size_token(token: str) -> int:
    """Return the exact byte count for a histogram size token."""
    return SizeValue.from_zfs_string(token).bytes
