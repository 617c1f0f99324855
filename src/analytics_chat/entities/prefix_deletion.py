"""Result of a prefix-based cache deletion."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PrefixDeletion:
    """How many keys a prefix scan removed.

    Attributes:
        prefix: The key prefix that was scanned
        count: Number of keys deleted
        scan_supported: False when the backend refused cursor scanning
    """

    prefix: str
    count: int
    scan_supported: bool = True
