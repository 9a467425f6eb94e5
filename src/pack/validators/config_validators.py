import re

# Binary multiples, the same convention Spring-style "10MB" values use.
_DATA_SIZE_UNITS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024 ** 2,
    "GB": 1024 ** 3,
    "TB": 1024 ** 4,
}

_DATA_SIZE_PATTERN = re.compile(r"^\s*(?P<amount>\d+)\s*(?P<unit>[KMGT]?B)?\s*$", re.IGNORECASE)


def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()


def parse_data_size(value: str | int | None) -> int | None:
    """
    Convert a data-size value into a number of bytes.

    Accepted forms:
      - an int (already bytes)
      - "1048576" (bytes)
      - "512KB", "10MB", "1 GB", "10mb" (binary multiples, case-insensitive)

    Raises:
        ValueError: if the value is negative or not a recognised data size.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise ValueError(f"Invalid data size: {value!r}")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Data size must not be negative: {value}")
        return value

    m = _DATA_SIZE_PATTERN.match(str(value))
    if not m:
        raise ValueError(f"Invalid data size: {value!r} (expected e.g. '10MB', '512KB' or a byte count)")

    unit = (m.group("unit") or "B").upper()
    return int(m.group("amount")) * _DATA_SIZE_UNITS[unit]


def format_size_in_mb(size_in_bytes: int) -> str:
    """
    Human-readable megabytes with two decimals, e.g. 10485760 -> "10.00 MB".
    """
    return f"{size_in_bytes / (1024 * 1024):.2f} MB"
