from typing import Optional


# Primary keys are INTEGER (int4 on PostgreSQL)
MAX_STORAGE_ID = 2**31 - 1
MAX_STORAGE_ID_DIGITS = len(str(MAX_STORAGE_ID))


def is_storable_id(value: int) -> bool:
    return 0 < value <= MAX_STORAGE_ID


def parse_storable_id(raw: str) -> Optional[int]:
    """Return the id a scanned string names, or None when no stored row could have it."""
    raw = raw.strip()
    # isdigit() alone also accepts '²' and other non-ASCII digits
    if not (raw.isascii() and raw.isdigit()):
        return None
    significant = raw.lstrip('0')
    if len(significant) > MAX_STORAGE_ID_DIGITS:
        return None
    value = int(significant or '0')
    return value if is_storable_id(value) else None
