"""
Older clients encoded every ticket of a purchase into the QR text itself:

    Ticket ID: 17
    Seat: A1
    ---
    Ticket ID: 18
    Seat: A2

New tickets only carry the transaction group id; this parser keeps the old
printouts scannable.
"""

from src.service.ticketing.domain.rule.storage_id import parse_storable_id


SEGMENT_SEPARATOR = '---'
TICKET_ID_PREFIX = 'Ticket ID:'


def is_legacy_payload(code: str) -> bool:
    return TICKET_ID_PREFIX in code and SEGMENT_SEPARATOR in code


def parse_legacy_ticket_ids(code: str) -> list[int]:
    if not is_legacy_payload(code):
        return []

    ticket_ids: list[int] = []
    for segment in code.split(SEGMENT_SEPARATOR):
        for line in segment.strip().splitlines():
            line = line.strip()
            if not line.startswith(TICKET_ID_PREFIX):
                continue
            raw_id = line[len(TICKET_ID_PREFIX) :].strip()
            ticket_id = parse_storable_id(raw_id)
            # first Ticket ID line of a segment wins
            if ticket_id is not None and ticket_id not in ticket_ids:
                ticket_ids.append(ticket_id)
            break
    return ticket_ids
