from datetime import datetime, timezone
from typing import Optional

import attrs


@attrs.define
class TicketEntity:
    event_id: int
    user_id: int
    seat: str
    transaction_group_id: str
    qr_code: str
    price: int
    checked_in: bool = False
    checked_in_at: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def issue(
        cls, *, event_id: int, user_id: int, seat: str, transaction_group_id: str, price: int
    ) -> 'TicketEntity':
        # Every ticket of a purchase is found through the group's QR code
        return cls(
            event_id=event_id,
            user_id=user_id,
            seat=seat,
            transaction_group_id=transaction_group_id,
            qr_code=transaction_group_id,
            price=price,
            created_at=datetime.now(timezone.utc),
        )
