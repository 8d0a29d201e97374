from datetime import datetime
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.user_role import UserRole


@attrs.define
class UserEntity:
    """Read-only projection of an account owned by the auth provider."""

    email: str
    name: str
    role: UserRole = attrs.field(converter=UserRole.normalize)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
