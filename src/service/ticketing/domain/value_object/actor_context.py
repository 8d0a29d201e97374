import attrs

from src.service.ticketing.domain.enum.user_role import UserRole


@attrs.frozen
class ActorContext:
    """The authenticated principal, passed explicitly into authorization-sensitive operations."""

    user_id: int
    role: UserRole = attrs.field(converter=UserRole.normalize)
