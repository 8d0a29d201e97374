from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.actor_context import ActorContext
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> ActorContext:
    """Stateless: the actor is rebuilt from the token, no DB query."""
    return jwt_auth.get_actor_from_jwt(credentials.credentials if credentials else None)


class RoleAuthStrategy:
    @staticmethod
    def can_book(actor: ActorContext) -> bool:
        return actor.role is UserRole.CUSTOMER

    @staticmethod
    def can_create_event(actor: ActorContext) -> bool:
        return actor.role in (UserRole.ORGANIZER, UserRole.ADMIN)

    @staticmethod
    def can_scan(actor: ActorContext) -> bool:
        return actor.role in (UserRole.ADMIN, UserRole.ORGANIZER, UserRole.STAFF)

    @staticmethod
    def is_staff(actor: ActorContext) -> bool:
        return actor.role is UserRole.STAFF


async def require_customer(actor: ActorContext = Depends(get_current_actor)) -> ActorContext:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_customer',
        attributes={'user.id': actor.user_id, 'user.role': actor.role.value},
    ):
        if not RoleAuthStrategy.can_book(actor):
            raise ForbiddenError('Only customers can book tickets')
        return actor


async def require_organizer(actor: ActorContext = Depends(get_current_actor)) -> ActorContext:
    if not RoleAuthStrategy.can_create_event(actor):
        raise ForbiddenError('Only organizers can perform this action')
    return actor


async def require_scanner(actor: ActorContext = Depends(get_current_actor)) -> ActorContext:
    if not RoleAuthStrategy.can_scan(actor):
        raise ForbiddenError("You don't have permission to perform this action")
    return actor


async def require_staff(actor: ActorContext = Depends(get_current_actor)) -> ActorContext:
    if not RoleAuthStrategy.is_staff(actor):
        raise ForbiddenError('Only staff can perform this action')
    return actor
