"""Ticketing Domain Value Objects"""

from src.service.ticketing.domain.value_object.actor_context import ActorContext
from src.service.ticketing.domain.value_object.ticket_resolution import TicketResolution

__all__ = ['ActorContext', 'TicketResolution']
