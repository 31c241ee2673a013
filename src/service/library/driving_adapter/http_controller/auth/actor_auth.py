"""
Caller identity from the upstream authentication layer.

Login and sessions live outside this service; the gateway forwards the
authenticated actor as X-Actor-Id / X-Actor-Role headers, which are trusted here.
"""

from typing import Optional

from fastapi import Depends, Header
from opentelemetry import trace

from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.library.domain.entity.actor_entity import ActorEntity, ActorRole


async def get_current_actor(
    x_actor_id: Optional[str] = Header(default=None),
    x_actor_role: Optional[str] = Header(default=None),
) -> ActorEntity:
    if not x_actor_id or not x_actor_role:
        raise AuthenticationError('Not authenticated')

    try:
        actor_id = int(x_actor_id)
    except ValueError:
        raise AuthenticationError('Invalid actor id')
    if actor_id <= 0:
        raise AuthenticationError('Invalid actor id')

    try:
        role = ActorRole(x_actor_role.strip().upper())
    except ValueError:
        raise AuthenticationError('Invalid actor role')

    return ActorEntity(id=actor_id, role=role)


async def require_student(current_actor: ActorEntity = Depends(get_current_actor)) -> ActorEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_student',
        attributes={'actor.id': current_actor.id, 'actor.role': current_actor.role.value},
    ):
        if not current_actor.is_student:
            raise ForbiddenError('Only students can perform this action')
        return current_actor


async def require_admin(current_actor: ActorEntity = Depends(get_current_actor)) -> ActorEntity:
    if not current_actor.is_admin:
        raise ForbiddenError('Only administrators can perform this action')
    return current_actor
