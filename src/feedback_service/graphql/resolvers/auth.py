from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ..access_control import get_auth_context_from_info

if TYPE_CHECKING:
    from ..types.user import User


async def resolve_current_user(info: strawberry.Info) -> User | None:
    from ..types.user import User as UserType

    auth_context = await get_auth_context_from_info(info)
    if auth_context is None or not auth_context.is_authenticated:
        return None

    return UserType(email=auth_context.email, role=auth_context.role)
