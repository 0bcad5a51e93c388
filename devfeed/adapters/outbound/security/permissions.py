# devfeed/adapters/outbound/security/permissions.py

"""
Author-only authorization.

Articles and comments may be changed only by the user who wrote them. There
are no roles: ownership is the whole rule.
"""

import logging
from typing import Any

from devfeed.domain.exceptions import UnauthorizedOperationException
from devfeed.domain.models.principal import Principal

logger = logging.getLogger(__name__)


def may_modify(user: Principal, resource: Any) -> bool:
    """True when ``user`` is the author of ``resource`` (anything with an ``author_id``)."""
    return user.id == resource.author_id


def ensure_may_modify(user: Principal, resource: Any, action: str = "modify") -> None:
    """
    Raise unless ``user`` authored ``resource``.

    Raises:
        UnauthorizedOperationException: The user is not the author
    """
    if not may_modify(user, resource):
        logger.warning(
            f"User {user.id} denied to {action} {type(resource).__name__} {resource.id} "
            f"owned by user {resource.author_id}"
        )
        raise UnauthorizedOperationException(
            f"You can only {action} your own {type(resource).__name__.lower()}s"
        )
