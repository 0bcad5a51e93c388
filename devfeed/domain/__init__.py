# devfeed/domain/__init__.py

"""
Domain components: the request principal, token claims and the typed
exceptions every use case raises.
"""

from devfeed.domain.exceptions import (
    DomainException,
    ValidationException,
    InvalidAuthorizationHeaderException,
    InvalidCredentialsException,
    InvalidTokenException,
    UnauthorizedOperationException,
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    DatabaseOperationException,
)
from devfeed.domain.models.principal import Claims, Principal
