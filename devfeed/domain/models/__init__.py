# devfeed/domain/models/__init__.py

from devfeed.domain.models.principal import Principal, Claims

__all__ = ["Principal", "Claims"]
