"""Business rules for each resource, layered over the repositories."""
from .review import ReviewManager
from .service import ServiceManager
from .user import UserManager
from .user_service import UserServiceManager

__all__ = ["ReviewManager", "ServiceManager", "UserManager", "UserServiceManager"]
