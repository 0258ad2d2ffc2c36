"""
Wegesa Users Engine
"""

from engines.users.models import Role, User
from engines.users.services import UserService

__all__ = ["Role", "User", "UserService"]
