# assetverse/services/user_service.py
import logging
import time
from datetime import datetime

from assetverse.config.settings import settings
from assetverse.errors import Conflict, NotFound, ValidationError
from assetverse.models import User

logger = logging.getLogger(__name__)


class UserDirectory:
    """Registration and lookup of HR and employee accounts"""

    def __init__(self, repos):
        self.repos = repos

    def register(self, name: str, email: str, role: str, **profile) -> User:
        if role not in ("hr", "employee"):
            raise ValidationError("role must be 'hr' or 'employee'")
        if self.repos.users.by_email(email) is not None:
            raise Conflict("User already exists")

        values = dict(name=name, email=email, role=role, **profile)
        if role == "hr":
            if not (profile.get("company_name") or "").strip():
                raise ValidationError("company_name is required for HR accounts")
            free = settings.FREE_PACKAGE
            values["package"] = {**free, "activated_at": datetime.utcnow().isoformat()}
            values["company_id"] = str(int(time.time() * 1000))
            values["status"] = None
        else:
            values["company_id"] = None
            values["status"] = "unassigned"

        user = self.repos.users.insert(**values)
        logger.info(f"Registered {role} account {email}")
        return user

    def get(self, email: str) -> User:
        user = self.repos.users.by_email(email)
        if user is None:
            raise NotFound("User not found")
        return user
