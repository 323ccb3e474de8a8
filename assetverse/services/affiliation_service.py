# assetverse/services/affiliation_service.py
"""
Affiliation manager: the time-versioned HR <-> employee relationship.

Rows are never deleted. Deactivation flips ``status`` to inactive so the
history of every employment stays queryable. The partial unique index on
``(hr_email, employee_email) WHERE status = 'active'`` backs the
check-then-insert below when two writers race.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from assetverse.errors import Conflict, Forbidden, NotFound, ValidationError
from assetverse.models import Affiliation, AffiliationStatus, User
from assetverse.repositories import Repositories

logger = logging.getLogger(__name__)

ACTIVE = AffiliationStatus.ACTIVE.value
INACTIVE = AffiliationStatus.INACTIVE.value


class AffiliationManager:
    """Creates, checks and deactivates affiliations"""

    def __init__(self, repos: Repositories):
        self.repos = repos

    def get_active(self, hr_email: str, employee_email: str) -> Optional[Affiliation]:
        return self.repos.affiliations.find_one(
            hr_email=hr_email, employee_email=employee_email, status=ACTIVE
        )

    def is_affiliated(self, hr_email: str, employee_email: str) -> bool:
        return self.get_active(hr_email, employee_email) is not None

    def count_active(self, hr_email: str) -> int:
        return self.repos.affiliations.count(hr_email=hr_email, status=ACTIVE)

    def affiliate(
        self,
        hr_email: str,
        employee_email: str,
        employee_name: str,
        company_name: str,
        company_logo: Optional[str] = None,
    ) -> Affiliation:
        """Insert a new active affiliation; Conflict if the pair is already active"""
        if not hr_email or not employee_email:
            raise ValidationError("hr_email and employee_email are required")
        if hr_email == employee_email:
            raise ValidationError("An HR cannot affiliate with themselves")
        if self.is_affiliated(hr_email, employee_email):
            raise Conflict("Employee is already affiliated with this company")

        try:
            affiliation = self.repos.affiliations.insert(
                hr_email=hr_email,
                employee_email=employee_email,
                employee_name=employee_name or employee_email,
                company_name=company_name,
                company_logo=company_logo,
                affiliation_date=datetime.utcnow(),
                status=ACTIVE,
            )
        except IntegrityError:
            raise Conflict("Employee is already affiliated with this company")

        self._set_employee_status(employee_email, "affiliated")
        logger.info(f"Affiliated {employee_email} with {hr_email} ({company_name})")
        return affiliation

    def ensure_affiliated(
        self,
        hr_email: str,
        employee_email: str,
        employee_name: str,
        company_name: str,
        company_logo: Optional[str] = None,
    ) -> Optional[Affiliation]:
        """Idempotent variant used by request approval; returns the new row or None"""
        if self.is_affiliated(hr_email, employee_email):
            return None
        return self.affiliate(hr_email, employee_email, employee_name, company_name, company_logo)

    def deactivate(self, hr_email: str, employee_email: str) -> Affiliation:
        affiliation = self.get_active(hr_email, employee_email)
        if affiliation is None:
            raise NotFound("No active affiliation for this employee")
        self.deactivate_record(affiliation)
        return affiliation

    def deactivate_record(self, affiliation: Affiliation) -> bool:
        updated = self.repos.affiliations.update_where(
            [Affiliation.id == affiliation.id, Affiliation.status == ACTIVE],
            {"status": INACTIVE},
        )
        if not updated:
            return False

        if not self.repos.affiliations.count(employee_email=affiliation.employee_email, status=ACTIVE):
            self._set_employee_status(affiliation.employee_email, "unassigned")
        logger.info(f"Deactivated affiliation {affiliation.id}: {affiliation.employee_email} left {affiliation.hr_email}")
        return True

    def list_active_for_hr(self, hr_email: str) -> List[dict]:
        """Active employees of one HR with their profile and held-asset count"""
        affiliations = self.repos.affiliations.find(
            hr_email=hr_email,
            status=ACTIVE,
            order_by=[Affiliation.affiliation_date.asc(), Affiliation.id.asc()],
        )
        emails = [a.employee_email for a in affiliations]
        profiles = self._profiles(emails)
        counts = self.repos.assignments.count_held_by_employee(hr_email)

        return [
            {
                "employee_email": a.employee_email,
                "employee_name": a.employee_name,
                "profile_image": getattr(profiles.get(a.employee_email), "profile_image", None),
                "affiliation_date": a.affiliation_date,
                "assets_count": counts.get(a.employee_email, 0),
            }
            for a in affiliations
        ]

    def list_active_for_employee(self, employee_email: str) -> List[dict]:
        affiliations = self.repos.affiliations.find(
            employee_email=employee_email,
            status=ACTIVE,
            order_by=Affiliation.affiliation_date.asc(),
        )
        return [
            {
                "hr_email": a.hr_email,
                "company_name": a.company_name,
                "company_logo": a.company_logo,
                "affiliation_date": a.affiliation_date,
            }
            for a in affiliations
        ]

    def list_team(self, hr_email: str, employee_email: str) -> List[dict]:
        """Teammates of an employee inside one company"""
        if not self.is_affiliated(hr_email, employee_email):
            raise Forbidden("You are not affiliated with this company")

        affiliations = self.repos.affiliations.find(
            hr_email=hr_email,
            status=ACTIVE,
            order_by=Affiliation.affiliation_date.asc(),
        )
        profiles = self._profiles([a.employee_email for a in affiliations])
        team = []
        for a in affiliations:
            profile = profiles.get(a.employee_email)
            team.append({
                "employee_email": a.employee_email,
                "employee_name": a.employee_name,
                "profile_image": getattr(profile, "profile_image", None),
                "date_of_birth": getattr(profile, "date_of_birth", None),
            })
        return team

    def _profiles(self, emails: List[str]) -> dict:
        if not emails:
            return {}
        users = self.repos.users.find(User.email.in_(emails))
        return {u.email: u for u in users}

    def _set_employee_status(self, employee_email: str, status: str) -> None:
        self.repos.users.update_where(
            [User.email == employee_email, User.role == "employee"],
            {"status": status},
        )
