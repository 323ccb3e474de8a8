# assetverse/services/subscription_service.py
"""
Subscription/package enforcement.

The employee ceiling of an HR comes from ``User.package.employees_limit``
and is only ever used as a gate. Downgrading keeps the oldest
affiliations and deactivates the rest.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from assetverse.config.settings import settings
from assetverse.errors import LimitExceeded, NotFound, ValidationError
from assetverse.models import Affiliation, AffiliationStatus, Package, Payment
from assetverse.services.affiliation_service import AffiliationManager

logger = logging.getLogger(__name__)


class PackageEnforcer:
    def __init__(self, repos, affiliations: AffiliationManager):
        self.repos = repos
        self.affiliations = affiliations

    def _hr(self, hr_email: str):
        user = self.repos.users.by_email(hr_email)
        if user is None or user.role != "hr":
            raise NotFound("HR account not found")
        return user

    def check_employee_limit(self, hr_email: str) -> dict:
        user = self._hr(hr_email)
        package = user.package or settings.FREE_PACKAGE
        limit = int(package["employees_limit"])
        current = self.affiliations.count_active(hr_email)
        return {"within_limit": current < limit, "current": current, "limit": limit}

    def ensure_capacity(self, hr_email: str) -> dict:
        # Concurrent gates for the same HR queue here until the first one commits
        self.repos.users.lock(hr_email)
        status = self.check_employee_limit(hr_email)
        if not status["within_limit"]:
            logger.warning(f"{hr_email} is at its employee limit ({status['current']}/{status['limit']})")
            raise LimitExceeded(
                f"Employee limit reached ({status['current']}/{status['limit']}). Upgrade your package to add more employees"
            )
        return status

    def apply_package(self, hr_email: str, package_name: str, employees_limit: int, price: float) -> dict:
        user = self._hr(hr_email)
        user.package = {
            "name": package_name,
            "employees_limit": int(employees_limit),
            "price": price,
            "activated_at": datetime.utcnow().isoformat(),
        }
        self.repos.db.flush()
        logger.info(f"Package '{package_name}' ({employees_limit} employees) applied to {hr_email}")
        return user.package

    def downgrade_to_free(self, hr_email: str) -> Tuple[dict, int]:
        free = settings.FREE_PACKAGE
        package = self.apply_package(hr_email, free["name"], free["employees_limit"], free["price"])

        # Oldest relationships survive
        active = self.repos.affiliations.find(
            hr_email=hr_email,
            status=AffiliationStatus.ACTIVE.value,
            order_by=[Affiliation.affiliation_date.asc(), Affiliation.id.asc()],
        )
        deactivated = 0
        for affiliation in active[free["employees_limit"]:]:
            if self.affiliations.deactivate_record(affiliation):
                deactivated += 1

        logger.info(f"{hr_email} downgraded to free tier, {deactivated} affiliation(s) deactivated")
        return package, deactivated

    def record_payment(
        self,
        tracking_id: str,
        hr_email: str,
        package_name: str,
        amount: float,
        employee_limit: Optional[int] = None,
        transaction_id: Optional[str] = None,
    ) -> Tuple[Payment, bool]:
        """Record a confirmed checkout once; a repeated tracking id is a no-op"""
        if not tracking_id:
            raise ValidationError("tracking_id is required")

        existing = self.repos.payments.find_one(tracking_id=tracking_id)
        if existing is not None:
            logger.info(f"Payment {tracking_id} already recorded, skipping")
            return existing, False

        package = self.repos.packages.find_one(name=package_name)
        if package is None:
            raise ValidationError(f"Unknown package '{package_name}'")
        if employee_limit is not None and int(employee_limit) != package.employees_limit:
            raise ValidationError("employee_limit does not match the package")
        if round(float(amount), 2) != round(float(package.price), 2):
            raise ValidationError("amount does not match the package price")
        self._hr(hr_email)

        try:
            payment = self.repos.payments.insert(
                hr_email=hr_email,
                package_name=package.name,
                employee_limit=package.employees_limit,
                amount=package.price,
                tracking_id=tracking_id,
                transaction_id=transaction_id,
                payment_date=datetime.utcnow(),
                status="paid",
            )
        except IntegrityError:
            # A concurrent confirmation won the unique index
            self.repos.db.rollback()
            existing = self.repos.payments.find_one(tracking_id=tracking_id)
            if existing is None:
                raise
            return existing, False

        self.apply_package(hr_email, package.name, package.employees_limit, package.price)
        logger.info(f"Payment {tracking_id} recorded for {hr_email}: {package.name} ${amount}")
        return payment, True

    def payment_history(self, hr_email: str) -> List[Payment]:
        return self.repos.payments.find(hr_email=hr_email, order_by=[Payment.payment_date.desc(), Payment.id.desc()])

    def list_packages(self) -> List[Package]:
        return self.repos.packages.find(order_by=Package.price.asc())

    def seed_packages(self) -> int:
        if self.repos.packages.count():
            return 0
        for package in settings.DEFAULT_PACKAGES:
            self.repos.packages.insert(**package)
        logger.info(f"Seeded {len(settings.DEFAULT_PACKAGES)} packages")
        return len(settings.DEFAULT_PACKAGES)
