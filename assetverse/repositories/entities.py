# assetverse/repositories/entities.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from assetverse.models import (
    User, Asset, AssetAssignment, Affiliation, AssetRequest, Package, Payment,
)
from assetverse.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User

    def by_email(self, email: str):
        return self.find_one(email=email)

    def lock(self, email: str) -> bool:
        """Hold the write lock on this user's row until the transaction ends"""
        return bool(self.update_where([User.email == email], {"company_id": User.company_id}))


class AssetRepository(Repository[Asset]):
    model = Asset


class AssignmentRepository(Repository[AssetAssignment]):
    model = AssetAssignment

    def count_held_by_employee(self, hr_email: str) -> dict:
        """employee_email -> number of assets still assigned from this HR"""
        stmt = (
            select(AssetAssignment.employee_email, func.count())
            .where(AssetAssignment.hr_email == hr_email, AssetAssignment.status == "assigned")
            .group_by(AssetAssignment.employee_email)
        )
        return {email: total for email, total in self.db.execute(stmt).all()}


class AffiliationRepository(Repository[Affiliation]):
    model = Affiliation


class RequestRepository(Repository[AssetRequest]):
    model = AssetRequest


class PackageRepository(Repository[Package]):
    model = Package


class PaymentRepository(Repository[Payment]):
    model = Payment


class Repositories:
    """All repositories bound to one session, handed to the services"""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.assets = AssetRepository(db)
        self.assignments = AssignmentRepository(db)
        self.affiliations = AffiliationRepository(db)
        self.requests = RequestRepository(db)
        self.packages = PackageRepository(db)
        self.payments = PaymentRepository(db)
