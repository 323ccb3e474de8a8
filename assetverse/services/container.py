# assetverse/services/container.py
from fastapi import Depends
from sqlalchemy.orm import Session

from assetverse.database import get_db
from assetverse.repositories import Repositories
from assetverse.services.affiliation_service import AffiliationManager
from assetverse.services.assignment_service import AssignmentStateMachine
from assetverse.services.inventory_service import AssetInventoryManager
from assetverse.services.payment_gateway import CheckoutGateway, checkout_gateway
from assetverse.services.request_service import RequestWorkflow
from assetverse.services.subscription_service import PackageEnforcer
from assetverse.services.user_service import UserDirectory


class Services:
    """The workflow components wired to one database session"""

    def __init__(self, db: Session):
        self.db = db
        self.repos = Repositories(db)
        self.users = UserDirectory(self.repos)
        self.affiliations = AffiliationManager(self.repos)
        self.inventory = AssetInventoryManager(self.repos)
        self.assignments = AssignmentStateMachine(self.repos, self.inventory, self.affiliations)
        self.packages = PackageEnforcer(self.repos, self.affiliations)
        self.requests = RequestWorkflow(
            self.repos, self.inventory, self.assignments, self.affiliations, self.packages
        )


def get_services(db: Session = Depends(get_db)) -> Services:
    return Services(db)


def get_checkout_gateway() -> CheckoutGateway:
    return checkout_gateway
