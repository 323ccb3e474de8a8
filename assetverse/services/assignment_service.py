# assetverse/services/assignment_service.py
import logging
from datetime import datetime
from typing import List, Optional

from assetverse.errors import Conflict, Forbidden, NotFound, Unavailable, parse_id
from assetverse.models import Asset, AssetAssignment, AssignmentStatus, ProductType
from assetverse.services.affiliation_service import AffiliationManager
from assetverse.services.inventory_service import AssetInventoryManager

logger = logging.getLogger(__name__)

ASSIGNED = AssignmentStatus.ASSIGNED.value
RETURNED = AssignmentStatus.RETURNED.value


class AssignmentStateMachine:
    """Drives an assignment through assigned -> returned

    Non-returnable assets stay ``assigned`` for good.
    """

    def __init__(self, repos, inventory: AssetInventoryManager, affiliations: AffiliationManager):
        self.repos = repos
        self.inventory = inventory
        self.affiliations = affiliations

    def assign_direct(self, asset_id, hr_email: str, employee_email: str, employee_name: Optional[str] = None) -> AssetAssignment:
        asset_pk = parse_id(asset_id, "asset id")

        affiliation = self.affiliations.get_active(hr_email, employee_email)
        if affiliation is None:
            logger.warning(f"{hr_email} tried to assign asset {asset_pk} to unaffiliated {employee_email}")
            raise Forbidden("Employee is not affiliated with your company")

        asset = self.repos.assets.get(asset_pk)
        if asset is None or asset.hr_email != hr_email:
            raise Unavailable("Asset is not available")

        return self.create_assignment(asset, employee_email, employee_name or affiliation.employee_name)

    def create_assignment(self, asset: Asset, employee_email: str, employee_name: str) -> AssetAssignment:
        """Take one unit of ``asset`` and record who holds it"""
        self.inventory.decrement_availability(asset.id, asset.hr_email)
        assignment = self.repos.assignments.insert(
            asset_id=asset.id,
            asset_name=asset.product_name,
            asset_type=asset.product_type,
            employee_email=employee_email,
            employee_name=employee_name,
            hr_email=asset.hr_email,
            company_name=asset.company_name,
            assignment_date=datetime.utcnow(),
            return_date=None,
            status=ASSIGNED,
        )
        logger.info(f"Asset {asset.id} assigned to {employee_email} (assignment {assignment.id})")
        return assignment

    def return_asset(self, assignment_id, actor_email: Optional[str] = None) -> AssetAssignment:
        assignment = self.repos.assignments.get(parse_id(assignment_id, "assignment id"))
        if assignment is None:
            raise NotFound("Assignment not found")
        if actor_email is not None and actor_email not in (assignment.employee_email, assignment.hr_email):
            raise Forbidden("You cannot return this asset")
        if assignment.asset_type == ProductType.NON_RETURNABLE.value:
            raise Forbidden("Non-returnable assets cannot be returned")
        if assignment.status != ASSIGNED:
            raise Conflict("Asset already returned")

        updated = self.repos.assignments.update_where(
            [AssetAssignment.id == assignment.id, AssetAssignment.status == ASSIGNED],
            {"status": RETURNED, "return_date": datetime.utcnow()},
        )
        if not updated:
            raise Conflict("Asset already returned")

        if assignment.asset_id is not None:
            self.inventory.increment_availability(assignment.asset_id)

        self.repos.db.refresh(assignment)
        logger.info(f"Assignment {assignment.id} returned by {actor_email or assignment.employee_email}")
        return assignment

    def list_for_employee(self, employee_email: str, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[AssetAssignment]:
        filters = {"employee_email": employee_email}
        if status:
            filters["status"] = status
        return self.repos.assignments.find(
            order_by=AssetAssignment.assignment_date.desc(), skip=skip, limit=limit, **filters
        )
