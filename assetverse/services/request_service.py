# assetverse/services/request_service.py
"""
Request/approval workflow.

    pending -> approved   (assignment created, stock taken, affiliation ensured)
    pending -> rejected   (no side effects)

Both outcomes are terminal. The status flip is a compare-and-set on
``request_status = 'pending'`` so only one of two concurrent reviewers
can win. The caller wraps ``process_request`` in a single transaction;
any failure after the flip rolls the whole approval back.
"""

import logging
from datetime import datetime
from typing import List, Optional

from assetverse.errors import Conflict, Forbidden, NotFound, Unavailable, ValidationError, parse_id
from assetverse.models import AssetRequest, RequestStatus

logger = logging.getLogger(__name__)

PENDING = RequestStatus.PENDING.value
APPROVED = RequestStatus.APPROVED.value
REJECTED = RequestStatus.REJECTED.value


class RequestWorkflow:
    def __init__(self, repos, inventory, assignments, affiliations, packages):
        self.repos = repos
        self.inventory = inventory
        self.assignments = assignments
        self.affiliations = affiliations
        self.packages = packages

    def submit_request(self, asset_id, requester_email: str, requester_name: str, note: Optional[str] = None) -> AssetRequest:
        if not requester_email:
            raise ValidationError("requester_email is required")
        asset = self.repos.assets.get(parse_id(asset_id, "asset id"))
        if asset is None:
            raise NotFound("Asset not found")
        if not asset.hr_email:
            raise ValidationError("Asset has no owning HR")
        if asset.available_quantity < 1:
            raise Unavailable("Asset is out of stock")

        request = self.repos.requests.insert(
            asset_id=asset.id,
            asset_name=asset.product_name,
            asset_type=asset.product_type,
            requester_name=requester_name or requester_email,
            requester_email=requester_email,
            hr_email=asset.hr_email,
            company_name=asset.company_name,
            request_date=datetime.utcnow(),
            approval_date=None,
            request_status=PENDING,
            note=note,
            processed_by=None,
        )
        logger.info(f"Request {request.id} submitted by {requester_email} for asset {asset.id}")
        return request

    def process_request(self, request_id, action: str, processing_hr_email: str) -> AssetRequest:
        if action not in (APPROVED, REJECTED):
            raise ValidationError("action must be 'approved' or 'rejected'")

        request = self.repos.requests.get(parse_id(request_id, "request id"))
        if request is None:
            raise NotFound("Request not found")
        if request.hr_email != processing_hr_email:
            raise Forbidden("This request belongs to another company")
        if request.request_status != PENDING:
            raise Conflict(f"Request already {request.request_status}")

        if action == APPROVED:
            # Gate before any write so a denial leaves the request pending
            self.packages.ensure_capacity(processing_hr_email)

        self._transition(request, action, processing_hr_email)

        if action == APPROVED:
            asset = self.repos.assets.get(request.asset_id) if request.asset_id is not None else None
            if asset is None:
                raise Unavailable("Asset is no longer available")
            self.assignments.create_assignment(asset, request.requester_email, request.requester_name)

            hr = self.repos.users.by_email(processing_hr_email)
            self.affiliations.ensure_affiliated(
                processing_hr_email,
                request.requester_email,
                request.requester_name,
                request.company_name,
                getattr(hr, "company_logo", None),
            )

        self.repos.db.refresh(request)
        logger.info(f"Request {request.id} {action} by {processing_hr_email}")
        return request

    def _transition(self, request: AssetRequest, action: str, processing_hr_email: str) -> None:
        updated = self.repos.requests.update_where(
            [AssetRequest.id == request.id, AssetRequest.request_status == PENDING],
            {
                "request_status": action,
                "approval_date": datetime.utcnow(),
                "processed_by": processing_hr_email,
            },
        )
        if not updated:
            raise Conflict("Request was already processed")

    def list_for_hr(self, hr_email: str, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[AssetRequest]:
        filters = {"hr_email": hr_email}
        if status:
            filters["request_status"] = status
        return self.repos.requests.find(
            order_by=[AssetRequest.request_date.desc(), AssetRequest.id.desc()], skip=skip, limit=limit, **filters
        )

    def list_for_requester(self, requester_email: str, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[AssetRequest]:
        filters = {"requester_email": requester_email}
        if status:
            filters["request_status"] = status
        return self.repos.requests.find(
            order_by=[AssetRequest.request_date.desc(), AssetRequest.id.desc()], skip=skip, limit=limit, **filters
        )
