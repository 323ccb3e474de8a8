# assetverse/services/inventory_service.py
import logging
from typing import List, Optional

from assetverse.errors import NotFound, Unavailable, ValidationError, parse_id
from assetverse.models import Asset, AssetAssignment, AssetRequest, ProductType

logger = logging.getLogger(__name__)

PRODUCT_TYPES = {t.value for t in ProductType}


class AssetInventoryManager:
    """Owns the available quantity of every asset

    Quantity only moves through conditional UPDATEs so it can never go
    negative, even with concurrent assignments.
    """

    REQUIRED_FIELDS = ("product_name", "product_image", "product_type", "hr_email", "company_name")
    EDITABLE_FIELDS = ("product_name", "product_image", "product_type")

    def __init__(self, repos):
        self.repos = repos

    def create_asset(self, **fields) -> Asset:
        missing = [f for f in self.REQUIRED_FIELDS if not str(fields.get(f) or "").strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        product_type = self._product_type(fields["product_type"])
        quantity = fields.get("available_quantity", 1)
        if quantity is None or int(quantity) < 0:
            raise ValidationError("available_quantity cannot be negative")

        asset = self.repos.assets.insert(
            product_name=fields["product_name"].strip(),
            product_image=fields["product_image"].strip(),
            product_type=product_type,
            hr_email=fields["hr_email"],
            company_name=fields["company_name"],
            available_quantity=int(quantity),
        )
        logger.info(f"Asset {asset.id} '{asset.product_name}' created by {asset.hr_email}")
        return asset

    def get_asset(self, asset_id, hr_email: Optional[str] = None) -> Asset:
        asset = self.repos.assets.get(parse_id(asset_id, "asset id"))
        if asset is None or (hr_email is not None and asset.hr_email != hr_email):
            raise NotFound("Asset not found")
        return asset

    def list_assets(self, hr_email: str, product_type: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Asset]:
        filters = {"hr_email": hr_email}
        if product_type:
            filters["product_type"] = self._product_type(product_type)
        return self.repos.assets.find(order_by=Asset.created_at.desc(), skip=skip, limit=limit, **filters)

    def list_available(self, hr_email: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Asset]:
        filters = {"hr_email": hr_email} if hr_email else {}
        return self.repos.assets.find(
            Asset.available_quantity > 0,
            order_by=Asset.created_at.desc(),
            skip=skip,
            limit=limit,
            **filters,
        )

    def update_asset(self, asset_id, hr_email: str, patch: dict) -> Asset:
        asset = self.get_asset(asset_id, hr_email)
        changes = {k: v for k, v in patch.items() if k in self.EDITABLE_FIELDS and v is not None}
        if "product_type" in changes:
            changes["product_type"] = self._product_type(changes["product_type"])

        for field, value in changes.items():
            setattr(asset, field, value)
        self.repos.db.flush()
        logger.info(f"Asset {asset.id} updated by {hr_email}: {sorted(changes)}")
        return asset

    def restock(self, asset_id, hr_email: str, quantity: int) -> Asset:
        """Add units on top of whatever is currently in stock"""
        if quantity is None or int(quantity) < 1:
            raise ValidationError("quantity must be at least 1")
        asset = self.get_asset(asset_id, hr_email)
        self.repos.assets.update_where(
            [Asset.id == asset.id, Asset.hr_email == hr_email],
            {"available_quantity": Asset.available_quantity + int(quantity)},
        )
        self.repos.db.refresh(asset)
        logger.info(f"Asset {asset.id} restocked by {hr_email}: +{quantity}")
        return asset

    def delete_asset(self, asset_id, hr_email: str) -> None:
        asset = self.get_asset(asset_id, hr_email)
        # Detach history so no later return or approval can reach this id
        self.repos.assignments.update_where([AssetAssignment.asset_id == asset.id], {"asset_id": None})
        self.repos.requests.update_where([AssetRequest.asset_id == asset.id], {"asset_id": None})
        self.repos.assets.delete(asset)
        logger.info(f"Asset {asset.id} deleted by {hr_email}")

    def decrement_availability(self, asset_id: int, hr_email: str) -> None:
        """Take one unit; Unavailable when out of stock or not owned by hr_email"""
        updated = self.repos.assets.update_where(
            [
                Asset.id == asset_id,
                Asset.hr_email == hr_email,
                Asset.available_quantity >= 1,
            ],
            {"available_quantity": Asset.available_quantity - 1},
        )
        if not updated:
            logger.warning(f"Asset {asset_id} unavailable for {hr_email}")
            raise Unavailable("Asset is not available")

    def increment_availability(self, asset_id: int) -> None:
        updated = self.repos.assets.update_where(
            [Asset.id == asset_id],
            {"available_quantity": Asset.available_quantity + 1},
        )
        if not updated:
            # The asset was deleted while the unit was out
            logger.warning(f"Returned unit for missing asset {asset_id} was not restocked")

    def _product_type(self, value) -> str:
        value = getattr(value, "value", value)
        if value not in PRODUCT_TYPES:
            raise ValidationError(f"product_type must be one of: {', '.join(sorted(PRODUCT_TYPES))}")
        return value
