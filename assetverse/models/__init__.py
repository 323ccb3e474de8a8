from .user import User
from .asset import Asset, ProductType
from .assignment import AssetAssignment, AssignmentStatus
from .affiliation import Affiliation, AffiliationStatus
from .asset_request import AssetRequest, RequestStatus
from .package import Package, Payment
