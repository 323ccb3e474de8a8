from .user import UserCreate, UserOut, UserRole, PackageInfo
from .asset import AssetCreate, AssetUpdate, AssetRestock, AssetOut, ProductType
from .assignment import AssignAsset, AssignmentOut
from .affiliation import AffiliationCreate, AffiliationOut, EmployeeSummary, CompanySummary, TeamMember
from .asset_request import AssetRequestCreate, AssetRequestOut, RequestAction, RequestStatus
from .package import PackageOut, CheckoutRequest, CheckoutSession, PaymentCreate, PaymentOut, PaymentResult, LimitStatus, DowngradeResult
