from .base import Repository
from .entities import (
    Repositories, UserRepository, AssetRepository, AssignmentRepository,
    AffiliationRepository, RequestRepository, PackageRepository, PaymentRepository,
)
