# Import all models to ensure they are registered with SQLAlchemy
from .partners import Partner
from .serviceable_pincodes import ServiceablePincode
from .verification_history import VerificationHistoryEntry
