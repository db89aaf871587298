from enum import Enum


class VerificationStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    CLARIFICATION_NEEDED = "clarification_needed"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"

    @classmethod
    def _missing_(cls, value):
        # older console builds send "clarification" for the same state
        if isinstance(value, str) and value.strip().lower() == "clarification":
            return cls.CLARIFICATION_NEEDED
        return None


class VerificationAction(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
    CLARIFICATION_REQUESTED = "clarification_requested"
    CLARIFICATION_RESPONDED = "clarification_responded"
    SUSPENDED = "suspended"
    REINSTATED = "reinstated"


OPEN_REVIEW_STATUSES = (
    VerificationStatus.PENDING,
    VerificationStatus.UNDER_REVIEW,
    VerificationStatus.CLARIFICATION_NEEDED,
)
