"""Access card errors"""

from cartehandicap.errors.common import ConflictError, ValidationError


class CardAlreadyProvisioned(ConflictError):
    error_code = 5001
    error = "Card uid already exists"


class ScanUidMissing(ValidationError):
    error_code = 5002
    error = "Card uid is missing"

    def __init__(self, details=None):
        super().__init__(details, access="DENIED", name="", reason="no_uid")
