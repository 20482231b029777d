"""DTO for card scans"""

import enum

from cartehandicap.schemas.base import BaseSchema


class Access(enum.Enum):
    GRANTED = "GRANTED"
    DENIED = "DENIED"


class ScanRequestSchema(BaseSchema):
    uid: str | int | None = None


class ScanDecisionSchema(BaseSchema):
    access: Access
    name: str = ""
    reason: str | None = None

    @property
    def granted(self) -> bool:
        return self.access == Access.GRANTED
