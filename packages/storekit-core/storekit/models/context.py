"""
Request correlation context.

One RequestContext is created per inbound unit of work and passed
explicitly to the database adapter and the data API layer, so every
log event can be tied back to the request that caused it.
"""

from dataclasses import dataclass, field
from uuid import uuid4


@dataclass(frozen=True)
class RequestContext:
    """
    Correlation context for a single unit of work.

    Attributes:
        request_id: Unique identifier (UUID) for the unit of work
    """

    request_id: str = field(default_factory=lambda: str(uuid4()))

    def to_dict(self) -> dict:
        return {"request_id": self.request_id}
