"""Assignment entity: one logged attempt to route an order to a partner."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from delivery.domain.value_objects.enums import AssignmentStatus, FailureReason


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Assignment:
    id: int | None
    order_id: int
    partner_id: int | None
    status: AssignmentStatus
    reason: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def succeeded(cls, order_id: int, partner_id: int) -> Assignment:
        return cls(
            id=None,
            order_id=order_id,
            partner_id=partner_id,
            status=AssignmentStatus.SUCCESS,
        )

    @classmethod
    def failed(
        cls,
        order_id: int,
        reason: FailureReason | str,
        partner_id: int | None = None,
    ) -> Assignment:
        if isinstance(reason, FailureReason):
            reason = reason.value
        return cls(
            id=None,
            order_id=order_id,
            partner_id=partner_id,
            status=AssignmentStatus.FAILED,
            reason=reason,
        )

    def is_success(self) -> bool:
        return self.status == AssignmentStatus.SUCCESS
