"""Read-only summaries over the assignment log and the partner roster."""

from __future__ import annotations

from dataclasses import dataclass, field

from delivery.domain.entities.assignment import Assignment
from delivery.domain.entities.partner import Partner
from delivery.domain.value_objects.enums import MAX_LOAD, AssignmentStatus

UNKNOWN_REASON = "Unknown"


@dataclass(frozen=True)
class FailureReasonCount:
    reason: str
    count: int


@dataclass(frozen=True)
class AssignmentMetrics:
    total_assigned: int
    success_rate: float  # percentage, 0–100
    failure_reasons: list[FailureReasonCount] = field(default_factory=list)


@dataclass(frozen=True)
class PartnerAvailability:
    available: int
    busy: int
    offline: int


def summarize_assignments(assignments: list[Assignment]) -> AssignmentMetrics:
    """Total attempts, success percentage and failure causes.

    Failure reasons keep the order in which they first appear in the log.
    A failed record without a reason is counted under "Unknown".
    """
    total = len(assignments)
    successes = sum(1 for a in assignments if a.status == AssignmentStatus.SUCCESS)
    success_rate = (successes / total) * 100 if total > 0 else 0.0

    reason_counts: dict[str, int] = {}
    for a in assignments:
        if a.status != AssignmentStatus.FAILED:
            continue
        reason = a.reason or UNKNOWN_REASON
        reason_counts[reason] = reason_counts.get(reason, 0) + 1

    return AssignmentMetrics(
        total_assigned=total,
        success_rate=success_rate,
        failure_reasons=[
            FailureReasonCount(reason=r, count=c) for r, c in reason_counts.items()
        ],
    )


def summarize_partners(
    partners: list[Partner], max_load: int = MAX_LOAD
) -> PartnerAvailability:
    available = busy = offline = 0
    for p in partners:
        if not p.is_active():
            offline += 1
        elif p.has_capacity(max_load):
            available += 1
        else:
            busy += 1
    return PartnerAvailability(available=available, busy=busy, offline=offline)
