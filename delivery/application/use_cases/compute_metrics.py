"""Read-only reporting over the assignment log and the partner roster."""

from __future__ import annotations

from delivery.application.ports.assignment_repo import AssignmentRepository
from delivery.application.ports.partner_repo import PartnerRepository
from delivery.domain.policies.metrics import (
    AssignmentMetrics,
    PartnerAvailability,
    summarize_assignments,
    summarize_partners,
)
from delivery.domain.value_objects.enums import MAX_LOAD


class ComputeMetricsUseCase:
    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def execute(self) -> AssignmentMetrics:
        return summarize_assignments(await self._assignments.get_all())


class PartnerAvailabilityUseCase:
    """Available / busy / offline partner counts for the dispatch board."""

    def __init__(self, partner_repo: PartnerRepository, max_load: int = MAX_LOAD):
        self._partners = partner_repo
        self._max_load = max_load

    async def execute(self) -> PartnerAvailability:
        return summarize_partners(await self._partners.get_all(), self._max_load)
