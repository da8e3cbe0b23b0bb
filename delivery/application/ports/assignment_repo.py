"""Port interface for the append-only assignment log."""

from abc import ABC, abstractmethod

from delivery.domain.entities.assignment import Assignment


class AssignmentRepository(ABC):
    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        ...

    @abstractmethod
    async def get_by_order(self, order_id: int) -> list[Assignment]:
        ...

    @abstractmethod
    async def get_all(self) -> list[Assignment]:
        ...
