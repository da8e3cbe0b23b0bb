"""Port interface for partner persistence."""

from abc import ABC, abstractmethod

from delivery.domain.entities.partner import Partner


class PartnerRepository(ABC):
    @abstractmethod
    async def save(self, partner: Partner) -> Partner:
        ...

    @abstractmethod
    async def get_by_id(self, partner_id: int) -> Partner | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Partner | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Partner]:
        ...

    @abstractmethod
    async def get_available(self, max_load: int) -> list[Partner]:
        """Active partners with current_load < max_load, ordered by id."""
        ...

    @abstractmethod
    async def update(self, partner: Partner) -> Partner:
        """Persist profile fields. Never touches current_load."""
        ...

    @abstractmethod
    async def delete(self, partner_id: int) -> bool:
        ...

    @abstractmethod
    async def try_increment_load(self, partner_id: int, max_load: int) -> bool:
        """Atomically add 1 to current_load only if it is still below max_load."""
        ...

    @abstractmethod
    async def try_decrement_load(self, partner_id: int) -> bool:
        """Atomically subtract 1 from current_load only if it is above zero."""
        ...

    @abstractmethod
    async def increment_completed(self, partner_id: int) -> None:
        ...
