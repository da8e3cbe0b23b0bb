"""Partner entity — a courier who carries orders within their areas."""

from dataclasses import dataclass, field

from delivery.domain.value_objects.enums import MAX_LOAD, PartnerStatus


@dataclass
class Partner:
    id: int | None
    name: str
    email: str
    phone: str
    status: PartnerStatus = PartnerStatus.ACTIVE
    current_load: int = 0
    areas: list[str] = field(default_factory=list)
    shift_start: str | None = None
    shift_end: str | None = None
    rating: float = 5.0
    completed_orders: int = 0
    cancelled_orders: int = 0

    def covers(self, area: str) -> bool:
        return area in self.areas

    def is_active(self) -> bool:
        return self.status == PartnerStatus.ACTIVE

    def has_capacity(self, max_load: int = MAX_LOAD) -> bool:
        return self.current_load < max_load
