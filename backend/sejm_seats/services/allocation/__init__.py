from sejm_seats.services.allocation.dhondt import allocate_region, allocate_seats
from sejm_seats.services.allocation.engine import AllocationEngine
from sejm_seats.services.allocation.national import NationalAggregator, aggregate_national

__all__ = [
    "AllocationEngine",
    "NationalAggregator",
    "aggregate_national",
    "allocate_region",
    "allocate_seats",
]
