from __future__ import annotations


class AllocationError(Exception):
    """Base class for errors raised while allocating seats."""

    def __init__(self, message: str, region_index: int | None = None) -> None:
        super().__init__(message)
        self.region_index = region_index


class DataUnavailableError(AllocationError):
    """A region's vote data (or the candidate roster) could not be obtained or decoded."""


class InvalidInputError(AllocationError):
    """A region carries a negative seat count or a negative vote count."""

    def __init__(self, region_index: int, message: str) -> None:
        super().__init__(f"region {region_index}: {message}", region_index)
