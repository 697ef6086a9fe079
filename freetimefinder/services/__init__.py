"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_service import (
    AvailabilityService,
    AvailabilityStoreProtocol,
    EventSourceProtocol,
)

__all__ = ["AvailabilityService", "AvailabilityStoreProtocol", "EventSourceProtocol"]
