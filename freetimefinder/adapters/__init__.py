"""
Adapters layer - File-backed stand-ins for the calendar and persistence services.
"""

from .file_availability_store import FileAvailabilityStore
from .file_event_source import FileEventSource

__all__ = ["FileAvailabilityStore", "FileEventSource"]
