"""
Calendar event source backed by a JSON export.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from pendulum import DateTime

from ..domain.exceptions import DataSourceError
from ..domain.models import AvailabilityEvent
from .schemas import AvailabilityEventPayload

logger = logging.getLogger(__name__)


class FileEventSource:
    """
    Event source that reads busy events from a JSON file.

    Each entry carries an ``owner`` (email address) plus ``start`` and
    ``end`` as ISO-8601 strings or epoch milliseconds. This stands in for a
    remote calendar API without requiring authentication.
    """

    def __init__(self, path: Path, timezone: str = "UTC"):
        """
        Initialize the event source.

        Args:
            path: Path to the JSON event file
            timezone: Timezone for timestamps that carry no offset
        """
        self.path = path
        self.timezone = timezone
        self._events: List[Dict[str, Any]] | None = None

    def _load_events(self) -> List[Dict[str, Any]]:
        """Load raw events from the JSON file once."""
        if self._events is not None:
            return self._events

        if not self.path.exists():
            raise DataSourceError(f"Event file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise DataSourceError(f"Could not read {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise DataSourceError(f"{self.path} must contain a list of events.")

        self._events = data
        return self._events

    async def get_events(
        self,
        owners: Sequence[str],
        start_time: DateTime,
        end_time: DateTime,
    ) -> Dict[str, List[AvailabilityEvent]]:
        """
        Return busy events per owner that overlap the requested window.

        Args:
            owners: Owner identifiers (email addresses)
            start_time: Start of the time window
            end_time: End of the time window

        Returns:
            Dictionary mapping owner -> list of AvailabilityEvent objects.
            Events without an owner are returned under the "" key.
        """
        events: Dict[str, List[AvailabilityEvent]] = {owner.lower(): [] for owner in owners}

        for index, raw in enumerate(self._load_events()):
            try:
                event = AvailabilityEventPayload.model_validate(raw).to_domain(self.timezone)
            except ValueError as exc:
                # Covers pydantic, parser and event validation errors
                logger.warning("Skipping invalid event %d in %s: %s", index, self.path, exc)
                continue

            if event.start_time >= end_time or event.end_time <= start_time:
                continue

            if event.owner in events:
                events[event.owner].append(event)
            elif not event.owner:
                # Unowned events block everyone
                events.setdefault("", []).append(event)

        return events
