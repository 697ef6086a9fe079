"""
Availability store backed by a YAML or JSON file.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..domain.exceptions import DataSourceError
from ..domain.models import Availability
from ..domain.validation import validate_availability
from .schemas import AvailabilityPayload

logger = logging.getLogger(__name__)


class FileAvailabilityStore:
    """
    Loads availability records from a file.

    The file holds a list of records in the persistence format (YAML, or
    JSON which YAML parses as well). Every record is validated on load;
    a single malformed record fails the whole load.
    """

    def __init__(self, path: Path, validate: bool = True):
        """
        Initialize the store.

        Args:
            path: Path to the availability file
            validate: Apply ingestion checks (title, slot overlaps) to records
        """
        self.path = path
        self.validate = validate

    async def get_availabilities(
        self,
        owners: Optional[Sequence[str]] = None,
    ) -> List[Availability]:
        """
        Return availability records, optionally restricted to some owners.

        Owners are matched case-insensitively.

        Raises:
            DataSourceError: If the file cannot be read or parsed
            SlotValidationError: If a record holds a malformed slot
            AvailabilityValidationError: If a record fails ingestion checks
        """
        availabilities = self.load()

        if owners is None:
            return availabilities

        wanted = {owner.lower() for owner in owners}
        return [a for a in availabilities if a.owner.lower() in wanted]

    def load(self) -> List[Availability]:
        """Read and validate every record in the file."""
        records = self._read_records()
        availabilities: List[Availability] = []

        for index, record in enumerate(records):
            try:
                payload = AvailabilityPayload.model_validate(record)
            except PydanticValidationError as exc:
                raise DataSourceError(
                    f"Invalid availability record {index} in {self.path}: {exc}"
                ) from exc

            availability = payload.to_domain()
            if self.validate:
                validate_availability(availability)
            availabilities.append(availability)

        logger.debug("Loaded %d availability records from %s", len(availabilities), self.path)
        return availabilities

    def _read_records(self) -> list:
        if not self.path.exists():
            raise DataSourceError(f"Availability file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or []
        except OSError as exc:
            raise DataSourceError(f"Could not read {self.path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise DataSourceError(f"Invalid YAML in {self.path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("availabilities", [])

        if not isinstance(data, list):
            raise DataSourceError(
                f"{self.path} must contain a list of availability records."
            )

        return data
