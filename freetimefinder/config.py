"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Sequence

import yaml
from pydantic import BaseModel, Field, field_validator


class DefaultsConfig(BaseModel):
    """Default settings for queries."""
    range_days: int = 7
    min_duration_minutes: int = 30
    max_suggestions: int = 10

    @field_validator("range_days")
    @classmethod
    def validate_range_days(cls, value: int) -> int:
        """Keep query windows between one day and roughly a quarter."""
        if not 1 <= value <= 90:
            raise ValueError(f"range_days must be between 1 and 90, got {value}")
        return value

    @field_validator("min_duration_minutes", "max_suggestions")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure counts and durations are positive."""
        if value <= 0:
            raise ValueError(f"value must be greater than zero, got {value}")
        return value


class Person(BaseModel):
    """Person whose availability can be queried."""
    name: str  # Used as alias
    email: str


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    availabilities_file: Path = Path("availabilities.yaml")
    events_file: Path = Path("events.json")
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    people: List[Person] = Field(default_factory=list)

    @field_validator("people")
    @classmethod
    def validate_people(cls, value: List[Person]) -> List[Person]:
        """Ensure aliases and emails are unique."""
        seen_names: set[str] = set()
        seen_emails: set[str] = set()
        for person in value:
            name_key = person.name.lower()
            email_key = person.email.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate person name detected: {person.name}")
            if email_key in seen_emails:
                raise ValueError(f"Duplicate person email detected: {person.email}")
            seen_names.add(name_key)
            seen_emails.add(email_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Relative data file paths are resolved against the config file's
        directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        base_dir = config_path.parent
        if not config.availabilities_file.is_absolute():
            config.availabilities_file = base_dir / config.availabilities_file
        if not config.events_file.is_absolute():
            config.events_file = base_dir / config.events_file

        return config

    def find_person_by_name(self, name: str) -> Person | None:
        """Find a person by their name (alias)."""
        for person in self.people:
            if person.name.lower() == name.lower():
                return person
        return None

    def resolve_person(self, identifier: str) -> str:
        """
        Resolve a person identifier (name/alias or email) to an email address.

        Raises:
            ValueError: If identifier cannot be resolved
        """
        if "@" in identifier:
            return identifier.lower()

        person = self.find_person_by_name(identifier)
        if person:
            return person.email.lower()

        raise ValueError(
            f"Unknown person identifier: '{identifier}'. "
            f"Use an email address or a configured name."
        )

    def resolve_people(self, identifiers: Sequence[str]) -> List[str]:
        """
        Resolve multiple identifiers, ensuring uniqueness.

        Args:
            identifiers: Iterable of aliases or email addresses.

        Returns:
            List of unique email addresses.
        """
        if not identifiers:
            raise ValueError("No people provided.")

        resolved_emails: List[str] = []
        unknown_identifiers: List[str] = []

        for identifier in identifiers:
            try:
                email = self.resolve_person(identifier)
            except ValueError:
                unknown_identifiers.append(identifier)
                continue

            if email not in resolved_emails:
                resolved_emails.append(email)

        if unknown_identifiers:
            missing = ", ".join(sorted(set(unknown_identifiers)))
            raise ValueError(
                f"Unknown person identifier(s): {missing}. "
                "Ensure they exist in the configuration or provide valid email addresses."
            )

        return resolved_emails


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
