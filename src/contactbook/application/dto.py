"""Input DTOs for the write operations of the directory service."""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class NewContact:
    """Fields for a contact to be created. At least one identifying field is required."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    organization: str | None = None
    job_title: str | None = None
    note: str | None = None

    def has_identity(self) -> bool:
        """True if a first name, last name, or organization was supplied."""
        return any(
            (value or "").strip()
            for value in (self.first_name, self.last_name, self.organization)
        )


@dataclass(frozen=True)
class ContactChanges:
    """Fields to change on an existing contact. None means leave untouched."""

    first_name: str | None = None
    last_name: str | None = None
    organization: str | None = None
    job_title: str | None = None
    note: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))
