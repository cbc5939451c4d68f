"""Domain entities: Contact, ContactGroup, and AuthorizationStatus."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Contact:
    """
    One entry of the address book, as last read from the Contacts application.
    The id is issued by the application and never changes.
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    emails: tuple[str, ...] = field(default=())
    phones: tuple[str, ...] = field(default=())
    organization: str | None = None
    job_title: str | None = None
    note: str | None = None
    birthday: str | None = None
    addresses: tuple[str, ...] = field(default=())

    @property
    def full_name(self) -> str:
        """First and last name joined; organization, then "Unknown", when both are empty."""
        name = " ".join(part for part in (self.first_name, self.last_name) if part).strip()
        if name:
            return name
        return self.organization or "Unknown"


@dataclass(frozen=True)
class ContactGroup:
    id: str
    name: str
    member_count: int = 0


class AuthorizationStatus(str, Enum):
    """Whether this process may script the Contacts application."""

    NOT_DETERMINED = "not-determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED = "authorized"

    @property
    def is_authorized(self) -> bool:
        return self is AuthorizationStatus.AUTHORIZED

    @property
    def display_name(self) -> str:
        return {
            AuthorizationStatus.NOT_DETERMINED: "Not determined",
            AuthorizationStatus.RESTRICTED: "Restricted",
            AuthorizationStatus.DENIED: "Denied",
            AuthorizationStatus.AUTHORIZED: "Authorized",
        }[self]

    @property
    def guidance(self) -> str:
        return {
            AuthorizationStatus.NOT_DETERMINED: "Run 'contactbook authorize' to request access.",
            AuthorizationStatus.RESTRICTED: "Access restricted by system policy (parental controls, MDM, etc.).",
            AuthorizationStatus.DENIED: (
                "Access denied. Enable in System Settings -> Privacy & Security -> Automation."
            ),
            AuthorizationStatus.AUTHORIZED: "Full access granted.",
        }[self]
