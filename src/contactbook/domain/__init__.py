"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import AuthorizationStatus, Contact, ContactGroup

__all__ = ["AuthorizationStatus", "Contact", "ContactGroup"]
