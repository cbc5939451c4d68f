"""Application layer: ports, DTOs, and errors. Depends only on domain."""

from contactbook.application.dto import ContactChanges, NewContact
from contactbook.application.errors import (
    ContactNotFound,
    ContactsError,
    InvalidInput,
    ScriptExecutionError,
)
from contactbook.application.ports import ScriptRunner

__all__ = [
    "ContactChanges",
    "ContactNotFound",
    "ContactsError",
    "InvalidInput",
    "NewContact",
    "ScriptExecutionError",
    "ScriptRunner",
]
