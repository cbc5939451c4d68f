"""
Contactbook core: a bridge to the macOS Contacts application over AppleScript.

- domain: entities (Contact, ContactGroup, AuthorizationStatus). No outer dependencies.
- application: ports (ScriptRunner), DTOs, errors.
- infrastructure: codec, script builder, osascript runner, phone normalization.
- service: DirectoryService, the public operation surface.
"""

from contactbook.application import (
    ContactChanges,
    ContactNotFound,
    ContactsError,
    InvalidInput,
    NewContact,
    ScriptExecutionError,
    ScriptRunner,
)
from contactbook.domain import AuthorizationStatus, Contact, ContactGroup
from contactbook.infrastructure import OsascriptRunner, ScriptBuilder
from contactbook.service import DirectoryService

__all__ = [
    "AuthorizationStatus",
    "Contact",
    "ContactChanges",
    "ContactGroup",
    "ContactNotFound",
    "ContactsError",
    "DirectoryService",
    "InvalidInput",
    "NewContact",
    "OsascriptRunner",
    "ScriptBuilder",
    "ScriptExecutionError",
    "ScriptRunner",
]
