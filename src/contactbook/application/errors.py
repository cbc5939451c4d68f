"""Errors raised by the directory service and its adapters."""


class ContactsError(Exception):
    """Base class for contactbook failures."""


class InvalidInput(ContactsError, ValueError):
    """Caller-supplied arguments were rejected before any script ran."""


class ContactNotFound(ContactsError):
    """Raised by front ends when a lookup that must succeed matched nothing."""

    def __init__(self, contact_id: str) -> None:
        super().__init__(f"Contact not found: {contact_id}")
        self.contact_id = contact_id


class ScriptExecutionError(ContactsError):
    """The script interpreter exited non-zero (or could not be started)."""

    def __init__(self, stderr: str, returncode: int | None = None) -> None:
        super().__init__(f"AppleScript error: {stderr}")
        self.stderr = stderr
        self.returncode = returncode
