"""Directory service: the public operation surface over the Contacts application.

Each call builds a script, runs it, and decodes the output. Calls on one
service are serialized through a single lock, since overlapping scripted
mutations of the application are not safe.
"""

import asyncio
import logging

from contactbook.application import (
    ContactChanges,
    InvalidInput,
    NewContact,
    ScriptExecutionError,
    ScriptRunner,
)
from contactbook.domain import AuthorizationStatus, Contact, ContactGroup
from contactbook.infrastructure.codec import decode_contacts, decode_groups
from contactbook.infrastructure.phone import phone_digits, phone_search_suffix
from contactbook.infrastructure.scripts import ScriptBuilder

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0
DEFAULT_LOOKUP_TIMEOUT = 180.0
DEFAULT_LIST_LIMIT = 50
STATUS_TIMEOUT = 10.0
AUTHORIZE_TIMEOUT = 60.0

# Error number osascript reports when automation of the target app is not permitted.
_NOT_AUTHORIZED_CODE = "-1743"


class DirectoryService:
    """List, search, read, and write contacts and groups via the script runner."""

    def __init__(
        self,
        runner: ScriptRunner,
        *,
        builder: ScriptBuilder | None = None,
        lock: asyncio.Lock | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT,
        list_limit: int = DEFAULT_LIST_LIMIT,
    ) -> None:
        self._runner = runner
        self._builder = builder or ScriptBuilder()
        self._lock = lock if lock is not None else asyncio.Lock()
        self._timeout = timeout
        self._lookup_timeout = lookup_timeout
        self._list_limit = list_limit

    async def _execute(self, script: str, timeout: float | None = None) -> str:
        async with self._lock:
            return await self._runner.run(script, timeout or self._timeout)

    async def list_contacts(self, limit: int | None = None) -> list[Contact]:
        """Return up to limit contacts (default 50) in the application's order."""
        max_count = self._list_limit if limit is None else limit
        logger.debug("list_contacts limit=%s", max_count)
        output = await self._execute(self._builder.list_contacts(max_count))
        return decode_contacts(output)

    async def search_contacts(self, query: str) -> list[Contact]:
        """Return all contacts whose name contains query."""
        logger.debug("search_contacts")
        output = await self._execute(self._builder.search_contacts(query))
        return decode_contacts(output)

    async def get_contact(self, contact_id: str) -> Contact | None:
        """Return the contact with the given id, or None."""
        output = await self._execute(self._builder.get_contact(contact_id))
        if not output:
            return None
        contacts = decode_contacts(output)
        return contacts[0] if contacts else None

    async def create_contact(self, contact: NewContact) -> str:
        """Create a contact and return its new id."""
        if not contact.has_identity():
            raise InvalidInput("At least firstName, lastName, or organization is required")
        output = await self._execute(self._builder.create_contact(contact))
        logger.info("Created contact %s", output)
        return output

    async def update_contact(self, contact_id: str, changes: ContactChanges) -> bool:
        """Apply the supplied fields. False if nothing was supplied or the contact is missing."""
        script = self._builder.update_contact(contact_id, changes)
        if script is None:
            logger.debug("update_contact %s: no fields supplied", contact_id)
            return False
        return await self._execute(script) == "true"

    async def delete_contact(self, contact_id: str) -> bool:
        return await self._execute(self._builder.delete_contact(contact_id)) == "true"

    async def list_groups(self) -> list[ContactGroup]:
        output = await self._execute(self._builder.list_groups())
        return decode_groups(output)

    async def get_group_members(self, group_name: str) -> list[Contact]:
        """Return the members of the named group; empty if there is no such group."""
        output = await self._execute(self._builder.group_members(group_name))
        return decode_contacts(output)

    async def lookup_by_phone(self, phone_number: str) -> Contact | None:
        """Return the first contact with a phone number ending in the same digits.

        Scans every contact in the worst case, so it runs under the longer
        lookup timeout.
        """
        if not phone_digits(phone_number):
            return None
        suffix = phone_search_suffix(phone_number)
        logger.debug("lookup_by_phone suffix=%s", suffix)
        script = self._builder.lookup_by_phone(suffix, self._lookup_timeout)
        output = await self._execute(script, self._lookup_timeout)
        if not output:
            return None
        contacts = decode_contacts(output)
        return contacts[0] if contacts else None

    async def authorization_status(self, timeout: float = STATUS_TIMEOUT) -> AuthorizationStatus:
        """Probe whether scripting the application is permitted.

        A probe still running at the timeout is waiting on the consent prompt.
        """
        try:
            output = await self._execute(self._builder.count_people(), timeout)
        except ScriptExecutionError as exc:
            if _NOT_AUTHORIZED_CODE in exc.stderr:
                return AuthorizationStatus.DENIED
            raise
        if not output:
            return AuthorizationStatus.NOT_DETERMINED
        return AuthorizationStatus.AUTHORIZED

    async def request_authorization(self) -> AuthorizationStatus:
        """Trigger the consent prompt and wait for the user to answer it."""
        return await self.authorization_status(timeout=AUTHORIZE_TIMEOUT)
