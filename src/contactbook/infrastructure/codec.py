"""Record codec: Contacts script output rows <-> domain records.

Contact rows carry 9 or 10 tab-separated fields in this order:
id, first name, last name, organization, job title, note, birthday,
emails, phones, [addresses]. Multi-valued fields are joined with ";;;".
The application prints "missing value" for unset properties.
"""

from typing import Any

from contactbook.domain import Contact, ContactGroup

MISSING = "missing value"
FIELD_SEPARATOR = "\t"
ROW_SEPARATOR = "\n"
LIST_SEPARATOR = ";;;"

CONTACT_MIN_FIELDS = 9
GROUP_MIN_FIELDS = 3


def escape(value: str) -> str:
    """Escape value for use inside an AppleScript double-quoted string literal.

    Backslashes must be doubled before quotes are escaped, otherwise the
    backslash added in front of each quote gets doubled too.
    """
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _name_part(raw: str) -> str:
    return "" if raw == MISSING else raw


def _optional(raw: str) -> str | None:
    if raw == MISSING or not raw:
        return None
    return raw


def _sub_list(raw: str) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(item for item in raw.split(LIST_SEPARATOR) if item and item != MISSING)


def decode_contact(line: str) -> Contact | None:
    """Decode one row, or return None if it has too few fields."""
    row = line.split(FIELD_SEPARATOR)
    if len(row) < CONTACT_MIN_FIELDS:
        return None
    return Contact(
        id=row[0],
        first_name=_name_part(row[1]),
        last_name=_name_part(row[2]),
        organization=_optional(row[3]),
        job_title=_optional(row[4]),
        note=_optional(row[5]),
        birthday=_optional(row[6]),
        emails=_sub_list(row[7]),
        phones=_sub_list(row[8]),
        addresses=_sub_list(row[9]) if len(row) > CONTACT_MIN_FIELDS else (),
    )


def decode_contacts(output: str) -> list[Contact]:
    """Decode newline-separated contact rows. Malformed rows are dropped."""
    if not output:
        return []
    contacts = []
    for line in output.split(ROW_SEPARATOR):
        contact = decode_contact(line)
        if contact is not None:
            contacts.append(contact)
    return contacts


def _member_count(raw: str) -> int:
    raw = raw.strip()
    if raw.isascii() and raw.isdigit():
        return int(raw)
    return 0


def decode_groups(output: str) -> list[ContactGroup]:
    """Decode newline-separated id/name/member-count rows."""
    if not output:
        return []
    groups = []
    for line in output.split(ROW_SEPARATOR):
        row = line.split(FIELD_SEPARATOR)
        if len(row) < GROUP_MIN_FIELDS:
            continue
        groups.append(ContactGroup(id=row[0], name=row[1], member_count=_member_count(row[2])))
    return groups


def contact_to_dict(contact: Contact) -> dict[str, Any]:
    """Keyed representation for JSON output. Unset optional scalars are omitted."""
    out: dict[str, Any] = {
        "id": contact.id,
        "firstName": contact.first_name,
        "lastName": contact.last_name,
        "fullName": contact.full_name,
        "emails": list(contact.emails),
        "phones": list(contact.phones),
        "addresses": list(contact.addresses),
    }
    for key, value in (
        ("organization", contact.organization),
        ("jobTitle", contact.job_title),
        ("note", contact.note),
        ("birthday", contact.birthday),
    ):
        if value is not None:
            out[key] = value
    return out


def group_to_dict(group: ContactGroup) -> dict[str, Any]:
    return {"id": group.id, "name": group.name, "memberCount": group.member_count}
