"""AppleScript source for each directory operation.

Every value interpolated into a script goes through _quoted (string values)
or int() and math.ceil() (counts and timeouts). Read scripts emit rows in the codec's layout.
"""

import math
import textwrap

from contactbook.application.dto import ContactChanges, NewContact
from contactbook.infrastructure.codec import escape

# Leaves recordLine holding one codec row for the person in `p`.
_CONTACT_ROW = r"""set contactId to id of p
set firstName to first name of p
set lastName to last name of p
set orgName to organization of p
set jobTitleVal to job title of p
set noteVal to note of p
set birthdayVal to ""
try
    set birthdayVal to birth date of p as string
end try

set emailList to ""
repeat with e in emails of p
    if emailList is not "" then set emailList to emailList & ";;;"
    set emailList to emailList & (value of e)
end repeat

set phoneList to ""
repeat with phoneItem in phones of p
    if phoneList is not "" then set phoneList to phoneList & ";;;"
    set phoneList to phoneList & (value of phoneItem)
end repeat

set addrList to ""
repeat with a in addresses of p
    if addrList is not "" then set addrList to addrList & ";;;"
    set addrParts to ""
    try
        set addrParts to (street of a) & ", " & (city of a) & ", " & (state of a) & " " & (zip of a) & ", " & (country of a)
    end try
    set addrList to addrList & addrParts
end repeat

set recordLine to contactId & "\t" & firstName & "\t" & lastName & "\t" & orgName & "\t" & jobTitleVal & "\t" & noteVal & "\t" & birthdayVal & "\t" & emailList & "\t" & phoneList & "\t" & addrList"""

_APPEND_LINE = """if output is not "" then set output to output & linefeed
set output to output & recordLine"""

# Property names as the Contacts dictionary spells them, in script order.
_CREATE_PROPERTIES = (
    ("first_name", "first name"),
    ("last_name", "last name"),
    ("organization", "organization"),
    ("job_title", "job title"),
    ("note", "note"),
)
_UPDATE_PROPERTIES = _CREATE_PROPERTIES


def _quoted(value: str) -> str:
    return '"' + escape(value) + '"'


def _block(*parts: str) -> str:
    return "\n".join(parts)


def _indent(text: str, level: int = 1) -> str:
    return textwrap.indent(text, "    " * level)


def _contact_rows(source: str, limit: int | None = None) -> str:
    """Repeat over source, appending one row per person to `output`."""
    body = [_CONTACT_ROW, _APPEND_LINE]
    head = []
    if limit is not None:
        head.append("set contactCount to 0")
        body.insert(0, f"if contactCount >= {int(limit)} then exit repeat")
        body.append("set contactCount to contactCount + 1")
    return _block(
        *head,
        f"repeat with p in {source}",
        _indent(_block(*body)),
        "end repeat",
    )


class ScriptBuilder:
    """Renders one complete script per directory operation."""

    def __init__(self, application: str = "Contacts") -> None:
        self.application = application

    def _tell(self, *body: str) -> str:
        return _block(
            f"tell application {_quoted(self.application)}",
            _indent(_block(*body)),
            "end tell",
        )

    def list_contacts(self, limit: int) -> str:
        return self._tell(
            'set output to ""',
            _contact_rows("people", limit=limit),
            "return output",
        )

    def search_contacts(self, query: str) -> str:
        return self._tell(
            'set output to ""',
            f"set matchedPeople to (every person whose name contains {_quoted(query)})",
            _contact_rows("matchedPeople"),
            "return output",
        )

    def get_contact(self, contact_id: str) -> str:
        return self._tell(
            "try",
            _indent(
                _block(
                    f"set p to first person whose id is {_quoted(contact_id)}",
                    _CONTACT_ROW,
                    "return recordLine",
                )
            ),
            "on error",
            _indent('return ""'),
            "end try",
        )

    def create_contact(self, contact: NewContact) -> str:
        properties = [
            f"{name}:{_quoted(getattr(contact, attr))}"
            for attr, name in _CREATE_PROPERTIES
            if getattr(contact, attr)
        ]
        lines = [
            "set newPerson to make new person with properties {" + ", ".join(properties) + "}"
        ]
        if contact.email:
            lines.append(
                "make new email at end of emails of newPerson with properties "
                f'{{label:"work", value:{_quoted(contact.email)}}}'
            )
        if contact.phone:
            lines.append(
                "make new phone at end of phones of newPerson with properties "
                f'{{label:"mobile", value:{_quoted(contact.phone)}}}'
            )
        lines += ["save", "return id of newPerson"]
        return self._tell(*lines)

    def update_contact(self, contact_id: str, changes: ContactChanges) -> str | None:
        """Return the update script, or None when there is nothing to assign."""
        if changes.is_empty():
            return None
        assignments = [
            f"set {name} of p to {_quoted(getattr(changes, attr))}"
            for attr, name in _UPDATE_PROPERTIES
            if getattr(changes, attr) is not None
        ]
        return self._tell(
            "try",
            _indent(
                _block(
                    f"set p to first person whose id is {_quoted(contact_id)}",
                    *assignments,
                    "save",
                    'return "true"',
                )
            ),
            "on error",
            _indent('return "false"'),
            "end try",
        )

    def delete_contact(self, contact_id: str) -> str:
        return self._tell(
            "try",
            _indent(
                _block(
                    f"set p to first person whose id is {_quoted(contact_id)}",
                    "delete p",
                    "save",
                    'return "true"',
                )
            ),
            "on error",
            _indent('return "false"'),
            "end try",
        )

    def list_groups(self) -> str:
        return self._tell(
            'set output to ""',
            "repeat with g in groups",
            _indent(
                _block(
                    "set gId to id of g",
                    "set gName to name of g",
                    "set memberCount to count of people of g",
                    r'set recordLine to gId & "\t" & gName & "\t" & memberCount',
                    _APPEND_LINE,
                )
            ),
            "end repeat",
            "return output",
        )

    def group_members(self, group_name: str) -> str:
        return self._tell(
            'set output to ""',
            "try",
            _indent(
                _block(
                    f"set g to first group whose name is {_quoted(group_name)}",
                    _contact_rows("people of g"),
                )
            ),
            "end try",
            "return output",
        )

    def lookup_by_phone(self, suffix: str, timeout: float) -> str:
        """First person with a phone value containing suffix; stops at the first match."""
        match = _block(
            "repeat with ph in phones of p",
            _indent(
                _block(
                    f"if value of ph contains {_quoted(suffix)} then",
                    _indent(_block(_CONTACT_ROW, "return recordLine")),
                    "end if",
                )
            ),
            "end repeat",
        )
        return _block(
            f"with timeout of {math.ceil(timeout)} seconds",
            _indent(
                self._tell(
                    "repeat with p in people",
                    _indent(match),
                    "end repeat",
                    'return ""',
                )
            ),
            "end timeout",
        )

    def count_people(self) -> str:
        return self._tell("return count of people")
