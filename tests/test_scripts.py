"""Tests for AppleScript generation and string-literal escaping."""

import pytest

from contactbook.application import ContactChanges, NewContact
from contactbook.infrastructure.codec import escape
from contactbook.infrastructure.scripts import ScriptBuilder

HOSTILE = 'x" & (do shell script "rm -rf ~") & "'

_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "r": "\r"}


def _read_literal(text: str, start: int) -> tuple[str, int]:
    """Parse an AppleScript string literal whose opening quote is at start.

    Returns the value and the index just past the closing quote.
    """
    assert text[start] == '"'
    out = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            out.append(_ESCAPES.get(text[i + 1], text[i + 1]))
            i += 2
        elif ch == '"':
            return "".join(out), i + 1
        else:
            out.append(ch)
            i += 1
    raise ValueError("unterminated string literal")


def _literal_after(script: str, marker: str) -> str:
    start = script.index(marker) + len(marker)
    value, _ = _read_literal(script, start)
    return value


@pytest.fixture
def builder() -> ScriptBuilder:
    return ScriptBuilder()


def test_escape_doubles_backslashes_then_quotes() -> None:
    assert escape('he said "hi"\\now') == 'he said \\"hi\\"\\\\now'


def test_escaped_value_reads_back_exactly() -> None:
    raw = 'he said "hi"\\now'
    value, end = _read_literal('"' + escape(raw) + '"', 0)
    assert value == raw
    assert end == len(escape(raw)) + 2


def test_escaping_quotes_first_corrupts_values() -> None:
    raw = 'he said "hi"\\now'
    wrong = raw.replace('"', '\\"').replace("\\", "\\\\")
    literal = '"' + wrong + '"'
    value, end = _read_literal(literal, 0)
    assert value != raw
    assert end < len(literal)


def test_search_query_is_escaped(builder) -> None:
    raw = 'he said "hi"\\now'
    script = builder.search_contacts(raw)
    assert _literal_after(script, "whose name contains ") == raw


@pytest.mark.parametrize(
    "render",
    [
        lambda b: b.search_contacts(HOSTILE),
        lambda b: b.get_contact(HOSTILE),
        lambda b: b.delete_contact(HOSTILE),
        lambda b: b.group_members(HOSTILE),
        lambda b: b.update_contact(HOSTILE, ContactChanges(note=HOSTILE)),
        lambda b: b.create_contact(
            NewContact(first_name=HOSTILE, email=HOSTILE, phone=HOSTILE, note=HOSTILE)
        ),
        lambda b: b.lookup_by_phone(HOSTILE, 180),
    ],
)
def test_hostile_values_never_break_out_of_literals(builder, render) -> None:
    script = render(builder)
    assert 'do shell script "rm' not in script
    assert escape(HOSTILE) in script


def test_list_stops_after_limit(builder) -> None:
    script = builder.list_contacts(25)
    assert "if contactCount >= 25 then exit repeat" in script
    assert script.startswith('tell application "Contacts"')
    assert script.rstrip().endswith("end tell")


def test_row_layout_uses_tabs_and_list_separator(builder) -> None:
    script = builder.get_contact("1")
    assert r'contactId & "\t" & firstName' in script
    assert r'phoneList & "\t" & addrList' in script
    assert '";;;"' in script


def test_get_swallows_lookup_failure(builder) -> None:
    script = builder.get_contact("ABC")
    assert 'set p to first person whose id is "ABC"' in script
    assert "on error" in script
    assert 'return ""' in script


def test_create_includes_only_supplied_properties(builder) -> None:
    script = builder.create_contact(NewContact(first_name="Ada", organization="Acme"))
    assert 'make new person with properties {first name:"Ada", organization:"Acme"}' in script
    assert "last name" not in script
    assert "job title" not in script
    assert "make new email" not in script
    assert "make new phone" not in script
    assert "save" in script
    assert "return id of newPerson" in script


def test_create_attaches_email_and_phone(builder) -> None:
    script = builder.create_contact(
        NewContact(last_name="Lovelace", email="ada@example.com", phone="+44 20 7946 0000", note="hi")
    )
    assert '{last name:"Lovelace", note:"hi"}' in script
    assert (
        'make new email at end of emails of newPerson with properties '
        '{label:"work", value:"ada@example.com"}'
    ) in script
    assert (
        'make new phone at end of phones of newPerson with properties '
        '{label:"mobile", value:"+44 20 7946 0000"}'
    ) in script


def test_update_touches_only_supplied_fields(builder) -> None:
    script = builder.update_contact("ABC", ContactChanges(last_name="Byron", job_title=""))
    assert 'set last name of p to "Byron"' in script
    assert 'set job title of p to ""' in script
    assert "set first name" not in script
    assert "set organization" not in script
    assert 'return "true"' in script
    assert 'return "false"' in script


def test_update_without_fields_has_no_script(builder) -> None:
    assert builder.update_contact("ABC", ContactChanges()) is None


def test_delete_collapses_failures_to_false(builder) -> None:
    script = builder.delete_contact("ABC")
    assert "delete p" in script
    assert 'return "false"' in script


def test_group_members_looks_up_group_by_name(builder) -> None:
    script = builder.group_members("Family")
    assert 'set g to first group whose name is "Family"' in script
    assert "repeat with p in people of g" in script


def test_list_groups_emits_three_fields(builder) -> None:
    script = builder.list_groups()
    assert r'gId & "\t" & gName & "\t" & memberCount' in script


def test_lookup_matches_suffix_and_returns_first_hit(builder) -> None:
    script = builder.lookup_by_phone("8502148", 180)
    assert script.startswith("with timeout of 180 seconds")
    assert script.rstrip().endswith("end timeout")
    assert 'if value of ph contains "8502148" then' in script
    assert "return recordLine" in script


def test_lookup_rounds_fractional_timeout_up(builder) -> None:
    assert builder.lookup_by_phone("112", 0.5).startswith("with timeout of 1 seconds")
    assert builder.lookup_by_phone("112", 180.2).startswith("with timeout of 181 seconds")


def test_changes_report_emptiness() -> None:
    assert ContactChanges().is_empty()
    assert not ContactChanges(note="").is_empty()
