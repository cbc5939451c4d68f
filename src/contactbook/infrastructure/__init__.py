"""Infrastructure layer: codec, script builder, and the osascript runner."""

from contactbook.infrastructure.codec import (
    contact_to_dict,
    decode_contacts,
    decode_groups,
    escape,
    group_to_dict,
)
from contactbook.infrastructure.osascript import OsascriptRunner
from contactbook.infrastructure.phone import phone_digits, phone_search_suffix
from contactbook.infrastructure.scripts import ScriptBuilder

__all__ = [
    "OsascriptRunner",
    "ScriptBuilder",
    "contact_to_dict",
    "decode_contacts",
    "decode_groups",
    "escape",
    "group_to_dict",
    "phone_digits",
    "phone_search_suffix",
]
