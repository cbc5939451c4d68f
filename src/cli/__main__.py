"""
Command-line front end: contacts, groups, phone lookup, and the REST server.
Run: python -m cli <command> (or the `contactbook` console script).
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from contactbook.application import (
    ContactChanges,
    ContactNotFound,
    ContactsError,
    NewContact,
)
from contactbook.config import build_service, load_settings
from contactbook.domain import AuthorizationStatus, Contact
from contactbook.infrastructure import contact_to_dict, group_to_dict
from contactbook.service import DirectoryService


def _build_service() -> DirectoryService:
    return build_service()


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False))


def _print_contact(contact: Contact, verbose: bool = False) -> None:
    print(f"[{contact.id}]")
    print(f"  Name: {contact.full_name}")
    if contact.organization:
        if contact.job_title:
            print(f"  Work: {contact.job_title} at {contact.organization}")
        else:
            print(f"  Organization: {contact.organization}")
    elif contact.job_title:
        print(f"  Title: {contact.job_title}")
    if contact.emails:
        print(f"  Email: {', '.join(contact.emails)}")
    if contact.phones:
        print(f"  Phone: {', '.join(contact.phones)}")
    if verbose:
        if contact.birthday:
            print(f"  Birthday: {contact.birthday}")
        if contact.addresses:
            print("  Addresses:")
            for address in contact.addresses:
                print(f"    - {address.replace(chr(10), ', ')}")
        if contact.note:
            print(f"  Note: {contact.note}")
    print()


def _print_contacts(args, contacts: list[Contact], empty: str, found: str) -> None:
    if args.json:
        _print_json([contact_to_dict(c) for c in contacts])
    elif args.quiet:
        print(len(contacts))
    elif args.plain:
        for c in contacts:
            print(f"{c.id}\t{c.full_name}\t{';'.join(c.phones)}\t{';'.join(c.emails)}")
    elif not contacts:
        print(empty)
    else:
        print(f"{found}\n")
        for c in contacts:
            _print_contact(c)


def _print_status(args, status: AuthorizationStatus, guidance: bool = True) -> None:
    if args.json:
        print(json.dumps({"status": status.value, "authorized": status.is_authorized}))
    elif args.plain:
        print(status.value)
    else:
        print(f"Contacts access: {status.display_name}")
        if guidance and not status.is_authorized:
            print(status.guidance)


# --- commands ---


async def cmd_status(service: DirectoryService, args) -> int:
    status = await service.authorization_status()
    _print_status(args, status, guidance=not args.quiet)
    return 0


async def cmd_authorize(service: DirectoryService, args) -> int:
    status = await service.authorization_status()
    if status is AuthorizationStatus.NOT_DETERMINED:
        status = await service.request_authorization()
    _print_status(args, status)
    return 0 if status.is_authorized else 1


async def cmd_list(service: DirectoryService, args) -> int:
    contacts = await service.list_contacts(limit=args.limit)
    _print_contacts(args, contacts, "No contacts found", f"Found {len(contacts)} contact(s):")
    return 0


async def cmd_search(service: DirectoryService, args) -> int:
    contacts = await service.search_contacts(args.query)
    _print_contacts(
        args,
        contacts,
        f"No contacts matching '{args.query}'",
        f"Found {len(contacts)} contact(s) matching '{args.query}':",
    )
    return 0


async def cmd_get(service: DirectoryService, args) -> int:
    contact = await service.get_contact(args.id)
    if contact is None:
        raise ContactNotFound(args.id)
    if args.json:
        _print_json(contact_to_dict(contact))
    else:
        _print_contact(contact, verbose=True)
    return 0


async def cmd_create(service: DirectoryService, args) -> int:
    contact_id = await service.create_contact(
        NewContact(
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            phone=args.phone,
            organization=args.organization,
            job_title=args.job_title,
            note=args.note,
        )
    )
    if not contact_id:
        if args.json:
            print(json.dumps({"id": None, "success": False}))
        print(
            "Warning: create was not confirmed before the timeout; "
            "the contact may still have been created",
            file=sys.stderr,
        )
        return 1
    if args.json:
        print(json.dumps({"id": contact_id, "success": True}))
    else:
        print(f"Contact created with ID: {contact_id}")
    return 0


async def cmd_update(service: DirectoryService, args) -> int:
    success = await service.update_contact(
        args.id,
        ContactChanges(
            first_name=args.first_name,
            last_name=args.last_name,
            organization=args.organization,
            job_title=args.job_title,
            note=args.note,
        ),
    )
    if args.json:
        print(json.dumps({"success": success}))
    elif success:
        print("Contact updated successfully")
    else:
        print("No updates applied (either contact not found or no fields provided)")
    return 0


async def cmd_delete(service: DirectoryService, args) -> int:
    if not args.force and not args.json:
        answer = await asyncio.to_thread(
            input, f"Are you sure you want to delete contact {args.id}? (y/N) "
        )
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled")
            return 0
    success = await service.delete_contact(args.id)
    if args.json:
        print(json.dumps({"success": success}))
    elif success:
        print("Contact deleted successfully")
    else:
        print("Failed to delete contact (may not exist)")
    return 0


async def cmd_groups(service: DirectoryService, args) -> int:
    groups = await service.list_groups()
    if args.json:
        _print_json([group_to_dict(g) for g in groups])
    elif args.quiet:
        print(len(groups))
    elif args.plain:
        for g in groups:
            print(f"{g.id}\t{g.name}\t{g.member_count}")
    elif not groups:
        print("No groups found")
    else:
        for g in groups:
            print(f"{g.name} ({g.member_count} members) [{g.id}]")
    return 0


async def cmd_members(service: DirectoryService, args) -> int:
    contacts = await service.get_group_members(args.name)
    _print_contacts(
        args,
        contacts,
        f"No members in group '{args.name}'",
        f"Group '{args.name}' has {len(contacts)} member(s):",
    )
    return 0


async def cmd_lookup(service: DirectoryService, args) -> int:
    contact = await service.lookup_by_phone(args.phone_number)
    if args.json:
        _print_json(contact_to_dict(contact) if contact else {"found": False})
    else:
        print(contact.full_name if contact else "Unknown")
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    uvicorn.run("api.main:app", host=args.host, port=args.port)
    return 0


# --- parser ---


def _output_flags(parser: argparse.ArgumentParser, plain: bool = True, quiet: bool = True) -> None:
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    if plain:
        parser.add_argument("--plain", action="store_true", help="Output as plain text (tab-separated)")
    if quiet:
        parser.add_argument("--quiet", action="store_true", help="Output count only")


def _field_options(parser: argparse.ArgumentParser, contact_methods: bool) -> None:
    parser.add_argument("--first-name", help="First name")
    parser.add_argument("--last-name", help="Last name")
    if contact_methods:
        parser.add_argument("--email", help="Email address")
        parser.add_argument("--phone", help="Phone number")
    parser.add_argument("--organization", help="Organization/company")
    parser.add_argument("--job-title", help="Job title")
    parser.add_argument("--note", help="Note")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contactbook", description="Apple Contacts CLI and REST server")
    commands = parser.add_subparsers(dest="command")

    p = commands.add_parser("status", help="Show Contacts authorization status")
    _output_flags(p)
    p.set_defaults(handler=cmd_status)

    p = commands.add_parser("authorize", help="Request Contacts access")
    _output_flags(p, quiet=False)
    p.set_defaults(handler=cmd_authorize)

    contacts = commands.add_parser("contacts", help="Manage contacts")
    contacts_sub = contacts.add_subparsers(dest="action")

    p = contacts_sub.add_parser("list", help="List contacts")
    p.add_argument("-l", "--limit", type=int, help="Maximum number of contacts to return")
    _output_flags(p)
    p.set_defaults(handler=cmd_list)

    p = contacts_sub.add_parser("search", help="Search contacts by name")
    p.add_argument("query", help="Search query")
    _output_flags(p)
    p.set_defaults(handler=cmd_search)

    p = contacts_sub.add_parser("get", help="Get a contact by ID")
    p.add_argument("id", help="Contact ID")
    _output_flags(p, plain=False, quiet=False)
    p.set_defaults(handler=cmd_get)

    p = contacts_sub.add_parser("create", help="Create a new contact")
    _field_options(p, contact_methods=True)
    _output_flags(p, plain=False, quiet=False)
    p.set_defaults(handler=cmd_create)

    p = contacts_sub.add_parser("update", help="Update an existing contact")
    p.add_argument("id", help="Contact ID")
    _field_options(p, contact_methods=False)
    _output_flags(p, plain=False, quiet=False)
    p.set_defaults(handler=cmd_update)

    p = contacts_sub.add_parser("delete", help="Delete a contact")
    p.add_argument("id", help="Contact ID")
    p.add_argument("--force", action="store_true", help="Skip confirmation")
    _output_flags(p, plain=False, quiet=False)
    p.set_defaults(handler=cmd_delete)

    groups = commands.add_parser("groups", help="Manage contact groups")
    groups_sub = groups.add_subparsers(dest="action")

    p = groups_sub.add_parser("list", help="List groups")
    _output_flags(p)
    p.set_defaults(handler=cmd_groups)

    p = groups_sub.add_parser("members", help="List the members of a group")
    p.add_argument("name", help="Group name")
    _output_flags(p)
    p.set_defaults(handler=cmd_members)

    p = commands.add_parser("lookup", help="Lookup a contact by phone number")
    p.add_argument("phone_number", help="Phone number to lookup (e.g., +31648502148)")
    _output_flags(p, plain=False, quiet=False)
    p.set_defaults(handler=cmd_lookup)

    p = commands.add_parser("serve", help="Run the REST API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.set_defaults(handler=None, serve=True)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "serve", False):
        return cmd_serve(args)
    if getattr(args, "handler", None) is None:
        # Bare `contactbook`, `contactbook contacts` and `contactbook groups` list.
        args = parser.parse_args(["groups" if args.command == "groups" else "contacts", "list"])

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=load_settings().log_level,
    )
    service = _build_service()
    try:
        return asyncio.run(args.handler(service, args))
    except ContactsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
