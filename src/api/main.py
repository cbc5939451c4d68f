"""
FastAPI backend: REST API over the Contacts directory service.
Run with uvicorn: uvicorn api.main:app --reload (or `contactbook serve`).
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root) or the current directory
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contactbook.application import (
    ContactChanges,
    ContactNotFound,
    InvalidInput,
    NewContact,
    ScriptExecutionError,
)
from contactbook.config import build_service, load_settings
from contactbook.infrastructure import contact_to_dict, group_to_dict
from contactbook.service import DirectoryService

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=load_settings().log_level,
)
logger = logging.getLogger(__name__)


def get_service(app: FastAPI) -> DirectoryService:
    """One DirectoryService per app, so all requests share its single-flight lock."""
    if getattr(app.state, "service", None) is None:
        app.state.service = build_service()
    return app.state.service


app = FastAPI(title="Contactbook API")


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ContactNotFound)
async def not_found_handler(request: Request, exc: ContactNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ScriptExecutionError)
async def script_error_handler(request: Request, exc: ScriptExecutionError):
    logger.error("Script failed: %s", exc.stderr)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/status")
async def status(request: Request):
    result = await get_service(request.app).authorization_status()
    return {"status": result.value, "authorized": result.is_authorized}


# --- REST: contacts ---


class CreateContactBody(BaseModel):
    firstName: str | None = None
    lastName: str | None = None
    email: str | None = None
    phone: str | None = None
    organization: str | None = None
    jobTitle: str | None = None
    note: str | None = None


class UpdateContactBody(BaseModel):
    firstName: str | None = None
    lastName: str | None = None
    organization: str | None = None
    jobTitle: str | None = None
    note: str | None = None


@app.get("/contacts")
async def list_contacts(request: Request, limit: int | None = None):
    if limit is not None and limit < 1:
        raise HTTPException(status_code=400, detail="limit must be positive")
    contacts = await get_service(request.app).list_contacts(limit=limit)
    return [contact_to_dict(c) for c in contacts]


@app.get("/contacts/search")
async def search_contacts(q: str, request: Request):
    contacts = await get_service(request.app).search_contacts(q)
    return [contact_to_dict(c) for c in contacts]


@app.get("/contacts/{contact_id}")
async def get_contact(contact_id: str, request: Request):
    contact = await get_service(request.app).get_contact(contact_id)
    if contact is None:
        raise ContactNotFound(contact_id)
    return contact_to_dict(contact)


@app.post("/contacts")
async def create_contact(body: CreateContactBody, request: Request):
    contact_id = await get_service(request.app).create_contact(
        NewContact(
            first_name=body.firstName,
            last_name=body.lastName,
            email=body.email,
            phone=body.phone,
            organization=body.organization,
            job_title=body.jobTitle,
            note=body.note,
        )
    )
    if not contact_id:
        # The script timed out; the contact may or may not exist now.
        return JSONResponse(
            content={
                "id": None,
                "success": False,
                "detail": "Create was not confirmed before the timeout; re-query before retrying",
            },
            status_code=504,
        )
    return JSONResponse(content={"id": contact_id, "success": True}, status_code=201)


@app.patch("/contacts/{contact_id}")
async def update_contact(contact_id: str, body: UpdateContactBody, request: Request):
    success = await get_service(request.app).update_contact(
        contact_id,
        ContactChanges(
            first_name=body.firstName,
            last_name=body.lastName,
            organization=body.organization,
            job_title=body.jobTitle,
            note=body.note,
        ),
    )
    return {"success": success}


@app.delete("/contacts/{contact_id}")
async def delete_contact(contact_id: str, request: Request):
    success = await get_service(request.app).delete_contact(contact_id)
    return {"success": success}


# --- REST: groups and lookup ---


@app.get("/groups")
async def list_groups(request: Request):
    groups = await get_service(request.app).list_groups()
    return [group_to_dict(g) for g in groups]


@app.get("/groups/{group_name}/members")
async def group_members(group_name: str, request: Request):
    contacts = await get_service(request.app).get_group_members(group_name)
    return [contact_to_dict(c) for c in contacts]


@app.get("/lookup")
async def lookup(phone: str, request: Request):
    contact = await get_service(request.app).lookup_by_phone(phone)
    if contact is None:
        return {"found": False}
    return {"found": True, "contact": contact_to_dict(contact)}
