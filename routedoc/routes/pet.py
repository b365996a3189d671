"""
Routedoc — Pet Routes
=======================

What:  GET/DELETE /pet/{petId}, POST/PUT /pet, GET /pet/findByStatus.
How:   Each operation is one composed Route; `pet()` joins them under the
       "pet" prefix. Handlers are stubs: nothing is stored or looked up.

Branch order matters. `findByStatus` is tried before the `{petId}` routes so
the literal wins; once a request reaches `petId`, a non-integer token is a 400
rather than a reason to keep searching.
"""

import logging
from typing import List

from routedoc.core import (
    Location,
    ParamKind,
    Route,
    array,
    bind_param,
    delete,
    description,
    end,
    get,
    json_body,
    path,
    post,
    put,
    response,
)
from routedoc.core import reply
from routedoc.schemas.petstore import Pet, pet_schema

logger = logging.getLogger(__name__)


def pet() -> Route:
    return path("pet").and_(
        pet_status()
        .or_(get_pet())
        .or_(delete_pet())
        .or_(pet_post())
        .or_(pet_put())
    )


# ── Shared pieces ─────────────────────────────────────────────────────────

def pet_id() -> Route:
    # Any route that looks a pet up can fail to find it
    return bind_param("petId", "The id of the pet").document(
        response(404).description("The pet could not be found"),
    )


def pet_json() -> Route:
    return end().and_(json_body(pet_schema(), Pet))


# ── Operations ────────────────────────────────────────────────────────────

def get_pet() -> Route:
    return (
        get()
        .and_(pet_id())
        .document(
            description("Returns a single pet object"),
            response(200, pet_schema()).description("Successful Operation!"),
        )
        .map(_find_pet)
    )


def delete_pet() -> Route:
    return (
        delete()
        .and_(pet_id())
        .and_(bind_param("api_key", "API key authorizing the deletion", Location.HEADER, ParamKind.STRING))
        .document(
            description("Deletes a pet"),
            response(200).description("The pet was deleted"),
            response(400).description("Missing api_key header or invalid pet id"),
        )
        .map(_delete_pet)
    )


def pet_post() -> Route:
    return (
        post()
        .and_(pet_json())
        .document(description("Adds a new pet to the store"))
        .map(_created)
    )


def pet_put() -> Route:
    return (
        put()
        .and_(pet_json())
        .document(description("Pet object that needs to be added to the store"))
        .map(_created)
    )


def pet_status() -> Route:
    return (
        path("findByStatus")
        .and_(get())
        .and_(bind_param(
            "status",
            "Status values that need to be considered for filter",
            Location.QUERY,
            ParamKind.STRING,
            repeated=True,
        ))
        .document(
            description("Finds pets by status"),
            response(200, array(pet_schema())).description("Successful operation"),
        )
        .map(_find_by_status)
    )


# ── Handlers ──────────────────────────────────────────────────────────────

def _find_pet(pet_id: int) -> reply.Reply:
    return reply.json(Pet(id=pet_id))


def _delete_pet(pet_id: int, api_key: str) -> str:
    logger.info("Deleting pet %d", pet_id)
    return f"Deleted pet #{pet_id}"


def _created(_pet: Pet) -> str:
    return "Created"


def _find_by_status(statuses: List[str]) -> reply.Reply:
    # Stub: always two default pets, whatever was asked for
    return reply.json([Pet(), Pet()])
