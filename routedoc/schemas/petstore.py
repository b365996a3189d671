"""
Routedoc — Petstore Payload Schemas
=====================================

What:  The pydantic models the Petstore handlers decode and reply with, and the
       TypeDescriptors that document the same shapes.
How:   Models use camelCase aliases on the wire (photoUrls, shipDate, ...) and
       accept snake_case field names in Python. Descriptors are named so each
       shape appears once under components.schemas in the generated document.

Keep the two halves in step: a field added to a model needs a matching entry in
its descriptor, or the document will under-report the payload.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from routedoc.core.types import TypeDescriptor, array, boolean, integer, map_of, obj, string


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Models
# ══════════════════════════════════════════════════════════════════════════


class PetStatus(str, Enum):
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


class Category(_CamelModel):
    """Shared id/name pair, used for both pet categories and tags."""

    id: int = 0
    name: str = ""


class Pet(_CamelModel):
    id: int = 0
    category: Category = Field(default_factory=Category)
    name: str = ""
    photo_urls: List[str] = Field(default_factory=list)
    tags: List[Category] = Field(default_factory=list)
    status: PetStatus = PetStatus.AVAILABLE


class Order(_CamelModel):
    id: int = 0
    pet_id: int = 0
    quantity: int = 0
    ship_date: str = ""
    status: str = ""
    complete: bool = False


class User(_CamelModel):
    id: int = 0
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    phone: str = ""
    user_status: int = 0


# ══════════════════════════════════════════════════════════════════════════
# Descriptors
# ══════════════════════════════════════════════════════════════════════════


def category_schema() -> TypeDescriptor:
    return obj({"id": integer(), "name": string()}).named("Category")


def pet_schema() -> TypeDescriptor:
    return obj({
        "id": integer(),
        "category": category_schema(),
        "name": string().example("Doggy"),
        "photoUrls": array(string()),
        "tags": array(category_schema()),
        "status": string().description("The pet's status in the store"),
    }).named("Pet")


def order_schema() -> TypeDescriptor:
    return obj({
        "id": integer(),
        "petId": integer(),
        "quantity": integer(),
        "shipDate": string(),
        "status": string(),
        "complete": boolean(),
    }).named("Order")


def user_schema() -> TypeDescriptor:
    return obj({
        "id": integer(),
        "username": string(),
        "firstName": string(),
        "lastName": string(),
        "email": string(),
        "password": string(),
        "phone": string(),
        "userStatus": integer(),
    }).named("User")


def inventory_schema() -> TypeDescriptor:
    return map_of(integer()).description("Pet count keyed by status")
