# Routes package init
"""
Routedoc — Petstore Route Tree
================================

What:  The complete Petstore API as one composed Route.

Route Inventory:
    - pet.py:    GET/DELETE /pet/{petId}, POST/PUT /pet, GET /pet/findByStatus
    - store.py:  GET /store/inventory, GET/DELETE /store/order/{orderId},
                 POST /store/order
    - user.py:   GET /user/login, GET /user/logout, POST /user/createWithArray,
                 POST /user/createWithList, GET/PUT/DELETE /user/{username},
                 POST /user

The same tree is dispatched against and aggregated into the OpenAPI document.
"""

from routedoc.core import Route
from routedoc.routes.pet import pet
from routedoc.routes.store import store
from routedoc.routes.user import user


def api() -> Route:
    return pet().or_(store()).or_(user())
