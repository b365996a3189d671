"""
Routedoc — Store Routes
=========================

What:  GET /store/inventory, GET/DELETE /store/order/{orderId}, POST /store/order.
How:   Stub handlers. Placing an order echoes the decoded order back.
"""

from routedoc.core import (
    Route,
    bind_param,
    delete,
    description,
    end,
    get,
    json_body,
    path,
    post,
    response,
)
from routedoc.core import reply
from routedoc.schemas.petstore import Order, PetStatus, inventory_schema, order_schema


def store() -> Route:
    return path("store").and_(
        inventory().or_(
            path("order").and_(
                find_order()
                .or_(delete_order())
                .or_(place_order())
            )
        )
    )


def order_id() -> Route:
    return bind_param("orderId", "Id of the order that needs to be fetched").document(
        response(404).description("Order not found"),
    )


def inventory() -> Route:
    return (
        get()
        .and_(path("inventory"))
        .document(
            description("Returns pet inventories by status"),
            response(200, inventory_schema()).description("Successful operation"),
        )
        .map(_inventory)
    )


def find_order() -> Route:
    return (
        get()
        .and_(order_id())
        .document(
            description("Find purchase order by ID"),
            response(200, order_schema()),
        )
        .map(lambda found_id: reply.json(Order(id=found_id)))
    )


def delete_order() -> Route:
    return (
        delete()
        .and_(order_id())
        .document(description("Delete purchase order by ID"), response(200))
        .map(lambda _order_id: "Deleted")
    )


def place_order() -> Route:
    return (
        post()
        .and_(end())
        .and_(json_body(order_schema(), Order))
        .document(
            description("Place an order for a pet"),
            response(200, order_schema()).description("A successful operation"),
        )
        .map(reply.json)
    )


def _inventory() -> reply.Reply:
    return reply.json({status.value: 0 for status in PetStatus})
