"""
Routedoc — User Routes
========================

What:  GET /user/login, GET /user/logout, POST /user/createWithArray,
       POST /user/createWithList, GET/PUT/DELETE /user/{username}, POST /user.
How:   Literal sub-paths are tried before `{username}`, which would otherwise
       accept "login" or "logout" as a user name.

createWithArray and createWithList are one declaration reached through two
literal alternatives; the document lists both paths.
"""

from datetime import datetime, timedelta, timezone
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
    header,
    json_body,
    path,
    post,
    put,
    response,
    string,
)
from routedoc.core import reply
from routedoc.schemas.petstore import User, user_schema

RATE_LIMIT_PER_HOUR = 5000
SESSION_LIFETIME = timedelta(hours=1)


def user() -> Route:
    return path("user").and_(
        login()
        .or_(logout())
        .or_(path("createWithArray").or_(path("createWithList")).and_(create_users_with_array()))
        .or_(get_user())
        .or_(update_user())
        .or_(delete_user())
        .or_(create_user())
    )


# ── Shared pieces ─────────────────────────────────────────────────────────

def username() -> Route:
    return bind_param("username", "The name that needs to be fetched", kind=ParamKind.STRING).document(
        response(404).description("User not found"),
    )


def user_json() -> Route:
    return end().and_(json_body(user_schema(), User))


# ── Operations ────────────────────────────────────────────────────────────

def get_user() -> Route:
    return (
        get()
        .and_(username())
        .document(
            description("Get user by user name"),
            response(200, user_schema()).description("Successful operation"),
        )
        .map(lambda name: reply.json(User(username=name)))
    )


def update_user() -> Route:
    return (
        put()
        .and_(username())
        .and_(user_json())
        .document(description("Update a user"))
        .map(lambda name, _user: f"Updated user: {name}")
    )


def delete_user() -> Route:
    return (
        delete()
        .and_(username())
        .document(description("Delete a user"))
        .map(lambda name: f"Deleted: {name}")
    )


def login() -> Route:
    return (
        get()
        .and_(path("login"))
        .and_(bind_param("username", "The username for login", Location.QUERY, ParamKind.STRING))
        .and_(bind_param("password", "The password for login in clear text", Location.QUERY, ParamKind.STRING))
        .document(
            description("Logs the user into the system"),
            response(200, string())
            .mime("text/plain")
            .header(header("X-Expires-After").description("Date in UTC when token expires"))
            .header(header("X-Rate-Limit").description("Calls per hour allowed by the user")),
            response(400).description("Invalid username/password supplied"),
        )
        .map(_login)
    )


def logout() -> Route:
    return (
        get()
        .and_(path("logout"))
        .document(description("Logs out current logged in user session"))
        .map(lambda: "You have been logged out!")
    )


def create_user() -> Route:
    return (
        post()
        .and_(user_json())
        .document(description("Creates a user"))
        .map(lambda created: f"Created: {created.username}!")
    )


def create_users_with_array() -> Route:
    return (
        post()
        .and_(end())
        .and_(json_body(array(user_schema()).description("List of user objects"), List[User]))
        .document(description("Creates a list of users at once with a given array"))
        .map(lambda users: f"Created {len(users)} users.")
    )


# ── Handlers ──────────────────────────────────────────────────────────────

def _login(username: str, password: str) -> reply.Reply:
    expires = datetime.now(timezone.utc) + SESSION_LIFETIME
    return reply.text(
        "Logged in!",
        headers={
            "X-Expires-After": expires.isoformat(timespec="seconds"),
            "X-Rate-Limit": str(RATE_LIMIT_PER_HOUR),
        },
    )
