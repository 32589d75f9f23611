"""Auth — token check, body validation, and JSON rendering as middleware.

Authentication here is plain user code: a before step that looks up the
``Authorization`` header and either attaches the user to the request or
answers 401 on the spot. A second before step rejects empty bodies, and
an after step renders dict bodies as JSON.

Demonstrates:
- ``before(...).then(...)`` chains that short-circuit
- ``after(..., when=Response)`` response transformation
- async handlers dispatched from sync and async code

Run:
    python app.py
"""

import json
import threading
from dataclasses import dataclass

import anyio

from waymark import Method, Router, after, before, integer, root, route
from waymark.http.request import Request, RequestExtra, SimpleRequestBuilder
from waymark.http.response import Response


@dataclass(frozen=True, slots=True)
class User:
    token: str
    email: str


USERS: dict[str, User] = {"123456": User("123456", "jonh@gmail.com")}

_notes: dict[int, str] = {}
_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


def authenticate(request: Request) -> Request | Response:
    token = request.headers.get("Authorization")
    user = USERS.get(token) if token else None
    if user is None:
        return Response.unauthorized({"error": "unauthorized"})
    return request.with_auth(user)


def require_body(request: Request) -> Request | Response:
    if not request.body:
        return Response.bad_request({"error": "empty body"})
    return request


def render_json(request: Request, response: Response) -> Response:
    if isinstance(response.body, (dict, list)):
        return response.with_body(json.dumps(response.body)).with_content_type("application/json")
    return response


auth = before(authenticate)
validation = before(require_body)
as_json = after(render_json, when=Response)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def whoami(request: Request) -> Response:
    return Response.ok({"email": request.auth.email})


async def save_note(request: Request) -> Response:
    await anyio.sleep(0)
    with _lock:
        note_id = len(_notes) + 1
        _notes[note_id] = str(request.body)
    return Response(201, {"id": note_id})


def read_note(request: Request) -> Response:
    with _lock:
        text = _notes.get(request.params["id"])
    if text is None:
        return Response.not_found({"error": "no such note"})
    return Response.ok({"id": request.params["id"], "text": text})


notes = root / "notes"

router = Router(
    auth.then(route(Method.GET, root / "me", whoami)).then(as_json),
    auth.then(validation).then(route(Method.POST, notes, save_note)).then(as_json),
    auth.then(route(Method.GET, notes / integer("id"), read_note)).then(as_json),
    builder=SimpleRequestBuilder(),
)


if __name__ == "__main__":
    headers = {"Authorization": "123456"}
    print(router.dispatch("GET", "/me"))
    print(router.dispatch("GET", "/me", RequestExtra(headers=headers)))
    print(router.dispatch("POST", "/notes", RequestExtra(body="hello", headers=headers)))
    print(router.dispatch("GET", "/notes/1", RequestExtra(headers=headers)))
