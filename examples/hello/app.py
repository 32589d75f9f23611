"""Hello World — the simplest waymark route table.

Demonstrates the path DSL, typed path parameters, verb sets, Response
chaining, and how an adapter turns "no route" into a 404.

Run:
    python app.py
"""

from waymark import Method, Router, integer, param, root, route, tail, verbs
from waymark.http.request import Request, SimpleRequestBuilder
from waymark.http.response import Response


def index(request: Request) -> Response:
    return Response.ok("Hello, World!", "text/plain")


def greet(request: Request) -> Response:
    return Response.ok(f"Hello, {request.params['name']}!", "text/plain")


def show_user(request: Request) -> Response:
    return Response.ok(f"user #{request.params.get_int('id')}")


def echo(request: Request) -> Response:
    return Response.ok(f"{request.verb} {request.path}")


def browse(request: Request) -> Response:
    pieces = request.params.get_paths("pieces") or ()
    return Response.ok(" > ".join(pieces))


def custom(request: Request) -> Response:
    return Response.ok("Created").with_status(201).with_header("X-Custom", "waymark")


router = Router(
    route(Method.GET, root, index).with_name("index"),
    route(Method.GET, root / "greet" / param("name"), greet),
    route(Method.GET, root / "user" / integer("id"), show_user).with_name("user"),
    route(verbs(Method.GET, Method.POST), root / "echo", echo),
    route(Method.GET, root / "files" / tail("pieces"), browse),
    route(Method.POST, root / "custom", custom),
    builder=SimpleRequestBuilder(),
)


def handle(method: str, target: str) -> Response:
    """What a transport adapter does: dispatch, then map None to 404/405."""
    response = router.dispatch(method, target)
    if response is not None:
        return response
    allowed = router.allowed_methods(target)
    if allowed:
        return Response.method_not_allowed({m.verb for m in allowed})
    return Response.not_found(f"Nothing at {target}")


if __name__ == "__main__":
    for method, target in [
        ("GET", "/"),
        ("GET", "/greet/alice"),
        ("GET", "/user/22"),
        ("POST", "/echo"),
        ("GET", "/files/docs/api/index.html"),
        ("DELETE", "/user/22"),
        ("GET", "/missing"),
    ]:
        response = handle(method, target)
        print(f"{method} {target} -> {response.status} {response.body!r}")
