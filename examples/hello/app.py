"""Hello World — the simplest perch app.

Demonstrates path captures, per-method handlers, the any-method fallback,
trailing-slash redirects, and a custom error responder.

Run:
    python app.py
"""

from perch import App, Request, Response, Router

router = Router()


@router.route("/")
def index(request: Request):
    return "Hello, World!"


@router.route("/greet/<name>")
def greet(request: Request):
    return f"Hello, {request.params['name']}!"


@router.route("/docs/")
def docs(request: Request):
    return "Documentation index"


def show_note(request: Request):
    return f"Note {request.params['id']}"


def delete_note(request: Request):
    return Response("").with_status(204)


def note_fallback(request: Request):
    return Response(f"{request.method} is not supported yet").with_status(501)


router.register("/notes/<id>", "GET", show_note, "DELETE", delete_note, "*", note_fallback)


def render_error(request: Request, status: int, message: str):
    return f"{status}: nothing at {request.path} ({message})"


app = App(router, error_responder=render_error)

if __name__ == "__main__":
    app.run()
