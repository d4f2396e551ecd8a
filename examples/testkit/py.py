import io
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "py" / "src"))

from handlerspec import (  # noqa: E402
    describe,
    fn,
    html,
    it,
    modify_handler,
    not_found,
    redirect,
    should_200,
    should_300_to,
    should_404,
    should_change,
    should_have_selector,
    should_not_300_to,
)


def site(request, db):
    user = request.header("x-user")
    if request.path == "/":
        return html(200, f"<h1 class='title'>{len(db['posts'])} posts</h1>")
    if request.path == "/posts" and request.method == "POST":
        if not user:
            return redirect("/login")
        db["posts"].append(request.form().get("title", [""])[0])
        return redirect("/")
    return not_found()


def as_user(name):
    def transform(handler):
        def wrapped(request, db):
            headers = dict(request.headers)
            headers["x-user"] = [name]
            return handler(type(request)(request.method, request.path, request.query, headers, request.body), db)

        return wrapped

    return transform


def main() -> None:
    closed = []
    suite = fn(
        site,
        lambda: {"posts": []},
        lambda db: closed.append(db),
        [
            it("renders the home page", lambda s: should_have_selector(s, "h1.title", s.get("/"))),
            it("404s unknown pages", lambda s: should_404(s, s.get("/nope"))),
            describe(
                "posting",
                [
                    it("requires a login", lambda s: should_300_to(s, "/login", s.post("/posts", {"title": "hi"}))),
                    modify_handler(
                        as_user("ada"),
                        [
                            it(
                                "adds a post",
                                lambda s: should_change(
                                    s,
                                    lambda n: n + 1,
                                    lambda db: len(db["posts"]),
                                    lambda s: should_not_300_to(s, "/login", s.post("/posts", {"title": "hi"})),
                                ),
                            ),
                            it("still serves the home page", lambda s: should_200(s, s.get("/"))),
                        ],
                    ),
                ],
            ),
        ],
    )

    stream = io.StringIO()
    result = unittest.TextTestRunner(stream=stream, verbosity=2).run(suite.to_suite("BlogSpec"))

    assert result.wasSuccessful(), stream.getvalue()
    assert len(closed) == 1
    assert closed[0]["posts"] == ["hi"]

    print("examples/testkit/py.py: PASS")


if __name__ == "__main__":
    main()
