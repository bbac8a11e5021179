"""
HTTP Server Example

Serves a couple of literal and parameterised routes.

Run:
  python examples/http_server.py

Then try:
  curl -i http://127.0.0.1:8080/
  curl -i http://127.0.0.1:8080/users/alice
  curl -i http://127.0.0.1:8080/posts/42/comments/7
  curl -i -X POST http://127.0.0.1:8080/echo -d 'hello there'
  curl -i http://127.0.0.1:8080/missing
"""

from __future__ import annotations

import logging

from pathwire import HttpMethod, HttpRequest, HttpServer, ResponseWriter, ServerConfig, init_logger


def handle_root(rw: ResponseWriter, _req: HttpRequest) -> None:
    rw.headers["Content-Type"] = "text/plain"
    rw.write("Welcome to our custom HTTP server!\n")


def handle_user(rw: ResponseWriter, req: HttpRequest) -> None:
    rw.headers["Content-Type"] = "text/plain"
    rw.write(f"user: {req.path_params['id']}\n")


def handle_comment(rw: ResponseWriter, req: HttpRequest) -> None:
    rw.headers["Content-Type"] = "text/plain"
    rw.write("post {postId}, comment {commentId}\n".format(**req.path_params))


def handle_echo(rw: ResponseWriter, req: HttpRequest) -> None:
    # Echo the raw body bytes back.
    rw.headers["Content-Type"] = req.headers.get("content-type", "application/octet-stream")
    rw.write(req.body)


def main() -> None:
    init_logger(logging.DEBUG)
    server = HttpServer(ServerConfig(host="127.0.0.1", port=8080))

    router = server.router
    router.register_route(HttpMethod.GET, "/", handle_root)
    router.register_route(HttpMethod.GET, "/users/{id}", handle_user)
    router.register_route(HttpMethod.GET, "/posts/{postId}/comments/{commentId}", handle_comment)
    router.register_route(HttpMethod.POST, "/echo", handle_echo)

    print("Listening on http://127.0.0.1:8080")
    print("Press Ctrl-C to stop.")
    server.run()


if __name__ == "__main__":
    main()
