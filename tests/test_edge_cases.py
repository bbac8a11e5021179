"""Edge case tests for methods, config, logging and the response writer."""

import io
import logging

import pytest

from pathwire import ConfigurationError, HttpMethod, ResponseWriter, ServerConfig, init_logger
from pathwire.http.message import HttpResponse


class TestHttpMethod:
    def test_members_compare_equal_to_strings(self):
        assert HttpMethod.GET == "GET"
        assert str(HttpMethod.DELETE) == "DELETE"

    def test_full_verb_set(self):
        assert {m.value for m in HttpMethod} == {
            "GET", "HEAD", "OPTIONS", "TRACE", "PUT", "DELETE", "POST", "PATCH", "CONNECT",
        }

    def test_parse(self):
        assert HttpMethod.parse("patch") is HttpMethod.PATCH
        assert HttpMethod.parse(HttpMethod.HEAD) is HttpMethod.HEAD
        assert HttpMethod.parse("BREW") is None
        assert HttpMethod.parse(None) is None


class TestServerConfig:
    def test_defaults(self):
        config = ServerConfig()
        assert config.address == "127.0.0.1:8080"
        assert config.max_header_bytes == 64 * 1024

    def test_frozen(self):
        config = ServerConfig()
        with pytest.raises(AttributeError):
            config.port = 1

    @pytest.mark.parametrize(
        "kwargs",
        [{"port": -1}, {"port": 70000}, {"max_header_bytes": 0},
         {"max_body_bytes": 0}, {"max_body_bytes": -5}],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            ServerConfig(**kwargs)


class TestResponseWriter:
    def test_write_implies_200(self):
        rw = ResponseWriter()
        assert not rw.header_written
        rw.write("hi")
        assert rw.status == 200
        assert rw.body == b"hi"

    def test_first_status_wins(self):
        rw = ResponseWriter()
        rw.write_header(404)
        rw.write_header(200)
        rw.write(b"x")
        assert rw.status == 404

    def test_bulk_header_helpers_lower_case_keys(self):
        rw = ResponseWriter()
        rw.headers.update({"Content-Type": "text/html"}, X_Extra="1")
        rw.headers.update([("X-Trace", "abc")])
        assert rw.headers.setdefault("Content-TYPE", "text/plain") == "text/html"
        rw.headers.setdefault("Cache-Control", "no-store")

        assert dict(rw.headers) == {
            "content-type": "text/html",
            "x_extra": "1",
            "x-trace": "abc",
            "cache-control": "no-store",
        }
        assert rw.headers.pop("X-TRACE") == "abc"
        assert rw.headers.pop("X-Missing", None) is None
        del rw.headers["Cache-Control"]
        assert "cache-control" not in rw.headers
        with pytest.raises(KeyError):
            rw.headers.pop("X-Missing")

    def test_headers_are_case_insensitive(self):
        rw = ResponseWriter()
        rw.headers["Content-Type"] = "text/plain"
        assert "content-type" in rw.headers
        assert rw.headers.get("CONTENT-TYPE") == "text/plain"
        assert rw.to_response().headers == {"content-type": "text/plain"}

    def test_text_response_helper(self):
        resp = HttpResponse.text("nope", status=400, headers={"X-Reason": "bad"})
        assert resp.status == 400
        assert resp.headers == {"content-type": "text/plain; charset=utf-8", "x-reason": "bad"}
        assert resp.body == b"nope"


class TestInitLogger:
    def teardown_method(self):
        logger = logging.getLogger("pathwire")
        for handler in list(logger.handlers):
            if getattr(handler, "_pathwire", False):
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_writes_message_without_level_name(self):
        stream = io.StringIO()
        logger = init_logger(logging.DEBUG, stream=stream)
        logging.getLogger("pathwire.routing.router").debug("Received request: GET /x")

        line = stream.getvalue().strip()
        assert line.endswith("Received request: GET /x")
        assert "DEBUG" not in line
        assert logger.name == "pathwire"

    def test_default_level_is_error(self):
        stream = io.StringIO()
        init_logger(stream=stream)
        logging.getLogger("pathwire").warning("quiet")
        assert stream.getvalue() == ""

    def test_repeated_init_does_not_stack_handlers(self):
        init_logger(logging.INFO, stream=io.StringIO())
        logger = init_logger(logging.INFO, stream=io.StringIO())
        assert sum(getattr(h, "_pathwire", False) for h in logger.handlers) == 1
