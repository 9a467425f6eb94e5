import json
import logging

from fastapi import FastAPI
from starlette.testclient import TestClient

from pack.core.logging.builder import setup_logging
from pack.core.logging.middleware import RequestIDMiddleware


class StdoutSettings:
    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = True
    LOG_DIR = None
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENV = "production"
    ENABLE_SQL_LOGGING = False


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    def hello():
        logging.getLogger("pack").info("handling hello")
        return {"ok": True}

    return app


def test_request_id_in_response_and_logs(capsys):
    setup_logging(StdoutSettings())
    client = TestClient(_app())

    resp = client.get("/hello")

    assert resp.status_code == 200
    rid = resp.headers.get("X-Request-ID")
    assert rid

    captured = capsys.readouterr()
    records = []
    for line in (captured.out + captured.err).splitlines():
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError:
            continue

    assert any(r.get("request_id") == rid and r.get("message") == "handling hello" for r in records)


def test_incoming_request_id_is_kept():
    client = TestClient(_app())

    resp = client.get("/hello", headers={"X-Request-ID": "upstream-1"})

    assert resp.headers["X-Request-ID"] == "upstream-1"
