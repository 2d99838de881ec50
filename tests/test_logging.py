# =============================================================================
# tests/test_logging.py - Request and Error Log Tests
# =============================================================================
# Covers the request logging middleware and the optional JSON-lines log
# files written by configure_logging().
# =============================================================================

import json
import logging
from unittest.mock import patch

import pytest

from app.logging_config import ERROR_LOGGER, REQUEST_LOGGER, configure_logging


def _request_records(caplog):
    return [record for record in caplog.records if record.name == REQUEST_LOGGER]


def _read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


@pytest.fixture
def log_files(tmp_path, settings, caplog):
    """Point both log files at tmp_path; detach the handlers afterwards."""
    request_log = tmp_path / "request.log"
    error_log = tmp_path / "error.log"
    configure_logging(settings.model_copy(update={
        "REQUEST_LOG_FILE": str(request_log),
        "ERROR_LOG_FILE": str(error_log),
    }))
    caplog.set_level(logging.INFO, logger=REQUEST_LOGGER)
    caplog.set_level(logging.INFO, logger=ERROR_LOGGER)

    yield request_log, error_log

    for name in (REQUEST_LOGGER, ERROR_LOGGER):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if getattr(handler, "wtwr_file", None):
                logger.removeHandler(handler)
                handler.close()


class TestRequestLogging:
    """One wtwr.requests record per request, whatever the outcome."""

    def test_successful_request(self, client, caplog):
        with caplog.at_level(logging.INFO, logger=REQUEST_LOGGER):
            client.get("/items")

        records = _request_records(caplog)
        assert len(records) == 1
        record = records[0]
        assert record.method == "GET"
        assert record.path == "/items"
        assert record.status_code == 200
        assert record.duration_ms >= 0

    def test_classified_error(self, client, caplog):
        with caplog.at_level(logging.INFO, logger=REQUEST_LOGGER):
            client.get("/users/me")

        assert [r.status_code for r in _request_records(caplog)] == [401]

    def test_unhandled_exception_still_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger=REQUEST_LOGGER), patch(
            "core.services.item_service.SupabaseClient.fetch_items",
            side_effect=RuntimeError("boom"),
        ):
            response = client.get("/items")

        assert response.status_code == 500
        assert response.json() == {"message": "An error has occurred on the server"}

        records = _request_records(caplog)
        assert len(records) == 1
        assert records[0].method == "GET"
        assert records[0].path == "/items"
        assert records[0].status_code == 500
        assert records[0].duration_ms >= 0


class TestLogFiles:
    """REQUEST_LOG_FILE and ERROR_LOG_FILE hold one JSON object per line."""

    def test_json_lines(self, client, login, log_files):
        request_log, error_log = log_files
        _, headers = login()
        token = headers["Authorization"].split(" ", 1)[1]

        client.get("/users/me", headers=headers)
        client.post("/signin", json={"email": "a@a.com", "password": "wrongpass1"})
        with patch(
            "core.services.item_service.SupabaseClient.fetch_items",
            side_effect=RuntimeError("boom"),
        ):
            client.get("/items")

        requests = _read_lines(request_log)
        assert {
            (line["method"], line["path"], line["status_code"]) for line in requests
        } >= {
            ("POST", "/signup", 201),
            ("POST", "/signin", 200),
            ("GET", "/users/me", 200),
            ("POST", "/signin", 401),
            ("GET", "/items", 500),
        }
        assert all(line["logger"] == REQUEST_LOGGER for line in requests)
        assert all("duration_ms" in line for line in requests)

        errors = _read_lines(error_log)
        server_errors = [line for line in errors if line.get("status_code") == 500]
        assert len(server_errors) == 1
        assert server_errors[0]["level"] == "error"
        assert "RuntimeError: boom" in server_errors[0]["stack"]

        client_errors = [line for line in errors if line.get("status_code") == 401]
        assert client_errors[0]["error_code"] == "UNAUTHORIZED"
        assert "stack" not in client_errors[0]

        for path in (request_log, error_log):
            text = path.read_text(encoding="utf-8")
            assert "password1" not in text
            assert "wrongpass1" not in text
            assert token not in text

    def test_handlers_not_duplicated(self, settings, log_files):
        request_log, error_log = log_files
        configure_logging(settings.model_copy(update={
            "REQUEST_LOG_FILE": str(request_log),
            "ERROR_LOG_FILE": str(error_log),
        }))

        handlers = [
            h for h in logging.getLogger(REQUEST_LOGGER).handlers
            if getattr(h, "wtwr_file", None) == str(request_log)
        ]
        assert len(handlers) == 1
