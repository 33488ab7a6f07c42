import logging

import pytest
from starlette.requests import Request

from blog_service.utils.event_logger import ALLOWED_EVENT_TYPES, client_ip, log_auth_event


def make_request(client=("203.0.113.7", 5000), headers=None):
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/auth/login",
        "headers": raw_headers,
        "client": client,
    }
    return Request(scope)


def test_logs_event_without_secrets(caplog):
    request = make_request(headers={"User-Agent": "pytest"})
    with caplog.at_level(logging.INFO, logger="blog_service.auth_events"):
        log_auth_event("login_success", "alice", request, user_id="u-1")

    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert "AUTH login_success" in message
    assert "username=alice" in message
    assert "ip=203.0.113.7" in message
    assert "user_agent=pytest" in message
    assert "password" not in message


def test_rejects_unknown_event_type():
    with pytest.raises(ValueError):
        log_auth_event("password_reset", "alice", make_request())


def test_forwarded_for_fallback():
    request = make_request(client=None, headers={"X-Forwarded-For": "198.51.100.1, 10.0.0.1"})
    assert client_ip(request) == "198.51.100.1"


def test_allowed_event_types():
    assert ALLOWED_EVENT_TYPES == {
        "register_success", "register_conflict", "login_success", "login_failure", "logout",
    }
