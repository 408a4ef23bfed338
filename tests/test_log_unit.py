import logging

import pytest

import njs.log as log_module
from njs.log import (
    bind_log_context,
    get_log_context,
    log_exception,
    log_info,
    set_log_context,
    timed,
)


@pytest.fixture(autouse=True)
def _reset_log_context_between_tests():
    # `set_log_context()` is intentionally persistent; avoid leaking state.
    log_module._CTX.set(None)
    yield
    log_module._CTX.set(None)


def test_bind_log_context_is_scoped_and_returns_copies() -> None:
    assert get_log_context() == {}

    with bind_log_context(op="search", query="python", ignored=None):
        ctx = get_log_context()
        assert ctx == {"op": "search", "query": "python"}
        ctx["op"] = "mutated"
        assert get_log_context()["op"] == "search"

    assert get_log_context() == {}


def test_set_log_context_persists_fields() -> None:
    set_log_context(run_id="abc123")
    assert get_log_context()["run_id"] == "abc123"


def test_event_line_orders_priority_keys_first(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("njs.test.log_unit.order")

    with caplog.at_level(logging.INFO, logger=logger.name), bind_log_context(op="search"):
        log_info(logger, "search.page.done", zeta=1, page=2, count=5, query="java dev")

    assert caplog.records[0].message == (
        "search.page.done op=search query=java dev page=2 count=5 zeta=1"
    )


def test_formatting_truncation_and_redaction_via_log_exception(
    caplog: pytest.LogCaptureFixture,
) -> None:
    logger = logging.getLogger("njs.test.log_unit")
    logger.setLevel(logging.ERROR)

    with caplog.at_level(logging.ERROR, logger=logger.name):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            log_exception(
                logger,
                "event.test",
                session_token="secret",  # noqa: S106 (test redaction behavior)
                long_value="x" * 400,
                optional_field=None,
                items=[1, 2, 3, 4, 5],
                short_items=[1, None, "x"],
                meta={"a": 1},
                flag=False,
            )

    assert len(caplog.records) == 1
    record = caplog.records[0]
    msg = record.message
    assert record.exc_info is not None
    assert "session_token=***" in msg
    assert "long_value=" in msg and "..." in msg
    assert "items=[len=5]" in msg
    assert "short_items=[1,null,x]" in msg
    assert "meta={len=1}" in msg
    assert "flag=false" in msg
    assert "optional_field=" not in msg


def test_timed_logs_ok_and_error(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("njs.test.log_unit.timed")

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        with timed(logger, "work", page=1):
            pass
        with pytest.raises(ValueError), timed(logger, "work", page=2):
            raise ValueError("bad")

    messages = [r.message for r in caplog.records]
    assert messages[0] == "work.start page=1"
    assert messages[1].startswith("work.ok duration_ms=")
    assert messages[3].startswith("work.error duration_ms=")
    assert "exc=ValueError" in messages[3]
    assert caplog.records[3].levelno == logging.ERROR


def test_log_exception_noop_when_error_level_disabled(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("njs.test.log_unit.disabled")
    logger.setLevel(logging.CRITICAL)  # ERROR disabled
    logger.propagate = False

    with caplog.at_level(logging.DEBUG):
        log_exception(logger, "event.should_not_log", error="x")

    assert caplog.records == []
