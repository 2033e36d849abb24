from __future__ import annotations

from boundforms import logger as package_logger
from boundforms.logging import configure_logging, get_logger
from boundforms.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(LOG_JSON=False, LOG_LEVEL="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_json_logging_renames_event_key(capsys) -> None:
    configure_logging(settings=Settings(LOG_JSON=True, LOG_LEVEL="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("form validated")

    captured = capsys.readouterr()
    assert '"message": "form validated"' in captured.err


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))


def test_extra_payload_is_lifted_into_event(capsys) -> None:
    configure_logging(settings=Settings(LOG_JSON=True, LOG_LEVEL="DEBUG"), force=True)
    logger = get_logger("tests.forms")
    logger.debug("Form validated", extra={"form": "PersonForm", "valid": True})

    captured = capsys.readouterr()
    assert '"form": "PersonForm"' in captured.err
    assert '"valid": true' in captured.err
    assert '"logger": "tests.forms"' in captured.err
    assert '"extra"' not in captured.err


def test_debug_events_are_filtered_below_configured_level(capsys) -> None:
    configure_logging(settings=Settings(LOG_JSON=True, LOG_LEVEL="WARNING"), force=True)
    logger = get_logger("tests.quiet")
    logger.debug("Field rejected", extra={"field": "name"})

    captured = capsys.readouterr()
    assert "Field rejected" not in captured.err
