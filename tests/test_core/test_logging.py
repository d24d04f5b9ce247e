"""Tests for log formatting and filtering."""

from loguru import logger

from brandmotion.core.logging import _plain_format, _production_filter, get_logger


def _capture(level: str = "DEBUG", **sink_options) -> tuple[list[str], int]:
    messages: list[str] = []
    handler_id = logger.add(messages.append, level=level, format=_plain_format, **sink_options)
    return messages, handler_id


class TestPlainFormat:
    def test_component_and_job_first(self):
        messages, handler_id = _capture()
        try:
            get_logger("brandmotion.video.orchestrator").bind(
                job_id="abc123", frames=264, fps=24
            ).info("export_job_complete")
        finally:
            logger.remove(handler_id)

        (line,) = messages
        assert "| orchestrator | export_job_complete job=abc123 fps=24 frames=264" in line

    def test_no_context(self):
        messages, handler_id = _capture()
        try:
            get_logger("brandmotion.main").info("brandmotion_started")
        finally:
            logger.remove(handler_id)

        assert messages[0].rstrip().endswith("| main | brandmotion_started")


class TestProductionFilter:
    def test_polling_hidden_at_info(self):
        messages, handler_id = _capture(level="INFO", filter=_production_filter)
        try:
            log = get_logger("uvicorn.access")
            log.info('127.0.0.1 - "GET /api/jobs/abc HTTP/1.1" 200')
            log.info('127.0.0.1 - "GET /health HTTP/1.1" 200')
            log.info('127.0.0.1 - "POST /api/export HTTP/1.1" 202')
        finally:
            logger.remove(handler_id)

        assert len(messages) == 1
        assert "POST /api/export" in messages[0]
