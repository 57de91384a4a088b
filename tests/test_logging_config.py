
import structlog

from logging_config import SERVICE_NAME, configure_logging


def test_configure_logging_selects_renderer_and_tags_service():
    configure_logging(json_output=False)

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    event = {}
    for processor in processors:
        if getattr(processor, "__name__", "") == "_add_service":
            event = processor(None, "info", event)
    assert event["service"] == SERVICE_NAME

    configure_logging()
    assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
