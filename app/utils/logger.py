import logging
import sys
import os
from types import FrameType
from loguru import logger
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry._logs import set_logger_provider

from app.core.telemetry import build_resource, otlp_insecure

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level}</level>: "
    "<cyan>[{name}:{line}]</cyan> - <level>{message}</level>"
)

# Third-party loggers whose own handlers are replaced by the Loguru bridge
HIJACKED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "gunicorn.error",
    "gunicorn.access",
    "fastapi",
    "sqlalchemy.engine",
)


class InterceptHandler(logging.Handler):
    """
    Redirects standard logging to Loguru.
    Includes a safety check to prevent infinite recursion with OTel.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # OTel logs its own export failures; forwarding them would loop
        if record.name.startswith("opentelemetry"):
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _add_otel_sink(endpoint: str, level: str) -> None:
    logger_provider = LoggerProvider(resource=build_resource())
    set_logger_provider(logger_provider)

    exporter = OTLPLogExporter(endpoint=endpoint, insecure=otlp_insecure())
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(exporter))

    otel_handler = LoggingHandler(level=level, logger_provider=logger_provider)
    logger.add(otel_handler, level=level, serialize=True)


def setup_logging(level: str | None = None):
    """
    Route every log record through Loguru.

    Standard-library loggers (uvicorn, gunicorn, SQLAlchemy) are bridged with
    InterceptHandler, a colored stderr sink is installed, and when
    OTEL_EXPORTER_OTLP_ENDPOINT is set records are also exported over OTLP.

    Parameters:
        level (str | None): Minimum level; defaults to the LOG_LEVEL env var, then INFO.

    Returns:
        The configured Loguru logger.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(level)

    for name in HIJACKED_LOGGERS:
        log = logging.getLogger(name)
        log.handlers = []
        log.propagate = False
        log.addHandler(InterceptHandler())

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=LOG_FORMAT,
        colorize=True,
        enqueue=True,  # Async safety
    )

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        try:
            _add_otel_sink(endpoint, level)
            logger.info("Logging (Loguru Sink) Active.")
        except Exception as e:
            # Print to stderr directly if OTel fails, don't crash the app
            print(f"Log Setup Failed: {e}", file=sys.stderr)

    return logger
