import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: int = logging.INFO):
    """
    Configures and sets up structured JSON logging for the gateway.

    Installs a JSON formatter that includes timestamp, level, logger name,
    message, trace_id and span_id on a stdout stream handler. The root
    logger and the Uvicorn loggers share that handler so request logs and
    application logs come out in one format.

    Calling it more than once is safe: existing handlers are replaced.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)

        u_logger.handlers = []

        u_logger.addHandler(stream_handler)

        u_logger.propagate = False

    return root_logger
