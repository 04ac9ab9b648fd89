"""
Logging configuration with structured logging
"""

import logging
import logging.handlers
import sys
from pathlib import Path
import structlog
from datetime import datetime, timezone
import json


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    EXTRA_FIELDS = (
        "user_id", "request_id", "ip_address", "endpoint",
        "method", "status_code", "response_time"
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, ensure_ascii=False)


class LoggingConfig:
    """Centralized logging configuration"""

    def __init__(self, log_level: str = "INFO", log_dir: str = "logs", log_to_file: bool = False):
        self.log_level = getattr(logging, log_level.upper(), logging.INFO)
        self.log_dir = Path(log_dir)
        self.log_to_file = log_to_file

    def apply(self):
        self._configure_structlog()
        self._configure_standard_logging()

    def _configure_structlog(self):
        """Configure structlog for structured logging"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer()
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _configure_standard_logging(self):
        """Configure standard Python logging"""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        root_logger.addHandler(console_handler)

        if self.log_to_file:
            self._setup_file_handlers(root_logger)

        self._configure_specific_loggers()

    def _setup_file_handlers(self, root_logger: logging.Logger):
        """Setup rotating file handlers"""
        self.log_dir.mkdir(parents=True, exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / "app.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        app_handler.setLevel(self.log_level)
        app_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(app_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / "error.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=10
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(error_handler)

        access_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / "access.log",
            maxBytes=50 * 1024 * 1024,  # 50MB
            backupCount=7
        )
        access_handler.setLevel(logging.INFO)
        access_handler.setFormatter(JSONFormatter())
        logging.getLogger("access").addHandler(access_handler)

    def _configure_specific_loggers(self):
        """Configure specific loggers with appropriate levels"""
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)
        logging.getLogger("fastapi").setLevel(logging.INFO)
        logging.getLogger("asyncio").setLevel(logging.WARNING)
        logging.getLogger("multipart").setLevel(logging.WARNING)

        access_logger = logging.getLogger("access")
        access_logger.setLevel(logging.INFO)


class RequestLogger:
    """Request logging utility"""

    def __init__(self):
        self.access_logger = logging.getLogger("access")

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        response_time: float,
        ip_address: str,
        user_id: str = ""
    ):
        """Log HTTP request"""
        extra = {
            "method": method,
            "endpoint": path,
            "status_code": status_code,
            "response_time": response_time,
            "ip_address": ip_address,
            "user_id": user_id
        }

        message = f"{method} {path} - {status_code} - {response_time:.3f}s"

        if status_code >= 500:
            self.access_logger.error(message, extra=extra)
        elif status_code >= 400:
            self.access_logger.warning(message, extra=extra)
        else:
            self.access_logger.info(message, extra=extra)


def configure_logging(log_level: str = "INFO", log_dir: str = "logs", log_to_file: bool = False) -> LoggingConfig:
    """Apply logging configuration for the process"""
    config = LoggingConfig(log_level=log_level, log_dir=log_dir, log_to_file=log_to_file)
    config.apply()
    return config


request_logger = RequestLogger()
