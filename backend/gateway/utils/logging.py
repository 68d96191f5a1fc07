"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- file_id
- duration_ms

Usage:
    from gateway.utils.logging import configure_logging, log_upload_completed

    configure_logging('image-gateway', 'INFO')
    log_upload_completed(logger, file_id='1AbC', size_bytes=2048, duration_ms=312.5)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        # Create JSON formatter
        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(levelname)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (platform log collectors read stdout)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        # Configure root logger
        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())

        # Google client libraries log every discovery and HTTP call
        logging.getLogger("googleapiclient").setLevel(logging.WARNING)
        logging.getLogger("google_auth_oauthlib").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)

        cls._configured = True


def _build_log_extra(
    event: str,
    file_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        file_id: Optional Drive file ID
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if file_id:
        extra["file_id"] = file_id
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Request events

def log_request(
    logger: logging.Logger,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    **kwargs
):
    """Log a completed HTTP request."""
    extra = _build_log_extra(
        event="http_request",
        duration_ms=duration_ms,
        method=method,
        path=path,
        status_code=status_code,
        **kwargs
    )

    logger.info(f"{method} {path} {status_code}", extra=extra)


# Image events

def log_upload_completed(
    logger: logging.Logger,
    file_id: str,
    size_bytes: int,
    duration_ms: Optional[float] = None,
    mime_type: Optional[str] = None,
    **kwargs
):
    """
    Log image upload completion.

    Args:
        logger: Logger instance
        file_id: Drive file ID (required)
        size_bytes: Uploaded size (required)
        duration_ms: Optional duration in milliseconds
        mime_type: Optional declared MIME type
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_completed",
        file_id=file_id,
        duration_ms=duration_ms,
        size_bytes=size_bytes,
        **kwargs
    )
    if mime_type:
        extra["mime_type"] = mime_type

    logger.info(f"Upload completed: {file_id}", extra=extra)


def log_image_deleted(
    logger: logging.Logger,
    file_id: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log image deletion."""
    extra = _build_log_extra(
        event="image_deleted",
        file_id=file_id,
        duration_ms=duration_ms,
        **kwargs
    )

    logger.info(f"Image deleted: {file_id}", extra=extra)


# Provider event functions

def log_provider_request(
    logger: logging.Logger,
    operation: str,
    duration_ms: Optional[float] = None,
    file_id: Optional[str] = None,
    **kwargs
):
    """
    Log a Google Drive API request.

    Args:
        logger: Logger instance
        operation: Operation name (upload, get_metadata, stream, delete, ...) (required)
        duration_ms: Optional duration in milliseconds
        file_id: Optional Drive file ID
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="provider_request",
        file_id=file_id,
        duration_ms=duration_ms,
        provider="gdrive",
        operation=operation,
        **kwargs
    )

    logger.debug(f"Provider request: gdrive.{operation}", extra=extra)


def log_provider_failure(
    logger: logging.Logger,
    operation: str,
    error: str,
    duration_ms: Optional[float] = None,
    file_id: Optional[str] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a Google Drive API failure.

    Args:
        logger: Logger instance
        operation: Operation name (required)
        error: Error message (required)
        duration_ms: Optional duration in milliseconds
        file_id: Optional Drive file ID
        include_traceback: Whether to include stack trace (default: False for provider failures)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="provider_failure",
        file_id=file_id,
        duration_ms=duration_ms,
        provider="gdrive",
        operation=operation,
        error=str(error),
        **kwargs
    )

    message = f"Provider failure: gdrive.{operation} - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.error(message, extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
