import logging
import os


def setup_logging(service_name: str, log_level: str | None = None) -> logging.Logger:
    """Setup logging configuration for a service.

    The level defaults to the LOG_LEVEL environment variable (INFO when unset).
    """
    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(f"%(asctime)s - {service_name} - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def validate_text_length(text: str, max_length: int) -> str:
    """Truncate text to ``max_length`` characters"""
    if max_length < 0:
        raise ValueError("max_length must not be negative")
    return text[:max_length]
