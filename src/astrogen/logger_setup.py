from __future__ import annotations
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = "INFO") -> None:
	if isinstance(level, str):
		level = getattr(logging, level.upper(), logging.INFO)
	logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, force=True)


# Convenience function to get module-specific loggers
def get_logger(name: str) -> logging.Logger:
	return logging.getLogger(name)
