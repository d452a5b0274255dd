# SessionWire — Logging configuration (rotating file + stdout, verbose wire trace)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import logging.handlers
import os
import sys


VERBOSE_LOGGER = "sessionwire.verbose"

FMT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"


def configure_logging(level: str = "INFO", log_dir: str = "logs") -> None:
	"""Configure root logger with a rotating file handler and stdout.

	The format is single-line and includes time, level, logger, and message.
	"""
	os.makedirs(log_dir, exist_ok=True)
	log_path = os.path.join(log_dir, "sessionwire.log")

	root = logging.getLogger()
	root.setLevel(getattr(logging, level.upper(), logging.INFO))

	# Clear existing handlers in case of re-init
	for h in list(root.handlers):
		root.removeHandler(h)

	stream = logging.StreamHandler(sys.stdout)
	stream.setFormatter(logging.Formatter(FMT))
	root.addHandler(stream)

	file_handler = logging.handlers.RotatingFileHandler(
		log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
	)
	file_handler.setFormatter(logging.Formatter(FMT))
	root.addHandler(file_handler)


def enable_verbose_stream() -> logging.Logger:
	"""Route the transport wire trace to stderr. Idempotent."""
	logger = logging.getLogger(VERBOSE_LOGGER)
	logger.setLevel(logging.DEBUG)
	# the trace has its own stderr handler; keep it out of the root handlers
	logger.propagate = False
	if not any(getattr(h, "_sessionwire_verbose", False) for h in logger.handlers):
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(message)s"))
		handler._sessionwire_verbose = True
		logger.addHandler(handler)
	return logger
