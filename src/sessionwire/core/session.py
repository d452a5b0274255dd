# SessionWire — HTTP session: cookies, layered options, pacing, transaction log
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Any, Mapping, Optional

from ..config import Settings, settings as default_settings
from ..logging_config import enable_verbose_stream
from ..utils.io import make_temp_file
from ..utils.urls import encode_form
from .delay import DelayGate
from .headers import HeaderParser, ResponseHeaders
from .netlog import TransactionLogger
from .options import OptionStore
from .transport import Transport


logger = logging.getLogger(__name__)


class Session:
	"""Sequential GET/POST requests sharing cookies and options.

	Per-request options and header lines are dropped after every request;
	session options persist. Use as a context manager, or call close().
	"""

	transport_class = Transport

	def __init__(self, enable_cookies: bool = False, settings: Optional[Settings] = None) -> None:
		cfg = settings or default_settings
		self.options = OptionStore(cfg.default_options())
		self.cookie_file: Optional[str] = None
		if enable_cookies:
			self.cookie_file = make_temp_file(cfg.cookie_prefix, cfg.cookie_dir)
			self.options.default["cookie_file"] = self.cookie_file
			self.options.default["cookie_jar"] = self.cookie_file
		self.parser = HeaderParser()
		self.delay = DelayGate()
		self.netlog = TransactionLogger()
		self.transport: Optional[Transport] = None
		self._last_body: Optional[str] = None

	def set_request_option(self, key: str, value: Any) -> None:
		"""Option for the next request only."""
		self.options.set_request_option(key, value)

	def set_session_option(self, key: str, value: Any) -> None:
		"""Option kept for every following request."""
		self.options.set_session_option(key, value)

	def enable_verbose_logging(self) -> None:
		"""Trace request and response headers to stderr."""
		enable_verbose_stream()
		self.set_session_option("verbose", True)

	def add_request_header(self, line: str) -> None:
		"""Header line ("Name: value") for the next request."""
		self.options.add_header(line)

	def set_log_sink(self, path: str) -> None:
		self.netlog.path = path

	def set_min_interval(self, seconds: float) -> None:
		self.delay.configure(seconds)

	def get(self, url: str) -> Optional[bytes]:
		"""Returns the response body, or None if the transfer failed."""
		return self._request(url)

	def post(self, url: str, fields: Mapping[str, Any]) -> Optional[bytes]:
		"""Form-encoded POST. Returns the response body, or None if the transfer failed."""
		body = encode_form(fields)
		self.set_request_option("method", "POST")
		self.set_request_option("body", body)
		self._last_body = body
		return self._request(url)

	def get_response_header(self, name: str) -> Optional[str]:
		return self.parser.get(name)

	def get_response_headers(self) -> ResponseHeaders:
		return self.parser.headers

	def get_transport_info(self, field: Optional[str] = None) -> Any:
		if self.transport is None:
			return None
		return self.transport.info(field)

	def get_last_error(self) -> Optional[str]:
		if self.transport is None:
			return None
		return self.transport.error()

	def close(self) -> None:
		if self.transport is not None:
			self.transport.close()
			self.transport = None

	def __enter__(self) -> "Session":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

	def _request(self, url: str) -> Optional[bytes]:
		try:
			self.delay.enforce()
			self._replace_transport(url)
			opts = self.options.build(self.parser.feed)
			body = self.transport.perform(opts)
			self.netlog.record(
				opts["headers"],
				self._last_body,
				body,
				self.parser.headers,
				self.transport.info(),
				self.transport.error(),
			)
			return body
		finally:
			self.options.reset_request()
			self._last_body = None

	def _replace_transport(self, url: str) -> None:
		if self.transport is not None:
			self.transport.close()
		self.transport = self.transport_class(url)
		logger.debug("New transport for %s", url)
