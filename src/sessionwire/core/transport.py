# SessionWire — Transport handle (requests transfer with streamed headers)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

import requests
from urllib3.exceptions import HTTPError as Urllib3Error

from ..logging_config import VERBOSE_LOGGER
from ..utils.net import build_session, save_cookie_jar
from ..utils.urls import resolve_location


logger = logging.getLogger(__name__)
wire = logging.getLogger(VERBOSE_LOGGER)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
CHUNK_SIZE = 64 * 1024

KNOWN_OPTIONS = frozenset({
	# fixed
	"return_transfer",
	"header_function",
	"headers",
	# caller
	"method",
	"body",
	"connect_timeout",
	"timeout",
	"max_redirects",
	"follow_redirects",
	"verify",
	"cert",
	"proxy",
	"user_agent",
	"referer",
	"auth",
	"cookie_file",
	"cookie_jar",
	"verbose",
})


class TransportError(Exception):
	"""Transfer could not be set up or was aborted before completion."""


@dataclass
class TransportInfo:
	url: str = ""
	http_code: int = 0
	content_type: Optional[str] = None
	redirect_count: int = 0
	redirect_url: Optional[str] = None
	total_time: float = 0.0
	size_download: int = 0
	request_header: Dict[str, str] = field(default_factory=dict)


def parse_header_lines(lines: List[str]) -> Dict[str, str]:
	headers: Dict[str, str] = {}
	for line in lines:
		name, sep, value = line.partition(":")
		name = name.strip()
		if not sep or not name:
			raise TransportError(f"Malformed request header: {line!r}")
		headers[name] = value.strip()
	return headers


def check_deadline(deadline: Optional[float], started: float, received: int = 0) -> None:
	"""Raise once the total transfer time is used up."""
	if deadline is not None and time.monotonic() >= deadline:
		elapsed_ms = int((time.monotonic() - started) * 1000)
		raise TransportError(
			f"Operation timed out after {elapsed_ms} milliseconds with {received} bytes received"
		)


def _status_line(r: requests.Response) -> str:
	version = getattr(r.raw, "version", 11) or 11
	return f"HTTP/{version // 10}.{version % 10} {r.status_code} {r.reason or ''}".rstrip() + "\r\n"


def _raw_header_items(r: requests.Response):
	raw_headers = getattr(r.raw, "headers", None)
	if raw_headers is not None and hasattr(raw_headers, "iteritems"):
		return list(raw_headers.iteritems())
	return list(r.headers.items())


class Transport:
	"""One transfer against one URL.

	Owns a requests.Session for the duration of the transfer; diagnostics
	from the last perform() stay readable until the handle is dropped.
	"""

	def __init__(self, url: str) -> None:
		self.url = url
		self._session: Optional[requests.Session] = None
		self._info = TransportInfo(url=url)
		self._error = ""

	def perform(self, options: Mapping[str, Any]) -> Optional[bytes]:
		"""Run the transfer; returns the body, or None on failure."""
		self._error = ""
		self._info = TransportInfo(url=self.url)
		started = time.perf_counter()
		try:
			return self._perform(options)
		except (TransportError, requests.RequestException) as e:
			self._error = str(e) or e.__class__.__name__
			logger.info("Transfer to %s failed: %s", self.url, self._error)
			return None
		finally:
			self._info.total_time = time.perf_counter() - started

	def _perform(self, options: Mapping[str, Any]) -> bytes:
		unknown = sorted(k for k in options if k not in KNOWN_OPTIONS)
		if unknown:
			raise TransportError(f"Unknown option: {', '.join(unknown)}")

		header_function: Optional[Callable[[bytes], int]] = options.get("header_function")
		verbose = bool(options.get("verbose"))
		headers = parse_header_lines(list(options.get("headers") or []))
		if options.get("user_agent"):
			headers.setdefault("User-Agent", str(options["user_agent"]))
		if options.get("referer"):
			headers.setdefault("Referer", str(options["referer"]))

		body = options.get("body")
		method = str(options.get("method") or ("POST" if body is not None else "GET")).upper()
		if isinstance(body, str) and not any(k.lower() == "content-type" for k in headers):
			headers["Content-Type"] = FORM_CONTENT_TYPE

		proxy = options.get("proxy")
		cookie_file = options.get("cookie_file")
		cookie_jar = options.get("cookie_jar")
		timeout = options.get("timeout")
		started = time.monotonic()
		deadline: Optional[float] = None

		def on_response(r: requests.Response, *args, **kwargs) -> requests.Response:
			# runs once per hop, before that hop's body is read
			check_deadline(deadline, started)
			self._stream_headers(r, header_function, verbose)
			return r

		auth = options.get("auth")
		if isinstance(auth, list):
			auth = tuple(auth)

		self.close()
		try:
			if timeout:
				deadline = started + float(timeout)
			self._session = build_session(
				max_redirects=options.get("max_redirects", 30),
				cookie_file=cookie_file,
			)
			r = self._session.request(
				method,
				self.url,
				headers=headers,
				data=body,
				timeout=(options.get("connect_timeout"), timeout),
				allow_redirects=bool(options.get("follow_redirects", False)),
				verify=options.get("verify", True),
				cert=options.get("cert"),
				proxies={"http": proxy, "https": proxy} if proxy else None,
				auth=auth or None,
				hooks={"response": [on_response]},
				stream=True,
			)
		except (requests.RequestException, TransportError):
			raise
		except (ValueError, TypeError) as e:
			raise TransportError(f"Invalid option value: {e}") from e
		finally:
			if cookie_jar and self._session is not None:
				save_cookie_jar(self._session.cookies, cookie_jar)

		try:
			content = self._read_body(r, deadline, started)
		finally:
			r.close()

		self._info = TransportInfo(
			url=r.url,
			http_code=r.status_code,
			content_type=r.headers.get("Content-Type"),
			redirect_count=len(r.history),
			redirect_url=resolve_location(r.url, r.headers.get("Location")) if r.is_redirect else None,
			size_download=len(content),
			request_header=dict(r.request.headers),
		)
		return content if options.get("return_transfer", True) else b""

	def _read_body(self, r: requests.Response, deadline: Optional[float], started: float) -> bytes:
		"""Read the body one socket read at a time, stopping at the deadline."""
		chunks: List[bytes] = []
		received = 0
		try:
			while True:
				check_deadline(deadline, started, received)
				data = r.raw.read1(CHUNK_SIZE, decode_content=True)
				if not data:
					break
				chunks.append(data)
				received += len(data)
		except Urllib3Error as e:
			raise TransportError(str(e) or e.__class__.__name__) from e
		check_deadline(deadline, started, received)
		return b"".join(chunks)

	def _stream_headers(self, r: requests.Response, header_function, verbose: bool) -> None:
		if verbose:
			wire.debug("> %s %s", r.request.method, r.request.url)
			for k, v in r.request.headers.items():
				wire.debug("> %s: %s", k, v)
		lines = [_status_line(r)]
		lines.extend(f"{k}: {v}\r\n" for k, v in _raw_header_items(r))
		lines.append("\r\n")
		for line in lines:
			if verbose:
				wire.debug("< %s", line.rstrip("\r\n"))
			# header values come off the wire as latin-1
			raw = line.encode("iso-8859-1", errors="replace")
			if header_function is not None and header_function(raw) != len(raw):
				raise TransportError("Failed writing header")

	def info(self, field_name: Optional[str] = None) -> Any:
		if field_name is None:
			return asdict(self._info)
		return getattr(self._info, field_name, None)

	def error(self) -> str:
		return self._error

	def close(self) -> None:
		if self._session is not None:
			self._session.close()
			self._session = None
