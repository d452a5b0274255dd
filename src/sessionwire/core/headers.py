# SessionWire — Streaming response header parser
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import re
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional, Union


HTTP_EOL = "\r\n"

COLLECTING = "collecting"
FINISHED = "finished"

_HEADER_RE = re.compile(r"^([a-z0-9\-_]+): (.+)", re.I)


class ResponseHeaders(Mapping):
	"""Headers of one response.

	Named entries are addressable by lowercase name (lookups are
	case-insensitive). Lines that are not `name: value` (status line,
	malformed or folded lines) are kept in arrival order in `raw_lines`
	and are not reachable through the mapping interface.
	"""

	def __init__(self) -> None:
		# str keys for named headers, int keys for unkeyed lines
		self._entries: Dict[Union[str, int], str] = {}
		self._next_index = 0

	def set(self, name: str, value: str) -> None:
		self._entries[name.lower()] = value

	def append_raw(self, line: str) -> None:
		self._entries[self._next_index] = line
		self._next_index += 1

	@property
	def raw_lines(self) -> List[str]:
		return [v for k, v in self._entries.items() if isinstance(k, int)]

	def __getitem__(self, name: str) -> str:
		if not isinstance(name, str):
			raise KeyError(name)
		return self._entries[name.lower()]

	def __contains__(self, name: object) -> bool:
		return isinstance(name, str) and name.lower() in self._entries

	def __iter__(self) -> Iterator[str]:
		return (k for k in self._entries if isinstance(k, str))

	def __len__(self) -> int:
		return sum(1 for k in self._entries if isinstance(k, str))

	def to_record(self) -> Dict[str, str]:
		"""Flatten for logging: unkeyed lines appear under "0", "1", ... in arrival order."""
		return {str(k): v for k, v in self._entries.items()}

	def __repr__(self) -> str:
		return f"ResponseHeaders({self.to_record()!r})"


class HeaderParser:
	"""Consumes raw header lines one at a time, in wire order.

	The bare CRLF ending a header block moves the parser to FINISHED. The next
	line after that starts a new response: the collected headers are dropped
	and collection restarts. When a transfer follows redirects, each hop's
	headers are therefore visible only until the next hop's first line arrives.
	"""

	def __init__(self) -> None:
		self.headers = ResponseHeaders()
		self.state = COLLECTING

	def feed(self, line: Union[str, bytes]) -> int:
		"""Store one header line; returns its length in bytes (latin-1 for str input)."""
		if self.state == FINISHED:
			self.headers = ResponseHeaders()
			self.state = COLLECTING

		text = line.decode("iso-8859-1") if isinstance(line, bytes) else line
		if text == HTTP_EOL:
			self.state = FINISHED
		else:
			m = _HEADER_RE.match(text)
			if m:
				self.headers.set(m.group(1), m.group(2).strip())
			else:
				self.headers.append_raw(text.strip())
		if isinstance(line, bytes):
			return len(line)
		# header bytes are latin-1 on the wire
		return len(line.encode("iso-8859-1", errors="replace"))

	__call__ = feed

	def get(self, name: str) -> Optional[str]:
		return self.headers.get(name)
