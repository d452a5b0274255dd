# SessionWire — Layered request options (pending > session > default)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Any, Callable, Dict, List, Mapping


# Options the engine always controls; caller layers can never shadow them.
FIXED_KEYS = frozenset({"return_transfer", "header_function", "headers"})


def merge_options(
	fixed: Mapping[str, Any],
	pending: Mapping[str, Any],
	session: Mapping[str, Any],
	default: Mapping[str, Any],
) -> Dict[str, Any]:
	"""Merge option layers, leftmost wins.

	Pure: none of the inputs are modified.
	"""
	merged: Dict[str, Any] = {}
	for layer in (default, session, pending):
		merged.update(layer)
	merged.update(fixed)
	return merged


class OptionStore:
	"""Per-request, per-session and default option maps plus pending header lines."""

	def __init__(self, default: Mapping[str, Any] = None) -> None:
		self.default: Dict[str, Any] = dict(default or {})
		self.session: Dict[str, Any] = {}
		self.pending: Dict[str, Any] = {}
		self.headers: List[str] = []

	def set_request_option(self, key: str, value: Any) -> None:
		self.pending[key] = value

	def set_session_option(self, key: str, value: Any) -> None:
		self.session[key] = value

	def add_header(self, line: str) -> None:
		self.headers.append(line)

	def build(self, header_function: Callable[[str], int]) -> Dict[str, Any]:
		fixed = {
			"return_transfer": True,
			"header_function": header_function,
			"headers": list(self.headers),
		}
		return merge_options(fixed, self.pending, self.session, self.default)

	def reset_request(self) -> None:
		self.pending = {}
		self.headers = []
