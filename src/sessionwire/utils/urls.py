# SessionWire — URL utilities: form encoding and redirect targets
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlencode, urljoin


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
	if value is None:
		return
	if isinstance(value, Mapping):
		for k, v in value.items():
			_flatten(f"{prefix}[{k}]", v, pairs)
	elif isinstance(value, (list, tuple)):
		for i, v in enumerate(value):
			_flatten(f"{prefix}[{i}]", v, pairs)
	elif isinstance(value, bool):
		pairs.append((prefix, "1" if value else "0"))
	else:
		pairs.append((prefix, str(value)))


def encode_form(fields: Mapping[str, Any]) -> str:
	"""application/x-www-form-urlencoded body.

	Nested mappings and sequences use bracket keys (`a[b]=1`, `t[0]=x`),
	None values are left out and booleans become 1/0.
	"""
	pairs: List[Tuple[str, str]] = []
	for k, v in (fields or {}).items():
		_flatten(str(k), v, pairs)
	return urlencode(pairs)


def resolve_location(base_url: str, location: Optional[str]) -> Optional[str]:
	if not location:
		return None
	return urljoin(base_url, location)


__all__ = [
	"encode_form",
	"resolve_location",
]
