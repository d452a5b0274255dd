# SessionWire — Transaction log (one JSON object per request)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..utils.io import append_jsonl


logger = logging.getLogger(__name__)

NONE = "-"


def _text(value: Optional[bytes]) -> Optional[str]:
	if value is None:
		return None
	if isinstance(value, bytes):
		return value.decode("utf-8", errors="replace")
	return str(value)


def build_record(
	req_headers: List[str],
	req_body: Optional[str],
	body: Optional[bytes],
	res_headers: Mapping[str, Any],
	info: Mapping[str, Any],
	last_error: str,
	now: Optional[float] = None,
) -> Dict[str, Any]:
	now = int(time.time() if now is None else now)
	return {
		"date": datetime.fromtimestamp(now, timezone.utc).astimezone().isoformat(timespec="seconds"),
		"unixtime": now,
		"url": info.get("url"),
		"http_code": info.get("http_code", 0),
		"last_error": last_error or NONE,
		"redirect_cnt": info.get("redirect_count", 0),
		"redirect_url": info.get("redirect_url") or NONE,
		"total_time": info.get("total_time", 0.0),
		"req_headers": list(req_headers),
		"req_body": NONE if req_body is None else _text(req_body),
		"res_headers": res_headers.to_record() if hasattr(res_headers, "to_record") else dict(res_headers),
		"res_length": len(body) if body is not None else 0,
		"res_body": _text(body),
	}


class TransactionLogger:
	"""Appends one record per request to a JSONL file. Never raises."""

	def __init__(self, path: Optional[str] = None) -> None:
		self.path = path

	def record(
		self,
		req_headers: List[str],
		req_body: Optional[str],
		body: Optional[bytes],
		res_headers: Mapping[str, Any],
		info: Mapping[str, Any],
		last_error: str,
	) -> bool:
		if not self.path:
			return False
		try:
			append_jsonl(self.path, build_record(req_headers, req_body, body, res_headers, info, last_error))
			return True
		except Exception as e:
			logger.warning("Failed to write transaction log %s: %s", self.path, e)
			return False
