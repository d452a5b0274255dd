# SessionWire — IO helpers (directories, JSONL appends, temp files)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import json
import os
import tempfile
from typing import Any, Optional


def ensure_dirs(*paths: str) -> None:
	for p in paths:
		if p:
			os.makedirs(p, exist_ok=True)


def to_json_line(obj: Any) -> str:
	"""Serialize one record; values json can't handle fall back to str()."""
	return json.dumps(obj, ensure_ascii=False, default=str)


def append_jsonl(path: str, obj: Any) -> None:
	line = to_json_line(obj)
	ensure_dirs(os.path.dirname(path))
	with open(path, "a", encoding="utf-8", errors="backslashreplace") as f:
		f.write(line + "\n")


def make_temp_file(prefix: str, directory: Optional[str] = None) -> str:
	"""Create an empty file that outlives the process and return its path."""
	fd, path = tempfile.mkstemp(prefix=prefix, dir=directory)
	os.close(fd)
	return path
