# SessionWire — Networking utilities (requests session per transfer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import os
from http.cookiejar import LoadError, MozillaCookieJar
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


def build_session(max_redirects: int = 10, cookie_file: Optional[str] = None) -> requests.Session:
	"""Build a requests Session for a single transfer.

	No retries: a failed connect or read is reported once, to the caller.
	Cookies are loaded from cookie_file when it exists and holds a jar.
	"""
	s = requests.Session()
	s.max_redirects = int(max_redirects)
	adapter = HTTPAdapter(max_retries=Retry(total=0, read=False, redirect=False))
	s.mount("http://", adapter)
	s.mount("https://", adapter)
	s.cookies = load_cookie_jar(cookie_file)
	return s


def load_cookie_jar(path: Optional[str]) -> MozillaCookieJar:
	jar = MozillaCookieJar(path)
	if path and os.path.exists(path) and os.path.getsize(path) > 0:
		try:
			jar.load(ignore_discard=True, ignore_expires=True)
		except (LoadError, OSError) as e:
			logger.warning("Ignoring unreadable cookie jar %s: %s", path, e)
	return jar


def save_cookie_jar(jar: MozillaCookieJar, path: str) -> None:
	try:
		jar.save(path, ignore_discard=True, ignore_expires=True)
	except OSError as e:
		logger.warning("Could not write cookie jar %s: %s", path, e)
