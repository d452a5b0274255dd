import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from sessionwire.config import Settings


class Handler(BaseHTTPRequestHandler):
	def log_message(self, format, *args):
		pass

	def _send(self, status=200, body=b"", headers=()):
		self.send_response(status)
		for k, v in headers:
			self.send_header(k, v)
		self.send_header("Content-Length", str(len(body)))
		self.end_headers()
		self.wfile.write(body)

	def do_GET(self):
		if self.path == "/hello":
			self._send(body=b"hello", headers=[("Content-Type", "text/plain"), ("X-Dup", "one"), ("X-Dup", "two")])
		elif self.path == "/empty":
			self._send(body=b"")
		elif self.path == "/binary":
			self._send(body=b"\xff\xfe\x00abc", headers=[("Content-Type", "application/octet-stream")])
		elif self.path == "/set-cookie":
			self._send(body=b"set", headers=[("Set-Cookie", "sid=abc123; Path=/")])
		elif self.path == "/echo-cookie":
			self._send(body=(self.headers.get("Cookie") or "").encode())
		elif self.path == "/echo-headers":
			self._send(body=json.dumps(dict(self.headers.items())).encode())
		elif self.path == "/redirect":
			self._send(302, b"", headers=[("Location", "/hello"), ("X-Hop", "first"), ("Set-Cookie", "hop=1; Path=/")])
		elif self.path == "/trickle":
			self.send_response(200)
			self.send_header("Content-Length", "8")
			self.end_headers()
			for _ in range(8):
				try:
					self.wfile.write(b"x")
					self.wfile.flush()
				except OSError:
					return
				threading.Event().wait(0.15)
		elif self.path == "/slow":
			threading.Event().wait(1.0)
			self._send(body=b"late")
		else:
			self._send(404, b"not found")

	def do_POST(self):
		length = int(self.headers.get("Content-Length") or 0)
		body = self.rfile.read(length)
		self._send(body=body, headers=[("X-Content-Type", self.headers.get("Content-Type", ""))])


@pytest.fixture(scope="session")
def server():
	httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
	t = threading.Thread(target=httpd.serve_forever, daemon=True)
	t.start()
	yield f"http://127.0.0.1:{httpd.server_address[1]}"
	httpd.shutdown()
	httpd.server_close()


@pytest.fixture
def settings(tmp_path):
	return Settings(cookie_dir=str(tmp_path))
