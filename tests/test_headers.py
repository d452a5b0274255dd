from sessionwire.core.headers import COLLECTING, FINISHED, HeaderParser


def feed_all(parser, lines):
	return [parser.feed(line) for line in lines]


def test_named_headers_lowercase_latest_wins():
	p = HeaderParser()
	feed_all(p, [
		"HTTP/1.1 200 OK\r\n",
		"Content-Type: text/html\r\n",
		"X-Dup: one\r\n",
		"x-dup: two\r\n",
		"\r\n",
	])
	assert dict(p.headers) == {"content-type": "text/html", "x-dup": "two"}
	assert p.headers.raw_lines == ["HTTP/1.1 200 OK"]
	assert p.state == FINISHED


def test_lookup_is_case_insensitive():
	p = HeaderParser()
	p.feed("Set-Cookie: a=1\r\n")
	assert p.get("SET-COOKIE") == "a=1"
	assert "set-cookie" in p.headers
	assert p.get("missing") is None


def test_returns_line_length():
	p = HeaderParser()
	lines = ["HTTP/1.1 200 OK\r\n", "Server: x\r\n", "\r\n"]
	assert feed_all(p, lines) == [len(line) for line in lines]
	assert p.feed(b"Via: 1.1 proxy\r\n") == 16


def test_malformed_lines_are_unkeyed():
	p = HeaderParser()
	feed_all(p, ["garbage line\r\n", "Bad Header: value\r\n", "  folded\r\n"])
	assert len(p.headers) == 0
	assert p.headers.raw_lines == ["garbage line", "Bad Header: value", "folded"]
	assert p.headers.to_record() == {"0": "garbage line", "1": "Bad Header: value", "2": "folded"}


def test_next_response_clears_previous_headers():
	p = HeaderParser()
	feed_all(p, ["HTTP/1.1 302 Found\r\n", "Location: /next\r\n", "\r\n"])
	assert p.get("location") == "/next"
	p.feed("HTTP/1.1 200 OK\r\n")
	assert p.state == COLLECTING
	assert p.get("location") is None
	assert p.headers.raw_lines == ["HTTP/1.1 200 OK"]


def test_record_keeps_arrival_order():
	p = HeaderParser()
	feed_all(p, ["HTTP/1.1 200 OK\r\n", "Server: x\r\n", "\r\n"])
	assert list(p.headers.to_record().items()) == [("0", "HTTP/1.1 200 OK"), ("server", "x")]


def test_length_is_latin1_byte_count():
	p = HeaderParser()
	assert p.feed("X-Name: café\r\n") == 14
	assert p.feed(b"X-Other: caf\xe9\r\n") == 15
	assert p.get("x-name") == "café"
	assert p.get("x-other") == "café"
