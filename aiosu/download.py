"""HTTP downloads, MEGA link decoding and JSON link lists."""

from __future__ import annotations

import base64
import io
import json
import re
import shutil
import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO

import requests
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

USER_AGENT = "aiosu"
MEGA_API_URL = "https://g.api.mega.co.nz/cs"
MEGA_HOST = "mega.nz"
CHUNK_SIZE = 0x100000
STORAGE_FACTOR = 2.5
SPEED_INTERVAL = 1.2
TITLE_NOT_FOUND = "-1"

_MIN_MEGA_URL_LENGTH = 52
_TITLE_PATTERN = re.compile(r"<title>.+</title>")

Headers = Mapping[str, str] | Iterable[str] | None


class InsufficientStorageError(OSError):
    """The target storage cannot hold the file being downloaded."""


@dataclass
class Progress:
    """Download progress shared with whoever displays it.

    Setting ``interrupted`` stops a running download at the next chunk.
    """

    max_steps: int = 100
    step: int = 0
    now: float = 0.0
    total: float = 0.0
    speed: float = 0.0
    interrupted: bool = False
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    _last_time: float = field(init=False, default=0.0, repr=False)
    _last_now: float = field(init=False, default=0.0, repr=False)

    def __post_init__(self) -> None:
        self._restart()

    def _restart(self) -> None:
        self._last_time = self.clock()
        self._last_now = 0.0

    def update(self, now: float, total: float) -> None:
        """Record ``now`` of ``total`` bytes received; unknown totals are ignored."""
        if total <= 0:
            return
        self.step = min(self.max_steps - 1, int(now / total * self.max_steps))
        self.now = now
        self.total = total
        current = self.clock()
        elapsed = current - self._last_time
        if elapsed > SPEED_INTERVAL:
            self.speed = (now - self._last_now) / elapsed
            self._last_now = now
            self._last_time = current

    def finish(self) -> None:
        """Mark the transfer as complete."""
        self.step = self.max_steps


@contextmanager
def _session(session: requests.Session | None) -> Iterator[requests.Session]:
    if session is not None:
        yield session
        return
    with requests.Session() as own:
        yield own


def _parse_headers(headers: Headers) -> dict[str, str]:
    if headers is None:
        return {}
    if isinstance(headers, Mapping):
        return dict(headers)
    parsed = {}
    for line in headers:
        name, sep, value = line.partition(":")
        if not sep:
            raise ValueError(f"malformed header line: {line!r}")
        parsed[name.strip()] = value.strip()
    return parsed


def _free_space(output: str | Path) -> int:
    return shutil.disk_usage(Path(output).resolve().parent).free


def _fits(size: float, output: str | Path) -> bool:
    return size * STORAGE_FACTOR <= _free_space(output)


def _has_room(http: requests.Session, url: str, output: str | Path) -> bool:
    try:
        response = http.head(url, headers={"User-Agent": USER_AGENT}, allow_redirects=True)
        length = int(response.headers.get("Content-Length", -1))
    except (requests.RequestException, ValueError):
        return True
    return _fits(length, output)


def mega_id(url: str) -> str:
    """Extract the 8-character file id from a MEGA link (new or ``#!`` format)."""
    if len(url) < _MIN_MEGA_URL_LENGTH:
        raise ValueError("Invalid URL.")
    old_link = "#!" in url
    start = url.rfind("/") + (2 if old_link else 0) + 1
    end = url.rfind("!" if old_link else "#")
    file_id = url[start:] if end < start else url[start:end]
    if len(file_id) != 8:
        raise ValueError("Invalid URL ID.")
    return file_id


def mega_node_key(url: str) -> bytes:
    """Decode the 32-byte node key carried after the last separator of a MEGA link."""
    if len(url) < _MIN_MEGA_URL_LENGTH:
        raise ValueError("Invalid URL.")
    old_link = "#!" in url
    start = url.rfind("!" if old_link else "#") + 1
    key = url[start:].replace("_", "/").replace("-", "+")
    key += "=" * (4 - len(key) % 4)
    if len(key) != 44:
        raise ValueError("Invalid URL key.")
    try:
        decoded = base64.b64decode(key, validate=True)
    except ValueError as exc:
        raise ValueError("Invalid node key.") from exc
    if len(decoded) != 32:
        raise ValueError("Invalid node key.")
    return decoded


def mega_key(node_key: bytes) -> bytes:
    """Fold a 32-byte node key into the 16-byte AES key."""
    return bytes(a ^ b for a, b in zip(node_key[:16], node_key[16:32]))


def mega_iv(node_key: bytes) -> bytes:
    """Build the AES-CTR counter block for a node key."""
    return bytes(node_key[16:24]) + bytes(8)


def _mega_location(http: requests.Session, url: str) -> tuple[str, int]:
    payload = json.dumps([{"a": "g", "g": 1, "p": mega_id(url)}])
    response = http.post(
        MEGA_API_URL,
        data=payload.encode("utf-8"),
        headers={"User-Agent": USER_AGENT},
        allow_redirects=True,
    )
    try:
        entry = response.json()[0]
        return str(entry["g"]), int(entry["s"])
    except (ValueError, LookupError, TypeError) as exc:
        raise ValueError("Unexpected MEGA API response.") from exc


def download_file(
    url: str,
    output: str | Path | None = None,
    progress: Progress | None = None,
    session: requests.Session | None = None,
) -> tuple[int, bytes]:
    """Download ``url`` to ``output``, or into memory when ``output`` is None.

    Returns the HTTP status and the received bytes (empty when written to a
    file). MEGA links are resolved and decrypted on the fly. Raises
    :class:`InsufficientStorageError` when the file would not fit.
    """
    if progress is not None:
        progress._restart()
    with _session(session) as http:
        real_url = url
        decryptor = None
        if MEGA_HOST in url:
            real_url, size = _mega_location(http, url)
            node_key = mega_node_key(url)
            if output is not None and not _fits(size, output):
                raise InsufficientStorageError("insufficient storage")
            decryptor = Cipher(algorithms.AES(mega_key(node_key)), modes.CTR(mega_iv(node_key))).decryptor()
        elif output is not None and not _has_room(http, url, output):
            raise InsufficientStorageError("insufficient storage")

        with ExitStack() as stack:
            response = stack.enter_context(
                http.get(real_url, headers={"User-Agent": USER_AGENT}, stream=True, allow_redirects=True)
            )
            sink: BinaryIO = (
                stack.enter_context(open(output, "wb")) if output is not None else io.BytesIO()
            )
            total = int(response.headers.get("Content-Length") or 0)
            received = 0
            for chunk in response.iter_content(CHUNK_SIZE):
                if progress is not None and progress.interrupted:
                    break
                received += len(chunk)
                sink.write(decryptor.update(chunk) if decryptor else chunk)
                if progress is not None:
                    progress.update(received, total)
            if decryptor is not None:
                sink.write(decryptor.finalize())
            if progress is not None:
                progress.finish()
            data = sink.getvalue() if isinstance(sink, io.BytesIO) else b""
            return response.status_code, data


def extract_title_version(html: str) -> str:
    """Pick the five characters after the first space of the page title, or ``-1``."""
    match = _TITLE_PATTERN.search(html)
    if match is None:
        return TITLE_NOT_FOUND
    title = match.group(0)
    start = title.find(" ") + 1
    return title[start : start + 5]


def fetch_title(url: str, session: requests.Session | None = None) -> str:
    """Fetch a page and return the version read from its title, or ``-1``."""
    try:
        _, text = download_page(url, session=session)
    except requests.RequestException:
        return TITLE_NOT_FOUND
    return extract_title_version(text)


def download_page(
    url: str,
    headers: Headers = None,
    body: str | None = None,
    session: requests.Session | None = None,
) -> tuple[int, str]:
    """Fetch ``url`` and return its status and text; a body turns it into a POST.

    ``headers`` is a mapping or lines of the form ``Name: value``.
    """
    request_headers = {"User-Agent": USER_AGENT, **_parse_headers(headers)}
    with _session(session) as http:
        if body:
            response = http.post(url, data=body.encode("utf-8"), headers=request_headers)
        else:
            response = http.get(url, headers=request_headers)
        return response.status_code, response.text


def get_request(
    url: str,
    headers: Headers = None,
    body: str | None = None,
    session: requests.Session | None = None,
) -> Any:
    """Fetch and parse a JSON document; anything unusable yields ``{}``."""
    try:
        _, text = download_page(url, headers, body, session)
    except requests.RequestException:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return {}


def links_from_json(document: Any) -> list[tuple[str, str]]:
    """List the ``(name, url)`` pairs of a JSON object, in document order."""
    if not document:
        return []
    if not isinstance(document, Mapping):
        raise TypeError(f"links must be a JSON object, got {type(document).__name__}")
    links = []
    for name, link in document.items():
        if not isinstance(link, str):
            raise TypeError(f"link {name!r} must be a string, got {type(link).__name__}")
        links.append((name, link))
    return links


def get_links(url: str, session: requests.Session | None = None) -> list[tuple[str, str]]:
    """Fetch a JSON object of links and list its ``(name, url)`` pairs."""
    return links_from_json(get_request(url, session=session))