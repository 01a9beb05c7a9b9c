# markov_text/util/corpus_fetcher.py
# Loads corpus text from a local file or an http(s) URL.

import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from ..shared.config_schema import FetchConfig

logger = logging.getLogger(__name__)

SOURCE_METHODS = ("file", "url")
DEFAULT_ENCODING = "utf-8"
CHUNK_SIZE = 64 * 1024


class CorpusError(Exception):
    """Base class for corpus loading failures."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class CorpusReadError(CorpusError):
    """A local corpus file could not be read."""


class CorpusFetchError(CorpusError):
    """A corpus URL could not be fetched."""


def read_corpus_file(path: str, encoding: str = "utf-8") -> str:
    """Reads the whole corpus file, raising CorpusReadError on failure."""
    logger.info(f"Reading corpus file: {path}")
    try:
        with open(path, "r", encoding=encoding) as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read corpus file {path}: {e}")
        raise CorpusReadError(path, str(e)) from e
    logger.debug(f"Read {len(text)} characters from {path}")
    return text


def _validate_url(url: str) -> None:
    try:
        parsed_url = urlparse(url)
    except ValueError as e:
        raise CorpusFetchError(url, f"invalid URL ({e})") from e
    if parsed_url.scheme not in ("http", "https"):
        raise CorpusFetchError(url, "URL scheme must be 'http' or 'https'")
    if not parsed_url.netloc:
        raise CorpusFetchError(url, "URL must include a host")


def _check_declared_length(response: requests.Response, url: str, max_bytes: int) -> None:
    declared = response.headers.get("Content-Length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise CorpusFetchError(
            url, f"declared length of {declared} bytes exceeds limit of {max_bytes}"
        )


def _read_limited(response: requests.Response, url: str, max_bytes: int) -> bytes:
    """Reads the streamed body, giving up as soon as it passes ``max_bytes``."""
    _check_declared_length(response, url, max_bytes)
    body = bytearray()
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        body.extend(chunk)
        if len(body) > max_bytes:
            raise CorpusFetchError(url, f"response exceeds limit of {max_bytes} bytes")
    return bytes(body)


def _decode_body(response: requests.Response, body: bytes) -> str:
    # requests assumes ISO-8859-1 for text/* without a charset; corpora are UTF-8.
    content_type = response.headers.get("Content-Type", "")
    encoding = DEFAULT_ENCODING
    if "charset=" in content_type.lower() and response.encoding:
        encoding = response.encoding
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        logger.warning(f"Unknown charset {encoding!r}; decoding as {DEFAULT_ENCODING}")
        return body.decode(DEFAULT_ENCODING, errors="replace")


def fetch_corpus_url(url: str, config: Optional[FetchConfig] = None) -> str:
    """
    Fetches corpus text over HTTP(S).

    Only http and https URLs with a host are accepted. The body is streamed
    and abandoned once it passes ``config.max_bytes``. Bodies without a
    declared charset are decoded as UTF-8. Network errors, timeouts, error
    status codes and oversized bodies raise CorpusFetchError.
    """
    config = config or FetchConfig()
    _validate_url(url)

    logger.info(f"Fetching corpus from: {url}")
    try:
        with requests.get(
            url,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout_sec,
            allow_redirects=config.allow_redirects,
            stream=True,
        ) as response:
            response.raise_for_status()
            if not config.allow_redirects and 300 <= response.status_code < 400:
                logger.warning(f"Redirect detected while fetching corpus from {url}")
                raise CorpusFetchError(
                    url, f"redirect ({response.status_code}) not followed"
                )
            body = _read_limited(response, url, config.max_bytes)
            text = _decode_body(response, body)
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch corpus from {url}: {e}")
        raise CorpusFetchError(url, str(e)) from e

    logger.debug(f"Fetched {len(body)} bytes from {url} (status {response.status_code})")
    return text


def load_corpus(method: str, source: str, config: Optional[FetchConfig] = None) -> str:
    """Dispatches to the file or URL loader by method name."""
    if method == "file":
        return read_corpus_file(source)
    if method == "url":
        return fetch_corpus_url(source, config)
    raise ValueError(f"Unknown method: {method}")
