"""
URL Normalization

Produces the canonical string used as the dedup key of the URL registry.
Two URLs that normalize to the same string are treated as the same resource.

Rules, applied in order:
- scheme and host lower-cased
- default ports (http:80, https:443) and empty port separators removed
- escapes of unreserved characters decoded (%7E -> ~, %41 -> A), all
  other percent-escapes upper-cased (%2f -> %2F)
- duplicate slashes in the path collapsed
- dot-segments ("." and "..") resolved
- trailing slash removed from the path ("https://a.io/" -> "https://a.io")
- query parameters sorted by key (stable, so repeated keys keep their order)
- empty query separator and empty parameters removed

Userinfo and fragment are kept as given.
"""

import re
import string
from urllib.parse import urlsplit, urlunsplit

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}

_PERCENT_ESCAPE = re.compile(r"%[0-9a-fA-F]{2}")
_DUPLICATE_SLASHES = re.compile(r"/{2,}")
_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")


def _normalize_escape(match) -> str:
    char = chr(int(match.group(0)[1:], 16))
    if char in _UNRESERVED:
        return char
    return match.group(0).upper()


def _normalize_escapes(value: str) -> str:
    return _PERCENT_ESCAPE.sub(_normalize_escape, value)


def _remove_dot_segments(path: str) -> str:
    segments = []
    for segment in path.split("/"):
        if segment == ".":
            continue
        if segment == "..":
            # never pop the empty root segment
            if len(segments) > 1:
                segments.pop()
            continue
        segments.append(segment)

    resolved = "/".join(segments)
    if path.startswith("/") and not resolved.startswith("/"):
        resolved = "/" + resolved
    return resolved


def _normalize_netloc(parts, scheme: str) -> str:
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"

    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        host = f"{userinfo}@{host}"

    return host


def _normalize_path(path: str) -> str:
    path = _normalize_escapes(path)
    path = _DUPLICATE_SLASHES.sub("/", path)
    path = _remove_dot_segments(path)
    return path.rstrip("/")


def _normalize_query(query: str) -> str:
    params = [param for param in _normalize_escapes(query).split("&") if param]
    params.sort(key=lambda param: param.split("=", 1)[0])
    return "&".join(params)


def normalize_url(raw_url: str) -> str:
    """
    Canonicalize a URL for dedup lookups.

    Args:
        raw_url: Absolute URL with scheme and host

    Returns:
        Normalized URL string

    Raises:
        ValueError: If the URL has no scheme/host or an invalid port

    Example:
        normalize_url("HTTPS://GitHub.com:443//golang/./go/?b=2&a=1&")
        -> "https://github.com/golang/go?a=1&b=2"
    """
    parts = urlsplit(raw_url.strip())
    scheme = parts.scheme.lower()
    if not scheme or not parts.hostname:
        raise ValueError(f"URL must include a scheme and a host: {raw_url}")

    return urlunsplit((
        scheme,
        _normalize_netloc(parts, scheme),
        _normalize_path(parts.path),
        _normalize_query(parts.query),
        parts.fragment,
    ))


def extract_domain(url: str) -> str:
    """
    Return the host of a URL, lower-cased and without port.

    Subdomains are kept: "docs.python.org" and "python.org" are distinct.
    """
    return (urlsplit(url.strip()).hostname or "").lower()
