"""What the authenticating reverse proxy tells us about a request.

The proxy terminates TLS, authenticates the user and forwards the request
with X-Forwarded-* headers plus an owner header. Nothing here trusts the
client directly.
"""

from typing import Mapping, NamedTuple, Optional


class ProxyContext(NamedTuple):
    """Forwarded request attributes; any field may be None."""
    
    proto: Optional[str]
    host: Optional[str]
    client: Optional[str]
    owner: Optional[str]


def _lookup(headers: Mapping[str, str], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            value = value.strip()
            return value or None
    return None


def read_proxy_context(
    headers: Mapping[str, str],
    owner_header: str = "X-Forwarded-User",
) -> ProxyContext:
    """Collect forwarded attributes from request headers.
    
    Header names match case-insensitively. A blank owner header is the
    same as no header: the request is anonymous. For X-Forwarded-For only
    the first (original client) address is kept.
    """
    client = _lookup(headers, "X-Forwarded-For")
    if client:
        client = client.split(",")[0].strip()
    
    return ProxyContext(
        proto=_lookup(headers, "X-Forwarded-Proto"),
        host=_lookup(headers, "X-Forwarded-Host"),
        client=client,
        owner=_lookup(headers, owner_header),
    )


def public_base_url(
    context: ProxyContext,
    fallback: str,
    scheme: Optional[str] = None,
    host: Optional[str] = None,
) -> str:
    """Scheme and host clients use to reach us.
    
    The proxy's view wins, then the request's own scheme and Host header,
    then the configured base URL.
    """
    if context.proto and context.host:
        return f"{context.proto}://{context.host}"
    if scheme and host:
        return f"{scheme}://{host}"
    return fallback.rstrip("/")


def short_url(base_url: str, code: str, path_prefix: str = "") -> str:
    """Absolute URL that redirects to code's destination."""
    parts = [base_url.rstrip("/")]
    if path_prefix.strip("/"):
        parts.append(path_prefix.strip("/"))
    parts.append(code)
    return "/".join(parts)
