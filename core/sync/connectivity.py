"""
Connectivity check used before attempting a sync.
"""

from __future__ import annotations

import socket
from urllib.parse import urlsplit


def is_online(url: str) -> bool:
    """
    Cheap offline check: can the endpoint's host name be resolved?

    Returns True when the URL has no host (nothing to resolve).
    """
    host = urlsplit(url).hostname
    if not host:
        return True
    try:
        socket.getaddrinfo(host, None)
    except OSError:
        return False
    return True
