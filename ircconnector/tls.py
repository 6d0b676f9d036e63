"""TLS capability probe and client context factory.

``ssl`` is imported lazily: on interpreters built without OpenSSL the module
itself fails to import, and the probe must still answer.
"""

from __future__ import annotations

import importlib.util
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    import ssl


def tls_supported() -> bool:
    """Return True when the interpreter can perform a TLS client handshake."""
    return importlib.util.find_spec("_ssl") is not None


def client_context(verify: bool = True) -> ssl.SSLContext:
    import ssl

    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context
