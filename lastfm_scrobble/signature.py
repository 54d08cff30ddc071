"""
Last.fm request signing (api_sig).

The service recomputes the signature on its side, so this must match its
algorithm exactly: every body parameter plus ``method``, sorted by key,
concatenated as key+value with no separators, secret appended, MD5, hex.
"""

from __future__ import annotations

import hashlib
from typing import Callable, Mapping

# bytes in, raw digest out
Digest = Callable[[bytes], bytes]


def md5_digest(data: bytes) -> bytes:
    return hashlib.md5(data).digest()


def signing_string(params: Mapping[str, str], method: str, secret: str) -> str:
    merged = dict(params)
    merged["method"] = method
    # byte-wise order of the UTF-8 keys
    keys = sorted(merged, key=lambda k: k.encode("utf-8"))
    return "".join(k + merged[k] for k in keys) + secret


def sign(params: Mapping[str, str], method: str, secret: str, digest: Digest = md5_digest) -> str:
    raw = signing_string(params, method, secret).encode("utf-8")
    return digest(raw).hex()
