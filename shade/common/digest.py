"""
URL Digest Module

Computes and verifies the keyed digest that authorizes a target URL.
A signed link has the form /<hex digest>?url=<percent-encoded url>.
"""

import hashlib
import hmac
from urllib.parse import quote

DEFAULT_ALGORITHM = "sha256"


def validate_algorithm(name: str) -> str:
    """
    Validate a digest algorithm name

    Args:
        name: hashlib algorithm name, e.g. "sha256" or "sha1"

    Returns:
        str: Normalized (lowercase) algorithm name

    Raises:
        ValueError: If hashlib does not provide the algorithm
    """
    normalized = (name or "").strip().lower()
    if normalized not in hashlib.algorithms_available:
        raise ValueError(f"Unsupported digest algorithm: {name!r}")
    # SHAKE digests need an explicit length and cannot back an HMAC
    if normalized.startswith("shake_"):
        raise ValueError(f"Unsupported digest algorithm: {name!r}")
    return normalized


def compute_digest(url: str, key: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Compute the lowercase hex HMAC of a decoded URL

    Args:
        url: Target URL, already percent-decoded
        key: Shared secret
        algorithm: hashlib algorithm name

    Returns:
        str: Hex digest
    """
    return hmac.new(key, url.encode("utf-8"), algorithm).hexdigest()


def verify(path_digest: str, raw_url: str, key: bytes, algorithm: str = DEFAULT_ALGORITHM) -> bool:
    """
    Check that a caller-supplied digest authorizes a URL

    Args:
        path_digest: Digest taken from the request path
        raw_url: Target URL, already percent-decoded
        key: Shared secret
        algorithm: hashlib algorithm name

    Returns:
        bool: True if the digest matches
    """
    expected = compute_digest(raw_url, key, algorithm)
    return hmac.compare_digest(expected.encode("ascii"), path_digest.encode("utf-8"))


def build_signed_path(url: str, key: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Build a proxy path for a URL

    The URL is encoded with no safe characters, so the proxy decodes it
    back to exactly the string that was signed.

    Args:
        url: Target URL to sign
        key: Shared secret
        algorithm: hashlib algorithm name

    Returns:
        str: Path and query, e.g. "/<digest>?url=https%3A%2F%2Fexample.com%2Fa.png"
    """
    digest = compute_digest(url, key, algorithm)
    return f"/{digest}?url={quote(url, safe='')}"
