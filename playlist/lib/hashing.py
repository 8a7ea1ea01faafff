import hashlib


def sha256(content: str) -> str:
    """Calculates the SHA256 hex digest of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
