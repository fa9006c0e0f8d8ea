"""Unique, DNS-friendly names for test applications."""

import re
import secrets
import string

# Kubernetes object names are DNS labels
MAX_NAME_LENGTH = 63
SUFFIX_LENGTH = 5
DEFAULT_BASE = "e2e"

_ALPHABET = string.ascii_lowercase + string.digits


def dns_friendly(text: str) -> str:
    """Lowercase text and squash anything outside [a-z0-9-] into single dashes."""
    text = re.sub(r"[^a-z0-9-]+", "-", text.lower())
    return re.sub(r"-{2,}", "-", text).strip("-")


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_name(test_name: str | None = None) -> str:
    """Generate a name unique to one test run.

    Args:
        test_name: Name of the running test, e.g. "test_sync[helm]".

    Returns:
        "<dns friendly test name>-<random suffix>", at most 63 characters.
    """
    base = dns_friendly(test_name or "") or DEFAULT_BASE
    base = base[: MAX_NAME_LENGTH - SUFFIX_LENGTH - 1].rstrip("-")
    return f"{base}-{random_suffix()}"
