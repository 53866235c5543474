"""
Domain normalization module.

Maps raw user-supplied strings to the canonical hostname that gets probed:
lowercased, without scheme, without a leading ``www.`` label and without
any path, query or fragment. The result is not validated; malformed input
still yields a best-effort hostname.
"""

import re
from typing import Iterable


SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
WWW_PATTERN = re.compile(r"^www\.", re.IGNORECASE)


def normalize(raw: str) -> str:
    """
    Convert a raw domain string to its canonical hostname.

    Steps, in order:
    1. lowercase the whole string
    2. strip a leading ``http://`` or ``https://``
    3. strip a leading ``www.``
    4. truncate at the first ``/``

    Args:
        raw: Raw domain string (surrounding whitespace is ignored)

    Returns:
        Canonical hostname
    """
    hostname = raw.strip().lower()
    hostname = SCHEME_PATTERN.sub("", hostname, count=1)
    hostname = WWW_PATTERN.sub("", hostname, count=1)
    return hostname.split("/", 1)[0]


def prepare_domains(entries: Iterable[str]) -> list[str]:
    """
    Trim, filter and normalize a batch of raw entries.

    Empty and whitespace-only entries are dropped; order and duplicates of
    the remaining entries are preserved.
    """
    return [normalize(entry) for entry in entries if entry.strip()]


def split_lines(text: str) -> list[str]:
    """Split a newline-separated block of domains into raw entries."""
    return text.splitlines()
