"""Identifier and upload-name generation.

INVARIANT: IDs are permanent. Once generated, a post ID never changes.
Upload names are a nanosecond timestamp plus the original extension,
strictly increasing within the process.
"""

from __future__ import annotations

import re
import threading
import time
import uuid
from pathlib import PurePosixPath, PureWindowsPath

POST_ID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")

_SAFE_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


def new_post_id() -> str:
    """Generate a random UUID4 post identifier."""
    return str(uuid.uuid4())


def safe_extension(original_name: str) -> str:
    """Return the extension of *original_name*, or ``""`` if it is unsafe.

    Directory components (either separator style) are discarded first, so
    only the final name segment contributes.

    Examples:
        >>> safe_extension("photo.JPG")
        '.JPG'
        >>> safe_extension("../../etc/passwd")
        ''
        >>> safe_extension("archive.tar.gz")
        '.gz'
        >>> safe_extension("evil.p/hp")
        ''
    """
    base = PureWindowsPath(PurePosixPath(original_name).name).name
    suffix = PurePosixPath(base).suffix
    if _SAFE_EXTENSION.match(suffix):
        return suffix
    return ""


class UploadNamer:
    """Produce strictly increasing nanosecond-timestamp names.

    Thread-safe: concurrent callers in one process never receive the
    same stem, even when the clock has not advanced between calls.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def next_stem(self) -> str:
        """Claim the next unique name stem."""
        with self._lock:
            stamp = time.time_ns()
            if stamp <= self._last:
                stamp = self._last + 1
            self._last = stamp
            return str(stamp)

    def name_for(self, original_name: str) -> str:
        """Generated stem followed by the safe extension of *original_name*."""
        return f"{self.next_stem()}{safe_extension(original_name)}"
