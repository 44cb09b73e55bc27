"""Upload store: durable, collision-free storage for image attachments.

INVARIANT: a reference is returned only after its file is fully written.
Content is written to a hidden ``.part`` file and linked into place, so
a failed write never leaves a file behind the generated name and an
existing file is never overwritten.

Files stored for a post whose database insert later fails are not
removed; they remain as unreferenced orphans.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from folio.domain.ids import UploadNamer
from folio.domain.models import UploadedFile
from folio.errors import UploadError

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_PREFIX = "/uploads"

# A taken name is retried with a fresh one this many times.
_MAX_CLAIM_ATTEMPTS = 8


class UploadStore:
    """Stores uploaded bytes under generated names in a fixed root."""

    def __init__(
        self,
        root: Path,
        *,
        public_prefix: str = DEFAULT_PUBLIC_PREFIX,
        namer: UploadNamer | None = None,
    ) -> None:
        self.root = root
        self.public_prefix = "/" + public_prefix.strip("/")
        self._namer = namer or UploadNamer()

    def store(self, original_name: str, content: bytes) -> str:
        """Persist *content* and return its public reference.

        *original_name* only contributes its extension.

        Raises:
            UploadError: The uploads root could not be created or the
                write failed.
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Could not create uploads directory {self.root}: {exc}"
            raise UploadError(msg) from exc

        for _ in range(_MAX_CLAIM_ATTEMPTS):
            name = self._namer.name_for(original_name)
            if not self._claim(self.root / name, content):
                continue
            logger.debug("Stored upload %s (%d bytes)", name, len(content))
            return f"{self.public_prefix}/{name}"

        msg = f"Could not claim a unique upload name in {self.root}"
        raise UploadError(msg)

    def store_all(self, files: Sequence[UploadedFile]) -> list[str]:
        """Store *files* in order, returning their references.

        Stops at the first failure and raises :class:`UploadError`. Files
        already stored by this call are left on disk unreferenced.
        """
        refs: list[str] = []
        for upload in files:
            try:
                refs.append(self.store(upload.filename, upload.content))
            except UploadError:
                if refs:
                    logger.warning(
                        "Upload batch aborted; %d stored file(s) left unreferenced: %s",
                        len(refs),
                        ", ".join(refs),
                    )
                raise
        return refs

    def resolve(self, reference: str) -> Path:
        """Map a public reference back to its file for read-only serving.

        Raises:
            ValueError: The reference is outside the public prefix or
                escapes the uploads root.
        """
        prefix = f"{self.public_prefix}/"
        if not reference.startswith(prefix):
            msg = f"Not an upload reference: {reference!r}"
            raise ValueError(msg)

        name = reference[len(prefix) :]
        path = self.root / name
        # Guard against path traversal via a crafted reference
        if not name or not path.resolve().is_relative_to(self.root.resolve()):
            msg = f"Upload reference escapes uploads root: {reference!r}"
            raise ValueError(msg)
        return path

    def _claim(self, target: Path, content: bytes) -> bool:
        """Write *content* under *target* unless that name is taken.

        The bytes go to a hidden ``.part`` file, which is then hard-linked
        to *target*. Linking fails instead of replacing an existing file.
        Returns False when *target* or its ``.part`` file already exists.
        """
        partial = target.with_name(f".{target.name}.part")
        try:
            fh = partial.open("xb")
        except FileExistsError:
            return False
        except OSError as exc:
            msg = f"Could not write upload {target.name}: {exc}"
            raise UploadError(msg) from exc

        try:
            with fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            os.link(partial, target)
        except FileExistsError:
            return False
        except OSError as exc:
            msg = f"Could not write upload {target.name}: {exc}"
            raise UploadError(msg) from exc
        finally:
            partial.unlink(missing_ok=True)
        return True
