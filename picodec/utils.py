"""Filesystem helpers for digit files.

Digit files are verified by SHA256: the digest of each file is recorded in a
``<name>.sha256`` sidecar next to it, so a later ``picodec table fetch`` can
tell an intact download from a truncated or replaced one.
"""

from __future__ import annotations

from hashlib import sha256 as _sha256
from pathlib import Path


def compute_sha256(path: Path, chunk_size: int = 1024 * 1024) -> str:
    """Hash a digit file in ``chunk_size`` pieces and return the hex digest.

    A million-digit file is about 1 MB, so the default reads it in one pass.
    """

    h = _sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def ensure_dir(path: Path) -> None:
    """Create the directory that will hold a digit file, parents included."""

    path.mkdir(parents=True, exist_ok=True)


def sha256_sidecar_path(path: Path) -> Path:
    """Return the sidecar recording ``path``'s digest (``pi.txt`` -> ``pi.txt.sha256``)."""

    return path.with_suffix(path.suffix + ".sha256")
