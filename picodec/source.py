"""Obtaining digit files: HTTP download with checksum sidecars, or local writes.

The digit table itself is only ever read from disk (see
:func:`picodec.table.load_digit_table`); this module puts the file there.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
import logging
import time

import requests
from tqdm import tqdm

from picodec.config import Config
from picodec.utils import compute_sha256, ensure_dir, sha256_sidecar_path


_LOGGER = logging.getLogger(__name__)


def _read_sidecar(dest: Path) -> Optional[str]:
    sidecar = sha256_sidecar_path(dest)
    if not sidecar.exists():
        return None
    value = sidecar.read_text(encoding="utf-8").strip()
    return value or None


def _with_retries(fn: Callable[[], None], max_retries: int, backoff_base: float = 1.0) -> None:
    """Run ``fn``, retrying connection errors and timeouts with exponential backoff."""

    attempt = 0
    while True:
        try:
            fn()
            return
        except (requests.ConnectionError, requests.Timeout) as exc:
            attempt += 1
            if attempt >= max_retries:
                raise
            delay = backoff_base * (2 ** (attempt - 1))
            _LOGGER.warning("Download failed (%s); retry %d/%d in %.1fs", exc, attempt, max_retries - 1, delay)
            time.sleep(delay)


def fetch_digit_file(
    url: str,
    dest: Path,
    expected_sha256: Optional[str] = None,
    *,
    force: bool = False,
) -> Path:
    """Download the digit file at ``url`` to ``dest`` and return ``dest``.

    An existing ``dest`` is kept when ``force`` is False and its digest matches
    ``expected_sha256`` (or the recorded sidecar digest, or nothing is known
    to compare against). After a download the digest is written to
    ``<dest>.sha256``; a mismatch with ``expected_sha256`` deletes the file and
    raises ``ValueError``.
    """

    ensure_dir(dest.parent)

    if dest.exists() and not force:
        expected = expected_sha256 or _read_sidecar(dest)
        if expected is None or compute_sha256(dest) == expected:
            _LOGGER.debug("Reusing existing digit file %s", dest)
            return dest
        _LOGGER.warning("Checksum mismatch for %s; downloading again", dest)

    def _download() -> None:
        with requests.get(url, stream=True, timeout=Config.DOWNLOAD_TIMEOUT) as r:
            r.raise_for_status()
            try:
                total: Optional[int] = int(r.headers.get("Content-Length"))
            except (TypeError, ValueError):
                total = None
            with dest.open("wb") as f, tqdm(total=total, unit="B", unit_scale=True, desc=dest.name) as pbar:
                for chunk in r.iter_content(chunk_size=Config.DOWNLOAD_CHUNK_SIZE):
                    if not chunk:
                        continue
                    f.write(chunk)
                    pbar.update(len(chunk))

    _with_retries(_download, max_retries=Config.DOWNLOAD_RETRIES)

    actual = compute_sha256(dest)
    if expected_sha256 is not None and actual != expected_sha256:
        dest.unlink(missing_ok=True)
        raise ValueError(f"SHA256 mismatch for {url}: expected {expected_sha256}, got {actual}")
    sha256_sidecar_path(dest).write_text(actual, encoding="utf-8")
    return dest


def write_digit_file(digits: str, dest: Path) -> Path:
    """Write ``digits`` as ``3.1415...`` text, the same layout downloads use."""

    ensure_dir(dest.parent)
    text = f"{digits[0]}.{digits[1:]}\n" if len(digits) > 1 else f"{digits}\n"
    dest.write_text(text, encoding="utf-8")
    sha256_sidecar_path(dest).write_text(compute_sha256(dest), encoding="utf-8")
    return dest


__all__ = ["fetch_digit_file", "write_digit_file"]
