"""File hashing, baselines and change reports for mounted devices."""

from __future__ import annotations

import hashlib
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

MAX_PATH = 512
REPORT_LIMIT = 8192
_CHUNK = 8192

MODIFIED = "MODIFICADO"
DELETED = "ELIMINADO"
NEW = "NUEVO"


@dataclass(frozen=True)
class FileHash:
    """A file path relative to a scanned root and its SHA-256 digest."""

    path: str
    digest: bytes

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


def _clip(path: str) -> str:
    return path[: MAX_PATH - 1]


def sha256_file(path: str | os.PathLike[str]) -> bytes:
    """Return the SHA-256 digest of the file at ``path``."""
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK), b""):
            digest.update(chunk)
    return digest.digest()


def _walk(base: str, relative: str) -> Iterator[FileHash]:
    directory = os.path.join(base, relative) if relative else base
    try:
        names = [entry.name for entry in os.scandir(directory)]
    except OSError as exc:
        print(f"opendir: {exc}", file=sys.stderr)
        return
    for name in names:
        rel_path = f"{relative}/{name}" if relative else name
        abs_path = f"{base}/{rel_path}"
        try:
            info = os.stat(abs_path)
        except OSError:
            continue
        if os.path.isdir(abs_path) and not os.path.isfile(abs_path):
            yield from _walk(base, rel_path)
        elif os.path.isfile(abs_path) and info is not None:
            try:
                digest = sha256_file(abs_path)
            except OSError as exc:
                print(f"fopen: {exc}", file=sys.stderr)
                print(f"Error calculando SHA256: {abs_path}", file=sys.stderr)
                continue
            yield FileHash(_clip(rel_path), digest)


def scan_directory(root: str | os.PathLike[str]) -> list[FileHash]:
    """Hash every regular file below ``root``, recursively.

    Paths are relative to ``root`` and use ``/`` as separator. Directories
    that cannot be opened and files that cannot be read are reported on
    standard error and skipped.
    """
    return list(_walk(os.fspath(root), ""))


def save_baseline(path: str | os.PathLike[str], entries: Iterable[FileHash]) -> None:
    """Write ``entries`` as ``<path> <hex digest>`` lines."""
    with open(path, "w", encoding="utf-8") as handle:
        for entry in entries:
            handle.write(f"{entry.path} {entry.hexdigest}\n")


def load_baseline(path: str | os.PathLike[str]) -> list[FileHash]:
    """Read a baseline written by :func:`save_baseline`.

    Lines with fewer than two fields are ignored; a malformed digest raises
    ``ValueError``.
    """
    entries = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        fields = line.split()
        if len(fields) < 2:
            continue
        hex_digest = fields[1][:64]
        try:
            digest = bytes.fromhex(hex_digest)
        except ValueError as exc:
            raise ValueError(f"invalid digest for {fields[0]!r}: {hex_digest!r}") from exc
        if len(digest) != 32:
            raise ValueError(f"invalid digest length for {fields[0]!r}: {hex_digest!r}")
        entries.append(FileHash(_clip(fields[0]), digest))
    return entries


def _differences(
    baseline: Iterable[FileHash], current: Iterable[FileHash]
) -> Iterator[tuple[str, str]]:
    baseline = list(baseline)
    current = list(current)
    current_by_path: dict[str, bytes] = {}
    for entry in current:
        current_by_path.setdefault(entry.path, entry.digest)
    baseline_paths = {entry.path for entry in baseline}

    for entry in baseline:
        if entry.path not in current_by_path:
            yield DELETED, entry.path
        elif current_by_path[entry.path] != entry.digest:
            yield MODIFIED, entry.path
    for entry in current:
        if entry.path not in baseline_paths:
            yield NEW, entry.path


def compare_lists(baseline: Iterable[FileHash], current: Iterable[FileHash]) -> int:
    """Print every difference between two scans and return how many there are."""
    changes = 0
    for kind, path in _differences(baseline, current):
        print(f"Archivo {kind}: {path}")
        changes += 1
    return changes


def compare_and_report(
    baseline: Iterable[FileHash], current: Iterable[FileHash]
) -> tuple[str, bool]:
    """Return a textual report of the differences and whether there were any.

    The report is limited to ``REPORT_LIMIT - 1`` characters.
    """
    lines = []
    for kind, path in _differences(baseline, current):
        if kind == NEW:
            lines.append(f"[ALERTA] Se detectó un archivo NUEVO: {path}\n")
        else:
            lines.append(f"Archivo {kind}: {path}\n")
    return "".join(lines)[: REPORT_LIMIT - 1], bool(lines)


def log_event(message: str, log_path: str | os.PathLike[str] = "log.txt") -> None:
    """Append ``message`` with a local timestamp to the log file."""
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    with open(log_path, "a", encoding="utf-8") as handle:
        handle.write(f"[{stamp}] {message}\n")