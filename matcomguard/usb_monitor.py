"""Watch for removable media and report file changes on it."""

from __future__ import annotations

import argparse
import os
import sys
import time

from matcomguard.files import FileHash, compare_and_report, scan_directory
from matcomguard.mounts import (
    MAX_MOUNTS,
    MOUNTS_FILE,
    Mount,
    find_new_mount,
    is_mounted,
    read_mounts,
)

POLL_INTERVAL = 5.0


class UsbMonitor:
    """Tracks one removable mount at a time and diffs its files between polls.

    The mount table is read when the monitor is created, so media mounted
    before that moment are never reported. Raises ``OSError`` if the mounts
    file cannot be read at that point.
    """

    def __init__(
        self,
        mounts_path: str | os.PathLike[str] = MOUNTS_FILE,
        update_baseline: bool = False,
    ) -> None:
        self.mounts_path = mounts_path
        self.update_baseline = update_baseline
        self.device: Mount | None = None
        self.baseline: list[FileHash] = []
        self._previous = read_mounts(MAX_MOUNTS, mounts_path)

    def _read(self) -> list[Mount]:
        try:
            return read_mounts(MAX_MOUNTS, self.mounts_path)
        except OSError:
            return []

    def poll(self) -> str | None:
        """Check the mount table once.

        Returns the message for what happened: a new device, a removed device
        or the change report of the tracked device (possibly empty). Returns
        ``None`` when no device is tracked and none appeared.
        """
        current = self._read()
        message: str | None = None
        if self.device is None:
            self.device = find_new_mount(self._previous, current)
            if self.device is not None:
                message = (
                    "\n>> Nuevo dispositivo detectado:\n"
                    f"   Dispositivo: {self.device.device}\n"
                    f"   Punto de montaje: {self.device.mount_point}\n"
                    f"   Tipo de FS: {self.device.fs_type}\n"
                )
                self.baseline = self.baseline + scan_directory(self.device.mount_point)
        elif not is_mounted(self.device, current):
            message = f"\n>> Dispositivo desmontado: {self.device.mount_point}\n"
            self.baseline = []
            self.device = None
        else:
            snapshot = scan_directory(self.device.mount_point)
            message, _ = compare_and_report(self.baseline, snapshot)
            if self.update_baseline:
                self.baseline = snapshot
        self._previous = current
        return message


def main(argv: list[str] | None = None) -> int:
    """Poll the mount table and print device events and file changes."""
    parser = argparse.ArgumentParser(description="Watch removable media for file changes.")
    parser.add_argument("--mounts", default=MOUNTS_FILE, help="mount table to read")
    parser.add_argument("--interval", type=float, default=POLL_INTERVAL)
    parser.add_argument("--count", type=int, default=0, help="polls to run, 0 for ever")
    args = parser.parse_args(argv)

    try:
        monitor = UsbMonitor(args.mounts)
    except OSError:
        print("Error al leer montajes.", file=sys.stderr)
        return 1

    print("Monitoreando nuevos dispositivos USB, loop y carpetas compartidas...")
    polls = 0
    while not args.count or polls < args.count:
        time.sleep(args.interval)
        before = monitor.device
        message = monitor.poll()
        polls += 1
        if message is None:
            continue
        if before is None:
            print(message, end="")
            print(">> Escaneando y calculando hashes...")
        elif monitor.device is None:
            print(message, end="")
        else:
            print(f"\n>> Escaneo periódico en {before.mount_point}...")
            print(">> Comparando con baseline...")
            print(message, end="")
    return 0