"""Graphical guard that watches devices, processes and ports together."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass, field
from enum import IntEnum

from matcomguard.config import Config, load_config, load_whitelist, read_mem_total
from matcomguard.gui import PDF_FILENAMES, ScannerWindow, report_for_button
from matcomguard.msglist import MessageList
from matcomguard.pdf import generate_pdf
from matcomguard.port_db import DEFAULT_DB_FILE, PortDatabase
from matcomguard.port_scanner import ScanConfig, get_service_name, scan_ports
from matcomguard.process_main import run_iteration
from matcomguard.processes import PROC_ROOT, Process, ProcessMonitor
from matcomguard.usb_monitor import UsbMonitor

UPDATE_INTERVAL_MS = 5000
_RECORD_EVERY = 5
_RECORD_SLOT = 4


class AlertSource(IntEnum):
    """Which monitor produced an alert."""

    DEVICES = 0
    PROCESSES = 1
    PORTS = 2


@dataclass
class AlertRouter:
    """Keeps a sample of the alerts, split by source, for PDF export."""

    devices: MessageList = field(default_factory=MessageList)
    processes: MessageList = field(default_factory=MessageList)
    ports: MessageList = field(default_factory=MessageList)
    counter: int = 0

    def record(self, message: str, source: AlertSource | int) -> bool:
        """Count an alert and keep one in every five; return whether it was kept."""
        self.counter = (self.counter + 1) % _RECORD_EVERY
        if self.counter != _RECORD_SLOT:
            return False
        if source == AlertSource.DEVICES:
            self.devices.add(message)
        elif source == AlertSource.PROCESSES:
            self.processes.add(message)
        else:
            self.ports.add(message)
        return True


class Guard:
    """Runs one round of all monitors and feeds the window.

    Raises ``OSError`` if the mount table cannot be read.
    """

    def __init__(
        self,
        window: ScannerWindow,
        config: Config,
        port_db: PortDatabase,
        scan_config: ScanConfig,
    ) -> None:
        self.window = window
        self.config = config
        self.port_db = port_db
        self.scan_config = scan_config
        self.router = AlertRouter()
        self.processes = ProcessMonitor(config)
        self.usb = UsbMonitor(update_baseline=True)
        self.proc_root: str | os.PathLike[str] = PROC_ROOT
        self.ticks = os.sysconf("SC_CLK_TCK")
        self.num_cpus = os.cpu_count() or 1
        self.previous: list[Process] | None = None

    def _alert(self, message: str, source: AlertSource) -> None:
        self.router.record(message, source)
        self.window.append_alert(message)

    def update(self) -> bool:
        """Sample processes, mounts and ports once; always returns True."""
        self.window.clear_info()

        self.previous = run_iteration(
            self.processes, self.previous, self.ticks, self.num_cpus, self.proc_root
        )
        self.window.append_info(self.processes.processes_text())
        self._alert(self.processes.alerts_text(), AlertSource.PROCESSES)

        device_message = self.usb.poll()
        if device_message is not None:
            self._alert(device_message, AlertSource.DEVICES)

        found: list[int] = []
        scan_ports(self.scan_config, found.append)
        for port in found:
            self.window.append_info(f"[+] Puerto {port} ({get_service_name(port)}) abierto\n")
            self._alert(self.port_db.describe(port), AlertSource.PORTS)

        self._alert("\n", AlertSource.PORTS)
        return True


def _load_database(path: str) -> PortDatabase:
    try:
        return PortDatabase.load(path)
    except OSError as exc:
        print(f"Error al abrir el archivo JSON: {exc}", file=sys.stderr)
    except ValueError as exc:
        print(f"Error al parsear JSON: {exc}")
    return PortDatabase()


def main(argv: list[str] | None = None) -> int:
    """Open the guard window and refresh it every five seconds."""
    parser = argparse.ArgumentParser(description="Watch devices, processes and ports.")
    parser.add_argument("--db", default=DEFAULT_DB_FILE, help="port catalogue (JSON)")
    args = parser.parse_args(argv)

    guard: Guard | None = None

    def export(index: int) -> None:
        if guard is None:
            return
        router = guard.router
        text = report_for_button(
            index, router.devices.text, router.processes.text, router.ports.text
        )
        generate_pdf(text, PDF_FILENAMES[min(index, len(PDF_FILENAMES) - 1)])

    window = ScannerWindow(export)
    port_db = _load_database(args.db)

    config = load_config()
    try:
        guard = Guard(window, config, port_db, ScanConfig())
    except OSError:
        print("Error al leer montajes.", file=sys.stderr)
        return 1

    try:
        config.total_ram_kb = read_mem_total()
    except (OSError, ValueError) as exc:
        print(f"No se pudo obtener MemTotal: {exc}", file=sys.stderr)
        return 1
    config.whitelist = load_whitelist()

    window.schedule(UPDATE_INTERVAL_MS, guard.update)
    window.run()
    return 0