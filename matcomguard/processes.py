"""Process sampling from a proc filesystem and threshold alerts."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from matcomguard.config import Config

PROC_ROOT = "/proc"
SAMPLE_INTERVAL = 5.0
UNKNOWN_NAME = "Desconocido"
NO_DATA = "Sin datos.\n"
NO_ALERTS = "Sin alertas.\n"
_NAME_LIMIT = 255
_STAT_LIMIT = 4095

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_VMRSS = re.compile(r"VmRSS:\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class Process:
    """One sampled process."""

    pid: int
    name: str
    ram_kb: int
    cpu_s: float
    time_over_threshold: int = 0


def _read_name(path: str) -> str:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(_NAME_LIMIT)
    except OSError:
        return UNKNOWN_NAME
    if not line:
        return UNKNOWN_NAME
    return line.split("\n", 1)[0]


def _read_rss(path: str) -> int:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if line.startswith("VmRSS"):
                    match = _VMRSS.match(line)
                    return int(match.group(1)) if match else -1
    except OSError:
        pass
    return -1


def _read_cpu_seconds(path: str, ticks: int) -> float:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(_STAT_LIMIT)
    except OSError:
        return 0.0
    if not line:
        return 0.0
    tokens = [token for token in line.split(" ") if token]
    user = _leading_int(tokens[13]) if len(tokens) > 13 else 0
    system = _leading_int(tokens[14]) if len(tokens) > 14 else 0
    return (user + system) / float(ticks)


def read_processes(ticks: int, proc_root: str | os.PathLike[str] = PROC_ROOT) -> list[Process]:
    """Sample every process directory under ``proc_root``.

    ``ticks`` is the number of clock ticks per second. Processes whose
    ``status`` file is not readable are left out.
    """
    root = os.fspath(proc_root)
    processes = []
    for entry in os.listdir(root):
        if not entry[:1].isdigit():
            continue
        directory = os.path.join(root, entry)
        name = _read_name(os.path.join(directory, "comm"))
        status = os.path.join(directory, "status")
        if not os.access(status, os.R_OK):
            continue
        processes.append(
            Process(
                pid=_leading_int(entry),
                name=name,
                ram_kb=_read_rss(status),
                cpu_s=_read_cpu_seconds(os.path.join(directory, "stat"), ticks),
            )
        )
    return processes


class ProcessMonitor:
    """Compares successive samples and collects usage lines and alerts."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._processes: str | None = None
        self._alerts: str | None = None

    def reset(self) -> None:
        """Empty the collected usage lines and alerts."""
        self._processes = ""
        self._alerts = ""

    def compare(self, previous: list[Process], current: list[Process], num_cpus: int) -> None:
        """Report usage of processes seen in both samples and flag the heavy ones.

        Updates ``time_over_threshold`` of every process in ``current``.
        """
        by_pid: dict[int, Process] = {}
        for process in previous:
            by_pid.setdefault(process.pid, process)

        total = self.config.total_ram_kb
        for process in current:
            before = by_pid.get(process.pid)
            if before is None:
                process.time_over_threshold = 0
                continue

            delta = process.cpu_s - before.cpu_s
            cpu = (delta / SAMPLE_INTERVAL) * 100.0 / num_cpus
            if process.ram_kb != -1 and total != 0:
                ram = process.ram_kb / total * 100.0
            else:
                ram = 0.0
            figures = f"CPU: {cpu:.2f} % | RAM: {ram:.2f} % ({process.ram_kb} KB)\n"
            self._processes = (self._processes or "") + (
                f"Proceso '{process.name}' (PID {process.pid}) {figures}"
            )

            if cpu > self.config.cpu_threshold or ram > self.config.ram_threshold:
                process.time_over_threshold = before.time_over_threshold + 1
            else:
                process.time_over_threshold = 0

            if (
                process.time_over_threshold >= self.config.time_threshold
                and not self.config.is_whitelisted(process.name)
            ):
                self._alerts = (self._alerts or "") + (
                    f"⚠️ ALERTA: '{process.name}' (PID {process.pid}) {figures}"
                )

    def processes_text(self) -> str:
        """Return the collected usage lines."""
        return NO_DATA if self._processes is None else self._processes

    def alerts_text(self) -> str:
        """Return the collected alerts."""
        return NO_ALERTS if self._alerts is None else self._alerts