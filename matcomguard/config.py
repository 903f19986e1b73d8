"""Monitor thresholds, total memory and process whitelist."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

CONFIG_FILE = "/etc/matcomguard.conf"
WHITELIST_FILE = "/etc/matcomguard_whitelist.conf"
MEMINFO_FILE = "/proc/meminfo"

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _leading_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _is_skipped(line: str) -> bool:
    return line.startswith(("#", "\n"))


@dataclass
class Config:
    """Thresholds that decide when a process raises an alert."""

    cpu_threshold: float = 0.0
    ram_threshold: float = 0.0
    time_threshold: int = 0
    total_ram_kb: int = 0
    service_mode: bool = False
    whitelist: list[str] = field(default_factory=list)

    def is_whitelisted(self, name: str) -> bool:
        """Tell whether a process name is exempt from alerts."""
        return name in self.whitelist


def _key_value(line: str) -> tuple[str, str] | None:
    key, sep, rest = line.partition("=")
    if not sep or not key:
        return None
    words = rest.split()
    if not words:
        return None
    return key, words[0]


def load_config(path: str | os.PathLike[str] = CONFIG_FILE) -> Config:
    """Read ``KEY=value`` settings; a missing file yields the defaults."""
    config = Config()
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError:
        print(f"No se pudo abrir {os.fspath(path)}, usando valores por defecto. ")
        return config

    with handle:
        for line in handle:
            if _is_skipped(line):
                continue
            parsed = _key_value(line)
            if parsed is None:
                continue
            key, value = parsed
            if key == "UMBRAL_CPU":
                config.cpu_threshold = _leading_float(value)
            elif key == "UMBRAL_RAM":
                config.ram_threshold = _leading_float(value)
            elif key == "TIEMPO_UMBRAL":
                config.time_threshold = _leading_int(value)
            elif key == "MODO_SERVICIO":
                config.service_mode = bool(_leading_int(value))

    print("Configuración cargada:")
    print(f"  UMBRAL_CPU: {config.cpu_threshold:.2f}")
    print(f"  UMBRAL_RAM: {config.ram_threshold:.2f}")
    print(f"  TIEMPO_UMBRAL: {config.time_threshold}")
    return config


def read_mem_total(path: str | os.PathLike[str] = MEMINFO_FILE) -> int:
    """Return the system's total memory in kB.

    Raises ``OSError`` if the file cannot be read and ``ValueError`` if it
    holds no usable ``MemTotal`` line.
    """
    total = 0
    with open(path, encoding="utf-8", errors="replace") as handle:
        for line in handle:
            if line.startswith("MemTotal:"):
                total = _leading_int(line[len("MemTotal:"):])
                break
    if total == 0:
        raise ValueError("No se pudo obtener MemTotal")
    print(f"Memoria total del sistema: {total} KB")
    return total


def load_whitelist(path: str | os.PathLike[str] = WHITELIST_FILE) -> list[str]:
    """Read one process name per line; a missing file yields an empty list."""
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError:
        print(f"No se pudo abrir {os.fspath(path)}. Sin whitelist.")
        return []

    with handle:
        names = [line.split("\n", 1)[0] for line in handle if not _is_skipped(line)]

    print(f"Whitelist cargada ({len(names)} procesos):")
    for name in names:
        print(f"  - {name}")
    return names