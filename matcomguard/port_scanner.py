"""Threaded TCP connect scanner."""

from __future__ import annotations

import argparse
import errno
import select
import socket
import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable

from matcomguard.port_db import DEFAULT_DB_FILE, PortDatabase

UNKNOWN_SERVICE = "Desconocido"
DEFAULT_WORKERS = 32
_CLEAR_SCREEN = "\033[H\033[2J"


@dataclass(frozen=True)
class ScanConfig:
    """Target and port range of a scan."""

    target_ip: str = "127.0.0.1"
    start_port: int = 1
    end_port: int = 65535
    timeout: float = 1.0


def get_service_name(port: int) -> str:
    """Return the registered TCP service name for ``port``."""
    try:
        return socket.getservbyport(port, "tcp")
    except (OSError, OverflowError):
        return UNKNOWN_SERVICE


def test_port(ip: str, port: int, timeout: float) -> bool:
    """Tell whether a TCP connection to ``ip:port`` succeeds within ``timeout``.

    Raises ``ValueError`` if ``ip`` is not an IPv4 address.
    """
    try:
        socket.inet_pton(socket.AF_INET, ip)
    except OSError as exc:
        raise ValueError(f"invalid IPv4 address: {ip!r}") from exc

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setblocking(False)
        result = sock.connect_ex((ip, port))
        if result == 0:
            return True
        if result not in (errno.EINPROGRESS, errno.EWOULDBLOCK):
            return False
        _, writable, _ = select.select([], [sock], [], timeout)
        if not writable:
            return False
        return sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR) == 0


test_port.__test__ = False  # keep test runners from collecting it


def scan_ports(
    config: ScanConfig,
    on_open: Callable[[int], None] | None = None,
    workers: int = DEFAULT_WORKERS,
) -> list[int]:
    """Scan the configured range with ``workers`` threads.

    ``on_open`` is called, one call at a time, for every open port. Returns
    the open ports in ascending order.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")

    ports = iter(range(config.start_port, config.end_port + 1))
    lock = threading.Lock()
    open_ports: list[int] = []

    def worker() -> None:
        while True:
            with lock:
                port = next(ports, None)
            if port is None:
                return
            try:
                is_open = test_port(config.target_ip, port, config.timeout)
            except (OSError, ValueError):
                print(f"\033[31m  [!] Error al escanear puerto {port}\033[0m")
                continue
            if is_open:
                with lock:
                    if on_open is not None:
                        on_open(port)
                    open_ports.append(port)

    threads = [threading.Thread(target=worker, daemon=True) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return sorted(open_ports)


def _load_database(path: str) -> PortDatabase:
    try:
        return PortDatabase.load(path)
    except OSError as exc:
        print(f"Error al abrir el archivo JSON: {exc}", file=sys.stderr)
    except ValueError as exc:
        print(f"Error al parsear JSON: {exc}")
    return PortDatabase()


def main(argv: list[str] | None = None) -> int:
    """Scan ports repeatedly and report what is listening."""
    parser = argparse.ArgumentParser(description="Scan TCP ports and flag unusual ones.")
    parser.add_argument("--config", default=DEFAULT_DB_FILE, help="port catalogue (JSON)")
    parser.add_argument("--ip", default=ScanConfig.target_ip, help="IPv4 address to scan")
    parser.add_argument("--start", type=int, default=ScanConfig.start_port)
    parser.add_argument("--end", type=int, default=ScanConfig.end_port)
    parser.add_argument("--timeout", type=float, default=ScanConfig.timeout)
    parser.add_argument("--interval", type=float, default=3.0, help="seconds between scans")
    parser.add_argument("--once", action="store_true", help="scan a single time and exit")
    args = parser.parse_args(argv)

    database = _load_database(args.config)
    config = ScanConfig(args.ip, args.start, args.end, args.timeout)

    def report(port: int) -> None:
        print(f"[+] Puerto {port} ({get_service_name(port)}) abierto")
        print(database.describe(port), end="")

    while True:
        if not args.once:
            print(_CLEAR_SCREEN, end="", flush=True)
        scan_ports(config, report)
        if args.once:
            return 0
        time.sleep(args.interval)