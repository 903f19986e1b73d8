"""Command that samples processes periodically and prints usage and alerts."""

from __future__ import annotations

import argparse
import os
import sys
import time

from matcomguard.config import (
    CONFIG_FILE,
    MEMINFO_FILE,
    WHITELIST_FILE,
    load_config,
    load_whitelist,
    read_mem_total,
)
from matcomguard.processes import (
    PROC_ROOT,
    SAMPLE_INTERVAL,
    Process,
    ProcessMonitor,
    read_processes,
)

DEFAULT_ITERATIONS = 5


def run_iteration(
    monitor: ProcessMonitor,
    previous: list[Process] | None,
    ticks: int,
    num_cpus: int,
    proc_root: str | os.PathLike[str] = PROC_ROOT,
) -> list[Process]:
    """Take one sample, compare it with ``previous`` if there is one, and return it."""
    current = read_processes(ticks, proc_root)
    monitor.reset()
    if previous is not None:
        monitor.compare(previous, current, num_cpus)
    return current


def main(argv: list[str] | None = None) -> int:
    """Sample processes every few seconds and print usage and alerts."""
    parser = argparse.ArgumentParser(description="Report processes that use too much CPU or RAM.")
    parser.add_argument("--config", default=CONFIG_FILE)
    parser.add_argument("--whitelist", default=WHITELIST_FILE)
    parser.add_argument("--meminfo", default=MEMINFO_FILE)
    parser.add_argument("--proc", default=PROC_ROOT)
    parser.add_argument("--interval", type=float, default=SAMPLE_INTERVAL)
    parser.add_argument("--iterations", type=int, default=DEFAULT_ITERATIONS)
    args = parser.parse_args(argv)

    config = load_config(args.config)
    try:
        config.total_ram_kb = read_mem_total(args.meminfo)
    except (OSError, ValueError) as exc:
        print(f"No se pudo obtener MemTotal: {exc}", file=sys.stderr)
        return 1
    config.whitelist = load_whitelist(args.whitelist)

    ticks = os.sysconf("SC_CLK_TCK")
    num_cpus = os.cpu_count() or 1
    monitor = ProcessMonitor(config)

    previous: list[Process] | None = None
    iteration = 0
    while True:
        iteration += 1
        previous = run_iteration(monitor, previous, ticks, num_cpus, args.proc)
        print(f"\n--- Procesos ---\n{monitor.processes_text()}\n")
        print(f"\n--- Alertas ---\n{monitor.alerts_text()}\n")
        time.sleep(args.interval)
        if not (config.service_mode or iteration < args.iterations):
            return 0