# matcomguard

A small host guard for Linux. It watches three things:

- **Removable media.** A new mount of type `vfat`, `exfat`, `ntfs` or
  `vboxsf` in `/proc/mounts` is noticed. Every file on it is hashed with
  SHA-256. Later scans report files that were modified, deleted or added.
  One device is tracked at a time.
- **Processes.** CPU and memory use are read from `/proc` for every process.
  A process that stays above a configured threshold for enough samples in a
  row raises an alert, unless its name is on the whitelist.
- **Ports.** Every TCP port on `127.0.0.1` is probed with 32 threads. Each
  open port is described as a common service, a known anomaly, or an
  unregistered port classed by its range (privileged up to 1024, registered
  up to 49151, ephemeral above).

## Installation

```
pip install .
```

Python 3.10 or later is needed. There are no third-party runtime
dependencies. The window uses Tkinter, which comes with most Python builds.

## Commands

### `matcomguard`

Opens a window titled "Scanner con PDF" and runs all three monitors every
5 seconds. The middle pane shows process usage and open ports; the right pane
shows alerts. Here each device scan is compared with the previous one.

The four buttons ("Escanear dispositivos", "Escanear procesos",
"Escanear puertos", "Escanear todo") write a PDF of kept alerts to
`dispositivos.pdf`, `procesos.pdf`, `puertos.pdf` or `todo.pdf` in the
current directory. Only a sample of the alerts is kept for export: one out
of every five alerts shown.

Option: `--db PATH` — port catalogue (default `config.json`).

### `matcomguard-usb`

Watches the mount table and prints device events and file changes. Each scan
is compared with the first scan taken when the device appeared.

Options: `--mounts PATH` (default `/proc/mounts`), `--interval SECONDS`
(default 5), `--count N` (number of polls, 0 for ever; default 0).

### `matcomguard-procs`

Prints process usage and alerts every few seconds. It stops after
`--iterations` rounds (default 5) unless `MODO_SERVICIO` is set.

Options: `--config`, `--whitelist`, `--meminfo`, `--proc`,
`--interval SECONDS` (default 5), `--iterations N`.

### `matcomguard-ports`

Scans TCP ports over and over, clearing the screen before each scan.

Options: `--config PATH` (default `config.json`), `--ip` (default
`127.0.0.1`), `--start` (default 1), `--end` (default 65535),
`--timeout SECONDS` (default 1), `--interval SECONDS` (default 3), `--once`.

## Configuration

### Process thresholds: `/etc/matcomguard.conf`

One `KEY=value` pair per line. Lines that start with `#` are ignored. A
missing file leaves every value at 0.

```
UMBRAL_CPU=80
UMBRAL_RAM=50
TIEMPO_UMBRAL=3
MODO_SERVICIO=1
```

- `UMBRAL_CPU` and `UMBRAL_RAM` are percentages.
- `TIEMPO_UMBRAL` is how many consecutive samples a process must stay above
  a threshold before it raises an alert.
- `MODO_SERVICIO=1` keeps `matcomguard-procs` running.

Total memory is read from `/proc/meminfo`; the commands stop with an error if
it cannot be found.

### Whitelist: `/etc/matcomguard_whitelist.conf`

One process name per line. These processes never raise alerts.

```
# trusted processes
firefox
code
```

### Port catalogue: `config.json`

```json
{
  "servicios_comunes": [
    {"puerto": 22, "nombre": "ssh", "protocolo": "tcp"}
  ],
  "anomalias": [
    {"puerto": 31337, "descripcion": "Back Orifice", "riesgo": 5}
  ]
}
```

If the file is missing or cannot be parsed, every open port is classed by
its range alone.

## Use as a library

```python
from matcomguard.files import scan_directory, compare_and_report, save_baseline, load_baseline
from matcomguard.mounts import read_mounts, find_new_mount
from matcomguard.port_db import PortDatabase, classify_unknown_port
from matcomguard.port_scanner import ScanConfig, scan_ports
from matcomguard.pdf import generate_pdf

before = scan_directory("/media/stick")
after = scan_directory("/media/stick")
report, changed = compare_and_report(before, after)

db = PortDatabase.load("config.json")
print(db.describe(22))
print(classify_unknown_port(8080))

open_ports = scan_ports(ScanConfig(start_port=1, end_port=1024))

generate_pdf("first line\nsecond line\n", "report.pdf")
```

Other modules: `matcomguard.config` (`load_config`, `read_mem_total`,
`load_whitelist`), `matcomguard.processes` (`read_processes`,
`ProcessMonitor`), `matcomguard.msglist` (`MessageList`) and
`matcomguard.files.log_event`, which appends a timestamped line to
`log.txt`.

## What it does not do

- The commands do not store device baselines between runs; `save_baseline`
  and `load_baseline` are there for callers that want to.
- Only IPv4 TCP ports are scanned; there is no UDP scan.
- The PDF export uses the built-in Helvetica font and plain centred lines;
  characters outside Windows-1252 are replaced.

## Running the tests

```
pip install .[test]
pytest
```