import socket

import pytest

from matcomguard.app import AlertRouter, AlertSource, Guard
from matcomguard.config import Config
from matcomguard.gui import ScannerWindow
from matcomguard.port_db import CommonService, PortDatabase
from matcomguard.port_scanner import ScanConfig
from matcomguard.usb_monitor import UsbMonitor

ROOT_LINE = "/dev/sda1 / ext4 rw 0 0\n"


@pytest.fixture
def listener():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        yield sock.getsockname()[1]


@pytest.fixture
def guard(tmp_path, listener):
    proc = tmp_path / "proc"
    (proc / "7").mkdir(parents=True)
    (proc / "7" / "comm").write_text("daemon\n")
    (proc / "7" / "status").write_text("VmRSS:\t10 kB\n")
    (proc / "7" / "stat").write_text(" ".join(["7", "(daemon)", "S"] + ["0"] * 15) + "\n")
    mounts = tmp_path / "mounts"
    mounts.write_text(ROOT_LINE)

    window = ScannerWindow()
    database = PortDatabase(services=(CommonService(listener, "demo", "tcp"),))
    scan = ScanConfig("127.0.0.1", listener, listener, 1.0)
    result = Guard(window, Config(total_ram_kb=1000), database, scan)
    result.proc_root = proc
    result.usb = UsbMonitor(mounts, update_baseline=True)
    return result


def test_router_keeps_every_fifth_alert():
    router = AlertRouter()
    kept = [router.record(f"m{n}", AlertSource.DEVICES) for n in range(10)]
    assert kept == [False, False, False, True, False, False, False, False, True, False]
    assert router.devices.text == "m3m8"


def test_router_routes_by_source():
    router = AlertRouter()
    for _ in range(3):
        router.record("skip", AlertSource.DEVICES)
    assert router.record("port alert", AlertSource.PORTS)
    assert router.ports.text == "port alert"
    assert router.devices.text == ""
    assert router.processes.text == ""


def test_update_reports_open_port(guard, listener):
    assert guard.update() is True
    assert f"[+] Puerto {listener} (" in guard.window.info
    assert f"Puerto {listener}: Servicio común (demo)\n" in guard.window.alerts
    assert guard.window.alerts.endswith("\n")


def test_update_clears_info_each_round(guard, listener):
    guard.update()
    guard.update()
    assert guard.window.info.count(f"[+] Puerto {listener} (") == 1
    assert "Proceso 'daemon' (PID 7)" in guard.window.info


def test_update_detects_new_device(guard, tmp_path):
    media = tmp_path / "media"
    media.mkdir()
    (media / "doc.txt").write_text("data")
    (tmp_path / "mounts").write_text(ROOT_LINE + f"/dev/sdb1 {media} vfat rw 0 0\n")
    guard.update()
    assert "Nuevo dispositivo detectado" in guard.window.alerts
    assert [entry.path for entry in guard.usb.baseline] == ["doc.txt"]