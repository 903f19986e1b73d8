from matcomguard.config import Config
from matcomguard.processes import (
    NO_ALERTS,
    NO_DATA,
    UNKNOWN_NAME,
    Process,
    ProcessMonitor,
    read_processes,
)


def _make_proc(root, pid, name="bash", rss_line="VmRSS:\t    2048 kB\n",
               utime=100, stime=0, with_comm=True, with_status=True):
    directory = root / str(pid)
    directory.mkdir()
    if with_comm:
        (directory / "comm").write_text(f"{name}\n")
    if with_status:
        (directory / "status").write_text(f"Name:\t{name}\n{rss_line}Threads:\t1\n")
    zeros = " ".join(["0"] * 10)
    (directory / "stat").write_text(f"{pid} ({name}) S {zeros} {utime} {stime} 0 0 20 0\n")


def test_read_processes_parses_fields(tmp_path):
    _make_proc(tmp_path, 123, name="bash", utime=250, stime=50)
    (tmp_path / "self").mkdir()
    processes = read_processes(100, tmp_path)
    assert len(processes) == 1
    process = processes[0]
    assert process.pid == 123
    assert process.name == "bash"
    assert process.ram_kb == 2048
    assert process.cpu_s == 3.0
    assert process.time_over_threshold == 0


def test_read_processes_defaults_for_missing_data(tmp_path):
    _make_proc(tmp_path, 7, rss_line="", with_comm=False)
    [process] = read_processes(100, tmp_path)
    assert process.name == UNKNOWN_NAME
    assert process.ram_kb == -1


def test_read_processes_skips_unreadable_status(tmp_path):
    _make_proc(tmp_path, 1, name="init")
    _make_proc(tmp_path, 2, name="gone", with_status=False)
    assert [p.name for p in read_processes(100, tmp_path)] == ["init"]


def test_texts_before_and_after_reset():
    monitor = ProcessMonitor(Config())
    assert monitor.processes_text() == NO_DATA
    assert monitor.alerts_text() == NO_ALERTS
    monitor.reset()
    assert monitor.processes_text() == ""
    assert monitor.alerts_text() == ""


def test_compare_reports_usage_and_alerts():
    config = Config(cpu_threshold=50.0, ram_threshold=90.0, time_threshold=1, total_ram_kb=1000)
    monitor = ProcessMonitor(config)
    monitor.reset()
    before = Process(1, "x", 500, 0.0, 4)
    after = Process(1, "x", 500, 5.0)
    monitor.compare([before], [after], 1)
    assert monitor.processes_text() == "Proceso 'x' (PID 1) CPU: 100.00 % | RAM: 50.00 % (500 KB)\n"
    assert monitor.alerts_text().startswith("⚠️ ALERTA: 'x' (PID 1) CPU: 100.00 %")
    assert after.time_over_threshold == before.time_over_threshold + 1


def test_compare_below_threshold_resets_counter():
    config = Config(cpu_threshold=50.0, ram_threshold=90.0, time_threshold=1, total_ram_kb=1000)
    monitor = ProcessMonitor(config)
    monitor.reset()
    after = Process(2, "idle", -1, 3.0)
    monitor.compare([Process(2, "idle", -1, 3.0, 6)], [after], 4)
    assert after.time_over_threshold == 0
    assert monitor.alerts_text() == ""
    assert "(-1 KB)" in monitor.processes_text()


def test_zero_time_threshold_alerts_every_known_process():
    monitor = ProcessMonitor(Config(cpu_threshold=50.0, ram_threshold=50.0, time_threshold=0))
    monitor.reset()
    monitor.compare([Process(3, "calm", 10, 1.0)], [Process(3, "calm", 10, 1.0)], 1)
    assert "ALERTA: 'calm' (PID 3)" in monitor.alerts_text()


def test_whitelisted_process_does_not_alert():
    config = Config(time_threshold=0, whitelist=["x"])
    monitor = ProcessMonitor(config)
    monitor.reset()
    monitor.compare([Process(1, "x", 10, 0.0)], [Process(1, "x", 10, 9.0)], 1)
    assert monitor.alerts_text() == ""
    assert "Proceso 'x' (PID 1)" in monitor.processes_text()


def test_new_process_is_not_reported():
    monitor = ProcessMonitor(Config())
    monitor.reset()
    fresh = Process(9, "new", 10, 1.0, 3)
    monitor.compare([Process(1, "old", 10, 0.0)], [fresh], 1)
    assert monitor.processes_text() == ""
    assert monitor.alerts_text() == ""
    assert fresh.time_over_threshold == 0