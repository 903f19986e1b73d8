from matcomguard.config import Config, load_config, load_whitelist, read_mem_total

import pytest


def test_load_config_reads_all_keys(tmp_path):
    path = tmp_path / "guard.conf"
    path.write_text(
        "# comment\n"
        "\n"
        "UMBRAL_CPU=50.5\n"
        "UMBRAL_RAM=20\n"
        "TIEMPO_UMBRAL=3\n"
        "MODO_SERVICIO=1\n"
    )
    config = load_config(path)
    assert config.cpu_threshold == 50.5
    assert config.ram_threshold == 20.0
    assert config.time_threshold == 3
    assert config.service_mode is True


def test_load_config_numeric_prefix_and_unknown_keys(tmp_path):
    path = tmp_path / "guard.conf"
    path.write_text("UMBRAL_CPU=12abc\nUMBRAL_RAM =40\nOTRA=7\nTIEMPO_UMBRAL=\n")
    config = load_config(path)
    assert config.cpu_threshold == 12.0
    assert config.ram_threshold == 0.0
    assert config.time_threshold == 0


def test_load_config_missing_file_gives_defaults(tmp_path, capsys):
    config = load_config(tmp_path / "absent.conf")
    assert config == Config()
    assert "valores por defecto" in capsys.readouterr().out


def test_read_mem_total(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal:       16303740 kB\nMemFree:         1000 kB\n")
    assert read_mem_total(path) == 16303740


def test_read_mem_total_without_entry_raises(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemFree:         1000 kB\n")
    with pytest.raises(ValueError):
        read_mem_total(path)


def test_read_mem_total_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_mem_total(tmp_path / "absent")


def test_load_whitelist_skips_comments_and_blank_lines(tmp_path):
    path = tmp_path / "whitelist.conf"
    path.write_text("# trusted\nsshd\n\nsystemd\nlast")
    assert load_whitelist(path) == ["sshd", "systemd", "last"]


def test_load_whitelist_missing_file(tmp_path):
    assert load_whitelist(tmp_path / "absent") == []


def test_is_whitelisted_exact_match():
    config = Config(whitelist=["sshd", "cron"])
    assert config.is_whitelisted("cron")
    assert not config.is_whitelisted("cro")
    assert not config.is_whitelisted("SSHD")