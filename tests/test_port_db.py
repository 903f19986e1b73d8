import json

import pytest

from matcomguard.port_db import (
    Anomaly,
    CommonService,
    PortDatabase,
    classify_unknown_port,
)


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "servicios_comunes": [
            {"puerto": 22, "nombre": "ssh", "protocolo": "tcp"},
            {"puerto": 80, "nombre": "http", "protocolo": "tcp"},
        ],
        "anomalias": [
            {"puerto": 31337, "descripcion": "Back Orifice", "riesgo": 5},
            {"puerto": 80, "descripcion": "Shadowed", "riesgo": 1},
        ],
    }))
    return path


def test_load_reads_both_sections(db_path):
    db = PortDatabase.load(db_path)
    assert db.services == (
        CommonService(22, "ssh", "tcp"),
        CommonService(80, "http", "tcp"),
    )
    assert db.anomaly(31337) == Anomaly(31337, "Back Orifice", 5)
    assert db.common_service(443) is None


def test_describe_common_service(db_path):
    db = PortDatabase.load(db_path)
    assert db.describe(22) == "Puerto 22: Servicio común (ssh)\n"


def test_describe_prefers_common_service_over_anomaly(db_path):
    db = PortDatabase.load(db_path)
    assert db.describe(80) == "Puerto 80: Servicio común (http)\n"


def test_describe_anomaly(db_path):
    db = PortDatabase.load(db_path)
    assert db.describe(31337) == "Puerto 31337: Back Orifice\n"


def test_describe_unknown_port_uses_classification():
    db = PortDatabase()
    assert db.describe(8080) == f"Puerto 8080: {classify_unknown_port(8080)}\n"


@pytest.mark.parametrize(
    ("port", "expected"),
    [
        (1, "[ALERTA] Puerto privilegiado no registrado"),
        (1024, "[ALERTA] Puerto privilegiado no registrado"),
        (1025, "[INFO] Puerto registrado no catalogado"),
        (49151, "[INFO] Puerto registrado no catalogado"),
        (49152, "[OBSERVADO] Puerto efímero inusual"),
    ],
)
def test_classify_unknown_port(port, expected):
    assert classify_unknown_port(port) == expected


def test_long_strings_are_truncated(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "servicios_comunes": [{"puerto": 1, "nombre": "n" * 60, "protocolo": "p" * 20}],
        "anomalias": [{"puerto": 2, "descripcion": "d" * 80, "riesgo": 3}],
    }))
    db = PortDatabase.load(path)
    assert len(db.services[0].name) == 49
    assert len(db.services[0].protocol) == 9
    assert len(db.anomalies[0].description) == 49


def test_missing_sections_give_empty_database(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{}")
    assert PortDatabase.load(path) == PortDatabase()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        PortDatabase.load(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        PortDatabase.load(path)


def test_entry_without_field_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"servicios_comunes": [{"puerto": 22}]}))
    with pytest.raises(ValueError):
        PortDatabase.load(path)