"""Catalogue of known services and suspicious ports."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

DEFAULT_DB_FILE = "config.json"
_NAME_LIMIT = 49
_PROTOCOL_LIMIT = 9
_DESCRIPTION_LIMIT = 49


@dataclass(frozen=True)
class CommonService:
    """A port commonly used by a legitimate service."""

    port: int
    name: str
    protocol: str


@dataclass(frozen=True)
class Anomaly:
    """A port known to be used by suspicious software."""

    port: int
    description: str
    risk: int


def classify_unknown_port(port: int) -> str:
    """Describe a port that is in neither catalogue by its range."""
    if port <= 1024:
        return "[ALERTA] Puerto privilegiado no registrado"
    if port <= 49151:
        return "[INFO] Puerto registrado no catalogado"
    return "[OBSERVADO] Puerto efímero inusual"


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        for key, value in item.items():
            if key.lower() == name.lower():
                return value
    raise ValueError(f"missing field {name!r} in {item!r}")


def _int_field(item: Any, name: str) -> int:
    value = _field(item, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {name!r} must be a number, got {value!r}")
    return int(value)


def _str_field(item: Any, name: str, limit: int) -> str:
    value = _field(item, name)
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string, got {value!r}")
    return value[:limit]


def _section(document: Any, name: str) -> list[Any]:
    if not isinstance(document, dict):
        return []
    section = document.get(name)
    return section if isinstance(section, list) else []


@dataclass(frozen=True)
class PortDatabase:
    """Known services and anomalies, looked up by port number."""

    services: tuple[CommonService, ...] = ()
    anomalies: tuple[Anomaly, ...] = ()

    @classmethod
    def load(cls, path: str | os.PathLike[str] = DEFAULT_DB_FILE) -> PortDatabase:
        """Read the ``servicios_comunes`` and ``anomalias`` lists of a JSON file.

        Raises ``OSError`` if the file cannot be read and ``ValueError`` if it
        is not valid JSON or an entry lacks a field.
        """
        with open(path, encoding="utf-8") as handle:
            document = json.load(handle)
        services = tuple(
            CommonService(
                port=_int_field(item, "puerto"),
                name=_str_field(item, "nombre", _NAME_LIMIT),
                protocol=_str_field(item, "protocolo", _PROTOCOL_LIMIT),
            )
            for item in _section(document, "servicios_comunes")
        )
        anomalies = tuple(
            Anomaly(
                port=_int_field(item, "puerto"),
                description=_str_field(item, "descripcion", _DESCRIPTION_LIMIT),
                risk=_int_field(item, "riesgo"),
            )
            for item in _section(document, "anomalias")
        )
        return cls(services, anomalies)

    def common_service(self, port: int) -> CommonService | None:
        """Return the first known service on ``port``, if any."""
        return next((s for s in self.services if s.port == port), None)

    def anomaly(self, port: int) -> Anomaly | None:
        """Return the first anomaly registered for ``port``, if any."""
        return next((a for a in self.anomalies if a.port == port), None)

    def describe(self, port: int) -> str:
        """Return a one-line verdict on an open port."""
        service = self.common_service(port)
        if service is not None:
            return f"Puerto {port}: Servicio común ({service.name})\n"
        anomaly = self.anomaly(port)
        if anomaly is not None:
            return f"Puerto {port}: {anomaly.description}\n"
        return f"Puerto {port}: {classify_unknown_port(port)}\n"