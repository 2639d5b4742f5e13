# tests/core/logs/test_diagnostics_log.py
"""
Testes do log de diagnóstico de uma carga.

Os testes asseguram que:
- eventos de arquivo e de proveniência são registrados nos níveis canônicos
- `drain_to` encaminha as entradas a um `logging.Logger` e esvazia o buffer
- entradas possuem timestamp UTC

Limites explícitos:
    - Não valida a resolução de fontes
"""

import logging

import pytest

try:
    from atlas_config import load
    from atlas_config.core.logs import DiagnosticsLog
    from atlas_config.core.types import LogLevel
except Exception as e:  # noqa: BLE001
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing DiagnosticsLog. Implement:\n"
            "- src/atlas_config/core/logs.py (DiagnosticsLog, LogEntry)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_load_records_provenance_events(make_registry, write_config, tmp_path):
    _require_imports()
    absent = str(tmp_path / "absent.yaml")
    path = write_config("app.yaml", "host: db\nlegacy: 1\n")
    registry = make_registry(absent, path)
    registry.attribute("port", default=1)
    registry.attribute("host")
    registry.attribute("mode", default="x")

    config = load(registry, environ={"APP_PORT": "2"})

    assert [(e.level, e.message) for e in config.logs] == [
        (LogLevel.DEBUG, f"Not found {absent}"),
        (LogLevel.INFO, f"Loaded {path}"),
        (LogLevel.DEBUG, "Config 'port' loaded from env var APP_PORT"),
        (LogLevel.DEBUG, f"Config 'host' loaded from {path}"),
        (LogLevel.DEBUG, "Config 'mode' set to default"),
        (LogLevel.WARN, f"Ignoring unrecognized config 'legacy' (source: {path})"),
    ]
    assert all(e.timestamp.endswith("+00:00") for e in config.logs)


def test_drain_to_forwards_and_clears(caplog):
    _require_imports()
    logs = DiagnosticsLog()
    logs.info("Loaded /etc/app.yaml")
    logs.warn("Ignoring unrecognized config 'x' (source: /etc/app.yaml)")
    logs.error("Failed to coerce attribute: count", "ValueError: invalid literal")

    logger = logging.getLogger("tests.atlas_config")
    with caplog.at_level(logging.DEBUG, logger="tests.atlas_config"):
        drained = logs.drain_to(logger)

    assert drained == 3
    assert len(logs) == 0
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.INFO, "config: Loaded /etc/app.yaml"),
        (logging.WARNING, "config: Ignoring unrecognized config 'x' (source: /etc/app.yaml)"),
        (logging.ERROR, "config: Failed to coerce attribute: count\nValueError: invalid literal"),
    ]
