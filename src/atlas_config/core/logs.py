# src/atlas_config/core/logs.py
"""
Log de diagnóstico de uma carga de configuração.

Cada instância de configuração possui seu próprio `DiagnosticsLog`, uma
lista append-only de entradas `(nível, mensagem)` acumuladas durante a
resolução:
    - arquivo carregado / não encontrado
    - atributo definido a partir de env, arquivo ou default
    - chave não reconhecida ignorada
    - falha de coerção

O engine nunca escreve diretamente em um logger. A aplicação hospedeira
drena o buffer para o seu próprio `logging.Logger` após a carga, via
`drain_to`.

Invariantes:
    - Entradas são acrescentadas na ordem em que os eventos ocorrem
    - `drain_to` esvazia o buffer

Limites explícitos:
    - Não é sincronizado entre threads; o chamador é responsável
      se compartilhar uma instância
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterator, List, Optional

from .types import LogLevel, SourceType

if TYPE_CHECKING:  # pragma: no cover
    from .resolution.source import SourceStruct


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class LogEntry:
    level: LogLevel
    message: str
    detail: Optional[str] = None
    timestamp: str = field(default_factory=_utc_now)


_LOGGER_METHODS = {
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARN: "warning",
    LogLevel.ERROR: "error",
}


@dataclass
class DiagnosticsLog:
    """Buffer append-only de eventos de diagnóstico."""

    entries: List[LogEntry] = field(default_factory=list)

    # -----------------------------
    # Eventos canônicos
    # -----------------------------
    def file_loaded(self, path: str) -> None:
        self.info(f"Loaded {path}")

    def file_not_found(self, path: str) -> None:
        self.debug(f"Not found {path}")

    def set_from_source(self, key: str, source: "SourceStruct") -> None:
        if not source.recognized:
            self.warn(f"Ignoring unrecognized config '{key}' (source: {source.source})")
        elif source.type is SourceType.DEFAULT:
            self.debug(f"Config '{key}' set to default")
        elif source.type is SourceType.ENV:
            self.debug(f"Config '{key}' loaded from env var {source.source}")
        else:
            self.debug(f"Config '{key}' loaded from {source.source}")

    # -----------------------------
    # Níveis
    # -----------------------------
    def debug(self, message: str, detail: Optional[str] = None) -> None:
        self._append(LogLevel.DEBUG, message, detail)

    def info(self, message: str, detail: Optional[str] = None) -> None:
        self._append(LogLevel.INFO, message, detail)

    def warn(self, message: str, detail: Optional[str] = None) -> None:
        self._append(LogLevel.WARN, message, detail)

    def error(self, message: str, detail: Optional[str] = None) -> None:
        self._append(LogLevel.ERROR, message, detail)

    def _append(self, level: LogLevel, message: str, detail: Optional[str]) -> None:
        self.entries.append(LogEntry(level=level, message=message, detail=detail))

    # -----------------------------
    # Consumo
    # -----------------------------
    def messages(self, level: Optional[LogLevel] = None) -> List[str]:
        return [e.message for e in self.entries if level is None or e.level is level]

    def drain_to(self, logger: logging.Logger, prefix: str = "config: ") -> int:
        """
        Encaminha todas as entradas para `logger` e esvazia o buffer.

        Returns:
            int: número de entradas encaminhadas.
        """
        drained = len(self.entries)
        for entry in self.entries:
            log = getattr(logger, _LOGGER_METHODS[entry.level])
            if entry.detail:
                log("%s%s\n%s", prefix, entry.message, entry.detail)
            else:
                log("%s%s", prefix, entry.message)
        self.entries.clear()
        return drained

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
