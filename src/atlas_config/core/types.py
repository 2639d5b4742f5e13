# src/atlas_config/core/types.py
"""
Tipos canônicos do Atlas Config.

Este módulo define os enums e registros imutáveis que padronizam a
comunicação entre resolver, validação e formatação de diagnósticos.

Componentes principais:
    - SourceType       → origem de um valor resolvido (env, file, default)
    - CellState        → estado de um campo calculado sob demanda
    - FailureKind      → classificação de uma falha de validação
    - LogLevel         → níveis do log de diagnóstico
    - ValidationFailure→ registro imutável de uma falha

Princípios fundamentais:
    - Enums possuem valores textuais canônicos e estáveis
    - Nenhuma lógica de resolução vive neste módulo

Limites explícitos:
    - Não resolve fontes
    - Não formata mensagens
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SourceType(str, Enum):
    """
    Origem de um valor resolvido.

    Tipos definidos:
        - ENV: variável de ambiente (`{PREFIXO}_{CHAVE}`)
        - FILE: documento de configuração identificado pelo caminho
        - DEFAULT: default declarado no `AttributeSpec`

    Invariantes:
        - Todo `SourceStruct` possui exatamente um `SourceType`
    """
    ENV = "env"
    FILE = "file"
    DEFAULT = "default"


class CellState(str, Enum):
    """
    Estado de um campo calculado no máximo uma vez.

    Estados definidos:
        - NOT_COMPUTED: o cálculo ainda não foi executado
        - OK: o cálculo terminou e o valor está memoizado
        - FAILED: o cálculo falhou e a falha está memoizada

    Não existem transições a partir de OK ou FAILED.
    """
    NOT_COMPUTED = "not_computed"
    OK = "ok"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Classificação de uma falha de validação."""
    MISSING = "missing"
    TRANSFORM = "transform"
    EXTERNAL = "external"


class LogLevel(str, Enum):
    """Níveis aceitos pelo log de diagnóstico."""
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class ValidationFailure:
    """
    Falha de validação associada a uma chave.

    Campos:
        - key: chave do atributo (None para falhas gerais)
        - kind: tipo da falha (`FailureKind`)
        - message: texto curto, sem o nome da chave (ex.: "is required")

    Registro transitório: produzido por carga e consumido imediatamente
    pelo `DiagnosticFormatter`.
    """
    key: Optional[str]
    kind: FailureKind
    message: str
