# src/atlas_config/__init__.py
"""
Atlas Config — resolução tipada de configuração em camadas.

Este pacote raiz define o namespace público do Atlas Config, uma
biblioteca que resolve a configuração de uma aplicação a partir de
fontes sobrepostas e produz diagnósticos que indicam exatamente qual
fonte originou um valor inválido ou ausente.

Fontes, em ordem de precedência:
    - variáveis de ambiente (`{PREFIXO}_{CHAVE}`)
    - arquivos de configuração, na ordem declarada (o primeiro vence)
    - defaults declarados, avaliados sob demanda

Arquitetura em alto nível:
    - core.schema      → registry de atributos e transforms
    - core.resolution  → documentos, proveniência (SourceStruct) e resolver
    - core.validation  → agregação de falhas e relatório de diagnóstico
    - core.configuration → instância resolvida e `load`

Limites explícitos:
    - Não define linguagem de validação
    - Não observa arquivos nem recarrega configuração
    - Não gerencia segredos
"""

from .core.configuration import Configuration, load
from .core.errors import (
    ConfigError,
    ConfigurationInvalidError,
    DocumentParseError,
    DuplicateAttributeError,
    SchemaError,
)
from .core.logs import DiagnosticsLog, LogEntry
from .core.resolution.documents import DocumentSource, FileDocumentSource
from .core.resolution.source import SourceStruct
from .core.schema.registry import AttributeRegistry, AttributeSpec
from .core.schema.transforms import relative_to
from .core.types import FailureKind, LogLevel, SourceType, ValidationFailure

__all__ = [
    "AttributeRegistry",
    "AttributeSpec",
    "ConfigError",
    "Configuration",
    "ConfigurationInvalidError",
    "DiagnosticsLog",
    "DocumentParseError",
    "DocumentSource",
    "DuplicateAttributeError",
    "FailureKind",
    "FileDocumentSource",
    "LogEntry",
    "LogLevel",
    "SchemaError",
    "SourceStruct",
    "SourceType",
    "ValidationFailure",
    "load",
    "relative_to",
]
