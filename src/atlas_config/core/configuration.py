# src/atlas_config/core/configuration.py
"""
Carga canônica de uma configuração tipada.

Este módulo define a `Configuration`, a instância resolvida entregue ao
chamador, e a função `load`, que coordena uma carga completa:

    registry (schema) ──► SourceResolver ──► SourceStruct por chave
                                         ──► coerção sob demanda
                                         ──► ValidationAggregator
                                         ──► DiagnosticFormatter / instância

Política de carga:
    - O ambiente é um snapshot tomado uma única vez na entrada de `load`
    - Os atributos são atribuídos na ordem de declaração, permitindo que
      defaults dependentes leiam atributos já resolvidos
    - Atributos com coerção falha não são atribuídos à instância
    - Chaves não reconhecidas nunca são atribuídas, apenas registradas
      em nível `warn`
    - A primeira carga congela o registry

Tratamento de erros:
    - `SchemaError` e `DocumentParseError` interrompem a carga e são
      relançados com o cabeçalho comum, encadeados ao erro original
    - Falhas por chave são agregadas e relançadas juntas em um único
      `ConfigurationInvalidError`
    - Não existe retorno parcial: ou a instância completa, ou uma exceção

Limites explícitos:
    - Não observa arquivos nem recarrega
    - Não descobre diretórios raiz nem nomes de ambiente
    - Não escreve em loggers; o chamador drena `Configuration.logs`
"""

from __future__ import annotations

import copy
import os
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Type, TypeVar

from .errors import (
    LOAD_ERROR_HEADER,
    ConfigError,
    ConfigurationInvalidError,
    DocumentParseError,
    SchemaError,
)
from .hashing import compute_config_hash
from .logs import DiagnosticsLog
from .resolution.documents import DocumentSource
from .resolution.resolver import SourceResolver
from .resolution.source import SourceStruct
from .schema.registry import AttributeRegistry
from .validation.aggregator import ValidationAggregator, select_validator
from .validation.formatter import DiagnosticFormatter


C = TypeVar("C", bound="Configuration")


class Configuration:
    """
    Instância resolvida de uma configuração.

    Cada atributo declarado vira um atributo da instância. A instância
    também guarda, por toda a sua vida, o mapeamento `chave → SourceStruct`
    da carga que a produziu e o log de diagnóstico dessa carga.

    Definição por classe:

        registry = AttributeRegistry(env_var_prefix="APP", config_paths=["etc/app.yaml"])
        registry.attribute("port", default=8080)

        class AppConfig(Configuration):
            registry = registry

        config = AppConfig.load()
    """

    registry: ClassVar[Optional[AttributeRegistry]] = None

    def __init__(self) -> None:
        self._registry: Optional[AttributeRegistry] = None
        self._sources: Dict[str, SourceStruct] = {}
        self._logs = DiagnosticsLog()

    @classmethod
    def load(cls: Type[C], **options: Any) -> C:
        if cls.registry is None:
            raise SchemaError(f"{cls.__name__} does not define a registry")
        return load(cls.registry, factory=cls, **options)

    @property
    def sources(self) -> Mapping[str, SourceStruct]:
        return MappingProxyType(self._sources)

    @property
    def logs(self) -> DiagnosticsLog:
        return self._logs

    def before_type_cast(self, key: str) -> Any:
        """Valor bruto da chave antes da coerção, ou None."""
        source = self._sources.get(key)
        return source.raw_value if source is not None else None

    def to_dict(self) -> Dict[str, Any]:
        names = self._registry.names() if self._registry is not None else []
        return {name: getattr(self, name) for name in names if hasattr(self, name)}

    def fingerprint(self) -> str:
        return compute_config_hash(self.to_dict())

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({values})"


def _with_header(error: ConfigError) -> ConfigError:
    prefixed = copy.copy(error)
    prefixed.args = (f"{LOAD_ERROR_HEADER}\n{error}",)
    return prefixed


def load(
    registry: AttributeRegistry,
    *,
    environ: Optional[Mapping[str, str]] = None,
    document_source: Optional[DocumentSource] = None,
    validator: Optional[Any] = None,
    factory: Type[C] = Configuration,  # type: ignore[assignment]
) -> C:
    """
    Resolve, coage e valida uma configuração.

    Args:
        registry: schema declarado.
        environ: snapshot do ambiente; cópia de `os.environ` por padrão.
        document_source: leitor de documentos; YAML/JSON do disco por padrão.
        validator: validador externo opcional (`errors` + `is_valid()`).
        factory: classe da instância a construir.

    Returns:
        Configuration: instância totalmente resolvida e válida.

    Raises:
        SchemaError: definição inválida (ex.: nenhum arquivo declarado).
        DocumentParseError: documento malformado.
        ConfigurationInvalidError: uma ou mais falhas de validação.
    """
    environ = dict(os.environ) if environ is None else environ
    registry.freeze()

    instance = factory()
    instance._registry = registry
    logs = instance.logs

    try:
        resolver = SourceResolver(registry, document_source)
        sources = resolver.resolve(environ=environ, instance=instance, logs=logs)
    except (SchemaError, DocumentParseError) as e:
        raise _with_header(e) from e

    instance._sources = sources

    for key, source in sources.items():
        if source.recognized and not source.coercion_failed:
            setattr(instance, key, source.coerced_value)
        logs.set_from_source(key, source)

    failures = ValidationAggregator().collect(sources, select_validator(instance, validator))
    if failures:
        report = DiagnosticFormatter(registry.config_files).format(failures, sources)
        raise ConfigurationInvalidError(f"{LOAD_ERROR_HEADER}\n{report}")

    return instance
