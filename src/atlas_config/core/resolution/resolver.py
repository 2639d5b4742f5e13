# src/atlas_config/core/resolution/resolver.py
"""
Resolução de fontes de uma carga de configuração.

Este módulo implementa o `SourceResolver`, responsável por produzir,
para um registry e um snapshot de entradas (ambiente + documentos
ordenados), o mapeamento `chave → SourceStruct` com a fonte vencedora
de cada chave.

Política de precedência (maior para menor):
    1. variável de ambiente `{PREFIXO}_{CHAVE_MAIÚSCULA}`, para atributos
       com `from_environment=True`
    2. arquivos de configuração, na ordem declarada: o primeiro arquivo
       que fornece a chave vence
    3. default declarado, avaliado somente na primeira leitura

Para sobrepor um arquivo geral por um específico, declare o específico
antes do geral.

Decisões arquiteturais:
    - Chaves presentes em documentos mas ausentes do registry também
      recebem um `SourceStruct`, marcado como não reconhecido, apenas
      para diagnóstico
    - Arquivo inexistente é um documento vazio (registrado em debug)
    - Documento malformado interrompe a carga inteira
    - Chaves são comparadas por igualdade exata de string, após
      conversão de todas as chaves do documento para string

Invariantes:
    - Toda chave declarada possui exatamente um `SourceStruct`
    - Chaves declaradas aparecem na ordem de declaração, seguidas das
      chaves não reconhecidas na ordem em que foram encontradas
    - Cada documento é lido no máximo uma vez por carga

Limites explícitos:
    - Não executa coerção
    - Não valida valores
    - Não atribui valores à instância
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..errors import DocumentParseError
from ..logs import DiagnosticsLog
from ..schema.registry import AttributeRegistry
from ..types import SourceType
from .documents import DocumentSource, FileDocumentSource, deep_stringify_keys
from .source import SourceStruct


class SourceResolver:
    """
    Resolve a fonte vencedora de cada chave para uma carga.

    Args:
        registry: schema declarado da configuração.
        document_source: leitor de documentos; `FileDocumentSource` por padrão.
    """

    def __init__(
        self,
        registry: AttributeRegistry,
        document_source: Optional[DocumentSource] = None,
    ) -> None:
        self.registry = registry
        self.document_source = document_source if document_source is not None else FileDocumentSource()

    def resolve(
        self,
        *,
        environ: Mapping[str, str],
        instance: Any = None,
        logs: Optional[DiagnosticsLog] = None,
    ) -> Dict[str, SourceStruct]:
        """
        Produz o mapeamento ordenado `chave → SourceStruct`.

        Raises:
            SchemaError: se nenhum arquivo de configuração foi declarado.
            DocumentParseError: se algum documento não puder ser interpretado.
        """
        logs = logs if logs is not None else DiagnosticsLog()
        registry = self.registry
        config_files = registry.config_files

        def make(key: str, source: Optional[str], type: SourceType, value: Any = None) -> SourceStruct:
            spec = registry.get(key) if key in registry else None
            return SourceStruct(key, source, type, value, spec=spec, instance=instance, logs=logs)

        # Pré-popula as chaves declaradas para fixar a ordem
        resolved: Dict[str, Optional[SourceStruct]] = {name: None for name in registry.names()}

        for spec in registry.all():
            if not spec.from_environment:
                continue
            env_var = registry.env_var_name(spec.name)
            value = environ.get(env_var)
            if value is not None:
                resolved[spec.name] = make(spec.name, env_var, SourceType.ENV, value)

        for path in config_files:
            for key, value in self._read_document(path, logs).items():
                if resolved.get(key) is not None:
                    continue
                resolved[key] = make(key, path, SourceType.FILE, value)

        for name in registry.names():
            if resolved[name] is None:
                resolved[name] = make(name, None, SourceType.DEFAULT)

        return resolved  # type: ignore[return-value]

    def _read_document(self, path: str, logs: DiagnosticsLog) -> Dict[str, Any]:
        document = self.document_source.read(path)
        if document is None:
            logs.file_not_found(path)
            return {}

        if not isinstance(document, Mapping):
            raise DocumentParseError(
                f"Config root must be a mapping in {path}, got: {type(document).__name__}",
                path=path,
            )

        logs.file_loaded(path)
        return deep_stringify_keys(document)
