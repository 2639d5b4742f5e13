# src/atlas_config/core/resolution/documents.py
"""
Fontes de documentos de configuração.

Um documento é um mapeamento de chaves string para valores escalares ou
estruturados, lido a partir de um caminho. O resolver não conhece o
formato do arquivo: ele consome qualquer objeto que satisfaça o
protocolo `DocumentSource`.

A implementação padrão, `FileDocumentSource`, lê do disco:
    - `.json` → JSON
    - qualquer outra extensão → YAML (`yaml.safe_load`)

Política:
    - Arquivo inexistente → `None` (tratado como documento vazio)
    - Arquivo vazio → mapeamento vazio
    - Sintaxe inválida ou raiz que não é mapeamento → `DocumentParseError`
    - Todas as chaves são convertidas para string, recursivamente

Limites explícitos:
    - Não decide precedência entre documentos
    - Não registra eventos de diagnóstico
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import yaml  # PyYAML

from ..errors import DocumentParseError


def deep_stringify_keys(obj: Any) -> Any:
    """Converte recursivamente as chaves de mapeamentos para `str`."""
    if isinstance(obj, Mapping):
        return {str(key): deep_stringify_keys(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [deep_stringify_keys(value) for value in obj]
    return obj


@runtime_checkable
class DocumentSource(Protocol):
    """
    Contrato mínimo de uma fonte de documentos.

    `read` retorna `None` quando o documento não existe e levanta
    `DocumentParseError` quando o conteúdo não pode ser interpretado.
    """

    def read(self, path: str) -> Optional[Mapping[str, Any]]:
        ...


class FileDocumentSource:
    """Lê documentos YAML/JSON do filesystem."""

    encoding = "utf-8"

    def read(self, path: str) -> Optional[Mapping[str, Any]]:
        p = Path(path)
        if not p.is_file():
            return None

        try:
            raw = p.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise DocumentParseError(
                f"Config file could not be decoded as {self.encoding} while parsing {path}. Error: {e}",
                path=path,
            ) from e

        if p.suffix.lower() == ".json":
            data = self._parse_json(raw, path)
        else:
            data = self._parse_yaml(raw, path)

        if data is None:
            return {}

        if not isinstance(data, Mapping):
            raise DocumentParseError(
                f"Config root must be a mapping in {path}, got: {type(data).__name__}",
                path=path,
            )

        return deep_stringify_keys(data)

    @staticmethod
    def _parse_yaml(raw: str, path: str) -> Any:
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise DocumentParseError(
                f"YAML syntax error occurred while parsing {path}. "
                "Please note that YAML must be consistently indented using spaces. "
                f"Tabs are not allowed. Error: {e}",
                path=path,
            ) from e

    @staticmethod
    def _parse_json(raw: str, path: str) -> Any:
        if not raw.strip():
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise DocumentParseError(
                f"JSON syntax error occurred while parsing {path}. Error: {e}",
                path=path,
            ) from e
