# src/atlas_config/core/validation/formatter.py
"""
Formatação do relatório de diagnóstico de uma carga inválida.

O `DiagnosticFormatter` transforma o conjunto de falhas em um único texto
determinístico, agrupado pela proveniência de cada chave.

Ordem dos grupos (fixa):
    1. erros gerais, sem fonte identificável
    2. variáveis de ambiente, uma linha por variável
    3. arquivos, na ordem inversa de declaração, cada um com seu cabeçalho
    4. atributos sem valor (default), lista sem duplicatas

Cada grupo só aparece quando não vazio e é precedido por uma linha em
branco; o primeiro caractere (uma quebra de linha) do texto final é
removido.

Limites explícitos:
    - Não coleta falhas
    - Não retorna estrutura legível por máquina: o contrato é o texto
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Tuple

from ..resolution.source import SourceStruct
from ..types import SourceType, ValidationFailure


GENERAL_HEADER = "The following errors have occurred:"
ENV_HEADER = "The following environment variable(s) are invalid:"
FILE_HEADER = "The following config contains invalid attribute(s): {path}"
DEFAULT_HEADER = "The following required attribute(s) have not been set:"


def full_message(failure: ValidationFailure) -> str:
    if failure.key is None:
        return failure.message
    return f"{failure.key} {failure.message}"


class DiagnosticFormatter:
    """
    Args:
        config_files: arquivos na ordem declarada (ordem de precedência).
    """

    def __init__(self, config_files: Sequence[str]) -> None:
        self.config_files = list(config_files)

    def format(
        self,
        failures: Sequence[ValidationFailure],
        sources: Mapping[str, SourceStruct],
    ) -> str:
        general: List[ValidationFailure] = []
        env: List[Tuple[str, ValidationFailure]] = []
        files: Dict[str, List[ValidationFailure]] = {}
        defaults: List[str] = []

        for failure in failures:
            source = sources.get(failure.key) if failure.key is not None else None
            if source is None:
                general.append(failure)
            elif source.type is SourceType.ENV:
                env.append((source.source, failure))
            elif source.type is SourceType.FILE:
                files.setdefault(source.source, []).append(failure)
            else:
                defaults.append(failure.key)

        msg = ""

        if general:
            msg += f"\n\n{GENERAL_HEADER}"
            for failure in general:
                msg += f"\n* {full_message(failure)}"

        if env:
            msg += f"\n\n{ENV_HEADER}"
            for env_var, failure in env:
                msg += f"\n* {env_var}: {failure.message}"

        for path in reversed(self.config_files):
            if not files.get(path):
                continue
            msg += "\n\n" + FILE_HEADER.format(path=path)
            for failure in files[path]:
                msg += f"\n* {failure.key}: {failure.message}"

        if defaults:
            msg += f"\n\n{DEFAULT_HEADER}"
            for key in dict.fromkeys(defaults):
                msg += f"\n* {key}"

        # Remove a primeira quebra de linha
        return msg[1:]
