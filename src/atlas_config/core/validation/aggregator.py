# src/atlas_config/core/validation/aggregator.py
"""
Agregação de falhas de validação de uma carga.

Este módulo determina se uma configuração resolvida é válida e coleta
TODAS as falhas em uma única passada:
    - `missing`: atributo obrigatório cujo valor bruto resolvido é None
    - `transform`: atributo cuja coerção falhou
    - `external`: falhas reportadas por um validador externo opcional

Validador externo (capacidade duck-typed):
    Qualquer objeto com `is_valid()` e uma coleção `errors` de pares
    `(atributo, mensagem)`. Quando nenhum é fornecido explicitamente, a
    própria instância de configuração é usada se expuser essa capacidade.
    Sem validador, apenas as verificações `missing`/`transform` são feitas
    (validador de fallback).

Decisões arquiteturais:
    - A agregação nunca interrompe na primeira falha
    - Nomes de atributos externos com sufixo `_before_type_cast` são
      normalizados para a chave original, preservando a proveniência
    - Exceções do validador externo viram uma falha geral `external`;
      falhas internas já coletadas continuam no relatório
    - Chaves não reconhecidas não participam das verificações internas

Limites explícitos:
    - Não formata mensagens
    - Não levanta exceções de validação
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

from ..resolution.source import SourceStruct
from ..types import FailureKind, ValidationFailure


MISSING_MESSAGE = "is required"
TRANSFORM_MESSAGE = "failed to coerce the data type"
VALIDATOR_ERROR_MESSAGE = "the external validator raised an error"

_BEFORE_TYPE_CAST_RE = re.compile(r"_before_type_cast\Z")
_GENERAL_ATTRIBUTES = {"", "base"}


@runtime_checkable
class ExternalValidator(Protocol):
    """Capacidade mínima de um validador externo."""

    errors: Iterable[Any]

    def is_valid(self) -> bool:
        ...


def select_validator(instance: Any, explicit: Optional[Any] = None) -> Optional[Any]:
    """Validador explícito, senão a instância se ela tiver a capacidade."""
    if explicit is not None:
        if not isinstance(explicit, ExternalValidator):
            raise TypeError("validator must expose 'errors' and 'is_valid()'")
        return explicit
    if isinstance(instance, ExternalValidator):
        return instance
    return None


def normalize_attribute(attribute: Any) -> Optional[str]:
    """Converte o atributo de um erro externo em chave de configuração."""
    if attribute is None:
        return None
    key = _BEFORE_TYPE_CAST_RE.sub("", str(attribute))
    return None if key in _GENERAL_ATTRIBUTES else key


class ValidationAggregator:
    """Coleta falhas `missing`, `transform` e `external` de uma carga."""

    def fallback_failures(self, sources: Mapping[str, SourceStruct]) -> List[ValidationFailure]:
        failures: List[ValidationFailure] = []
        for key, source in sources.items():
            if not source.recognized:
                continue
            if source.coercion_failed:
                failures.append(ValidationFailure(key, FailureKind.TRANSFORM, TRANSFORM_MESSAGE))
            elif source.spec.required and source.raw_value is None:
                failures.append(ValidationFailure(key, FailureKind.MISSING, MISSING_MESSAGE))
        return failures

    def external_failures(self, validator: Any) -> List[ValidationFailure]:
        try:
            valid = validator.is_valid()
            errors = list(validator.errors or ())
        except Exception as e:  # noqa: BLE001
            return [
                ValidationFailure(
                    None,
                    FailureKind.EXTERNAL,
                    f"{VALIDATOR_ERROR_MESSAGE} ({type(e).__name__}: {e})",
                )
            ]
        if valid and not errors:
            return []

        failures: List[ValidationFailure] = []
        for error in errors:
            attribute, message = error
            failures.append(
                ValidationFailure(normalize_attribute(attribute), FailureKind.EXTERNAL, str(message))
            )
        if not failures:
            failures.append(ValidationFailure(None, FailureKind.EXTERNAL, "the configuration is invalid"))
        return failures

    def collect(
        self,
        sources: Mapping[str, SourceStruct],
        validator: Optional[Any] = None,
    ) -> List[ValidationFailure]:
        """
        Retorna o conjunto completo de falhas, em ordem estável:
        falhas internas na ordem das chaves, seguidas das externas.
        """
        failures = self.fallback_failures(sources)
        if validator is not None:
            failures.extend(self.external_failures(validator))
        return failures
