# src/atlas_config/core/resolution/source.py
"""
Registro de proveniência de uma chave resolvida (`SourceStruct`).

Cada chave resolvida em uma carga possui exatamente um `SourceStruct`,
que guarda:
    - de onde o valor bruto veio (env, arquivo ou default)
    - o identificador da fonte (nome da variável, caminho do arquivo ou None)
    - o valor bruto, avaliado sob demanda quando vem do default
    - o resultado memoizado da coerção

Máquina de estados por atributo:

    Unresolved → Sourced(env|file|default) → CoercionPending
               → CoercionSucceeded | CoercionFailed

Cada campo calculado (valor bruto do default e valor coercido) é uma
célula explícita de três estados (`CellState`): NOT_COMPUTED, OK, FAILED.
O cálculo acontece no máximo uma vez; leituras seguintes retornam o
resultado memoizado sem reexecutar producers ou transforms.

Decisões arquiteturais:
    - Falhas de coerção são capturadas e registradas, nunca propagadas
    - A falha é registrada no log de diagnóstico em nível `error`
    - Valores `None` não passam pelo transform

Limites explícitos:
    - Não decide precedência (responsabilidade do resolver)
    - Não classifica falhas para relatório (responsabilidade do agregador)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from ..logs import DiagnosticsLog
from ..schema.transforms import required_positional_count
from ..types import CellState, SourceType

if TYPE_CHECKING:  # pragma: no cover
    from ..schema.registry import AttributeSpec


@dataclass
class _Cell:
    state: CellState = CellState.NOT_COMPUTED
    value: Any = None
    error: Optional[Exception] = None

    def succeed(self, value: Any) -> None:
        self.state = CellState.OK
        self.value = value

    def fail(self, error: Exception) -> None:
        self.state = CellState.FAILED
        self.error = error


def _describe(error: Exception) -> str:
    return f"{type(error).__name__}: {error}"


class SourceStruct:
    """
    Proveniência e valor de uma chave em uma carga.

    Args:
        key: chave resolvida.
        source: nome da variável de ambiente, caminho do arquivo ou None.
        type: `SourceType` da fonte vencedora.
        raw_value: valor bruto (ignorado para `SourceType.DEFAULT`).
        spec: `AttributeSpec` correspondente, ou None se a chave não é reconhecida.
        instance: configuração em construção, repassada a producers e
            transforms que aceitam um argumento extra.
        logs: log de diagnóstico da carga.
    """

    def __init__(
        self,
        key: str,
        source: Optional[str],
        type: SourceType,
        raw_value: Any = None,
        *,
        spec: Optional["AttributeSpec"] = None,
        instance: Any = None,
        logs: Optional[DiagnosticsLog] = None,
    ) -> None:
        self.key = key
        self.source = source
        self.type = type
        self.spec = spec
        self._instance = instance
        self._logs = logs if logs is not None else DiagnosticsLog()

        self._raw = _Cell()
        if type is not SourceType.DEFAULT:
            self._raw.succeed(raw_value)
        self._coerced = _Cell()

    def __repr__(self) -> str:
        return (
            f"SourceStruct(key={self.key!r}, type={self.type.value!r}, "
            f"source={self.source!r}, state={self.coercion_state.value!r})"
        )

    @property
    def recognized(self) -> bool:
        return self.spec is not None

    # -----------------------------
    # Valor bruto
    # -----------------------------
    @property
    def raw_value(self) -> Any:
        """Valor antes da coerção; defaults são avaliados na primeira leitura."""
        if self._raw.state is CellState.NOT_COMPUTED:
            self._evaluate_default()
        return self._raw.value

    def _evaluate_default(self) -> None:
        default = self.spec.default if self.spec is not None else None
        try:
            if callable(default):
                if required_positional_count(default, fallback=0) == 0:
                    value = default()
                else:
                    value = default(self._instance)
            else:
                value = default
        except Exception as e:  # noqa: BLE001
            self._logs.error(f"Failed to evaluate default for attribute: {self.key}", _describe(e))
            self._raw.fail(e)
        else:
            self._raw.succeed(value)

    # -----------------------------
    # Coerção
    # -----------------------------
    @property
    def coercion_state(self) -> CellState:
        return self._coerced.state

    @property
    def coerced_value(self) -> Any:
        """Valor coercido; `None` quando a coerção falhou."""
        self._coerce_once()
        return self._coerced.value

    @property
    def coercion_failed(self) -> bool:
        self._coerce_once()
        return self._coerced.state is CellState.FAILED

    @property
    def coercion_error(self) -> Optional[Exception]:
        self._coerce_once()
        return self._coerced.error

    def _coerce_once(self) -> None:
        if self._coerced.state is not CellState.NOT_COMPUTED:
            return

        raw = self.raw_value
        if self._raw.state is CellState.FAILED:
            self._coerced.fail(self._raw.error)
            return

        coercer = self.spec.coercer() if self.spec is not None else None
        if raw is None or coercer is None:
            self._coerced.succeed(raw)
            return

        try:
            if required_positional_count(coercer, fallback=1) >= 2:
                value = coercer(raw, self._instance)
            else:
                value = coercer(raw)
        except Exception as e:  # noqa: BLE001
            self._logs.error(f"Failed to coerce attribute: {self.key}", _describe(e))
            self._coerced.fail(e)
        else:
            self._coerced.succeed(value)
