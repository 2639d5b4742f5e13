# src/atlas_config/core/schema/transforms.py
"""
Transforms (coerções) canônicos do Atlas Config.

Um transform converte o valor bruto encontrado em uma fonte no tipo
pretendido do atributo. Pode ser:
    - um primitivo nomeado ("string", "integer", "float", "boolean")
    - uma função arbitrária `fn(valor)` ou `fn(valor, instancia)`

Transforms podem falhar levantando qualquer exceção; a captura e o
registro da falha são responsabilidade do `SourceStruct`, nunca deste
módulo.

Limites explícitos:
    - Não captura exceções
    - Não conhece fontes nem proveniência
"""

from __future__ import annotations

import inspect
import os
from typing import Any, Callable, Dict, Optional, Union

from ..errors import SchemaError


TransformFn = Callable[..., Any]
Transform = Union[str, TransformFn]

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def to_string(value: Any) -> str:
    return str(value)


def to_integer(value: Any) -> int:
    """Conversão estrita: rejeita bool, frações e texto não numérico."""
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} has a fractional part")
        return int(value)
    if isinstance(value, str):
        return int(value.strip(), 10)
    raise TypeError(f"cannot convert {type(value).__name__} to integer")


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a float")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise TypeError(f"cannot convert {type(value).__name__} to float")


def to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{value!r} is not a boolean")


NAMED_TRANSFORMS: Dict[str, TransformFn] = {
    "string": to_string,
    "integer": to_integer,
    "float": to_float,
    "boolean": to_boolean,
}


def resolve_transform(transform: Optional[Transform]) -> Optional[TransformFn]:
    """
    Converte a declaração de transform em uma função executável.

    Raises:
        SchemaError: se o nome não for um primitivo conhecido ou se o
            valor não for nome nem callable.
    """
    if transform is None:
        return None
    if isinstance(transform, str):
        try:
            return NAMED_TRANSFORMS[transform]
        except KeyError:
            raise SchemaError(
                f"Unknown transform '{transform}', expected one of: "
                f"{', '.join(sorted(NAMED_TRANSFORMS))}"
            ) from None
    if callable(transform):
        return transform
    raise SchemaError(f"Transform must be a name or a callable, got {type(transform).__name__}")


def infer_transform(default: Any) -> Optional[str]:
    """Deduz o primitivo a partir do tipo de um default literal."""
    if isinstance(default, bool):
        return None
    if isinstance(default, str):
        return "string"
    if isinstance(default, int):
        return "integer"
    return None


def required_positional_count(fn: Callable[..., Any], fallback: int) -> int:
    """
    Número de parâmetros posicionais obrigatórios de `fn`.

    Parâmetros com default e `*args` não contam. Callables sem assinatura
    inspecionável (alguns builtins) assumem `fallback`.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return fallback

    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
        and param.default is param.empty
    )


def relative_to(base_path: Union[str, "os.PathLike[str]"]) -> TransformFn:
    """
    Cria um transform que expande caminhos relativos a `base_path`.

    Caminhos absolutos são preservados; `~` é expandido.
    """
    base = os.fspath(base_path)

    def _expand(value: Any) -> str:
        path = os.path.expanduser(os.fspath(value))
        return os.path.abspath(os.path.join(base, path))

    return _expand
