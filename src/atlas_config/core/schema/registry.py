# src/atlas_config/core/schema/registry.py
"""
Registro estrutural de atributos de configuração.

Este módulo define o `AttributeSpec` e o `AttributeRegistry`, responsáveis
por manter o schema declarado de uma configuração: nome de cada chave,
se ela pode vir de variável de ambiente, se é obrigatória, seu default e
seu transform.

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada atributo possua um nome válido e único
    - a ordem de declaração seja preservada explicitamente
    - o schema não mude depois da primeira carga

Além dos atributos, o registry guarda o prefixo das variáveis de ambiente
e a lista ordenada de arquivos de configuração da definição.

Decisões arquiteturais:
    - O registry é um objeto explícito, passado junto da definição,
      e nunca um singleton oculto de classe
    - A ordem de declaração afeta apenas a estabilidade dos diagnósticos,
      nunca a precedência entre fontes
    - A primeira carga congela o registry

Invariantes:
    - Cada `AttributeSpec.name` é único no registry
    - `all()` reflete exatamente a ordem de declaração
    - Nenhuma declaração é aceita após o congelamento

Limites explícitos:
    - Não realiza I/O
    - Não resolve fontes nem valida valores

Este módulo existe para garantir integridade e previsibilidade
do schema antes de qualquer resolução.
"""

from __future__ import annotations

import os
from dataclasses import InitVar, dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Union

from ..errors import DuplicateAttributeError, SchemaError
from ..resolution.documents import deep_stringify_keys
from .transforms import Transform, TransformFn, infer_transform, required_positional_count, resolve_transform


PathLike = Union[str, "os.PathLike[str]"]

# Nomes ocupados pela própria `Configuration` ou pela capacidade de
# validação externa.
RESERVED_NAMES = frozenset(
    {
        "before_type_cast",
        "errors",
        "fingerprint",
        "is_valid",
        "load",
        "logs",
        "registry",
        "sources",
        "to_dict",
    }
)


@dataclass(frozen=True)
class AttributeSpec:
    """
    Declaração imutável de uma chave de configuração.

    Campos:
        - name: nome único da chave no registry
        - from_environment: se a chave pode vir de `{PREFIXO}_{NOME}`
        - required: se um valor resolvido `None` é uma falha
        - default: literal, producer sem argumentos, ou producer que
          recebe a instância em construção
        - transform: primitivo nomeado ou callable

    O default é avaliado no máximo uma vez por carga, e somente quando
    nenhuma fonte de maior precedência forneceu a chave.
    """
    name: str
    from_environment: bool = True
    required: bool = True
    default: Any = None
    transform: Optional[Transform] = None

    def coercer(self) -> Optional[TransformFn]:
        """Callable de coerção resolvido (ou None quando não há transform)."""
        return resolve_transform(self.transform)


@dataclass
class AttributeRegistry:
    """
    Registro canônico do schema de uma configuração.

    Exemplo:
        registry = AttributeRegistry(env_var_prefix="APP", config_paths=["etc/app.yaml"])
        registry.attribute("port", default=8080)
        registry.attribute("log_level", required=False)
    """

    env_var_prefix: str
    config_paths: InitVar[Sequence[PathLike]] = ()
    root_path: Optional[PathLike] = None

    _specs: Dict[str, AttributeSpec] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)
    _files: List[str] = field(default_factory=list, init=False, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    def __post_init__(self, config_paths: Sequence[PathLike]) -> None:
        if not isinstance(self.env_var_prefix, str) or not self.env_var_prefix.strip():
            raise SchemaError("The env_var_prefix has not been defined!")
        if config_paths:
            self.add_config_files(*config_paths)

    # -----------------------------
    # Atributos
    # -----------------------------
    def declare(self, spec: AttributeSpec) -> AttributeSpec:
        """
        Registra um `AttributeSpec`.

        Quando nenhum transform é declarado, ele é deduzido do default
        literal (`str` → "string", `int` → "integer").

        Returns:
            AttributeSpec: o spec efetivamente armazenado.

        Raises:
            SchemaError: registry congelado, nome inválido ou reservado,
                transform desconhecido.
            DuplicateAttributeError: nome já registrado.
        """
        if self._frozen:
            raise SchemaError(
                f"Cannot declare '{getattr(spec, 'name', spec)}': the registry is frozen after the first load"
            )

        name = spec.name
        if not isinstance(name, str) or not name.isidentifier():
            raise SchemaError(f"Attribute name must be a valid identifier, got {name!r}")
        if name in RESERVED_NAMES or name.startswith("_"):
            raise SchemaError(f"Attribute name is reserved: {name}")
        if name in self._specs:
            raise DuplicateAttributeError(f"Duplicate attribute: {name}")

        if spec.transform is None and not callable(spec.default):
            inferred = infer_transform(spec.default)
            if inferred is not None:
                spec = replace(spec, transform=inferred)

        # Falha cedo para nomes de transform desconhecidos
        spec.coercer()

        self._specs[name] = spec
        self._order.append(name)
        return spec

    def attribute(self, name: str, **options: Any) -> AttributeSpec:
        """Atalho para `declare(AttributeSpec(name, **options))`."""
        return self.declare(AttributeSpec(name=name, **options))

    def get(self, name: str) -> AttributeSpec:
        return self._specs[name]

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._order)

    def all(self) -> List[AttributeSpec]:
        return [self._specs[name] for name in self._order]

    def names(self) -> List[str]:
        return list(self._order)

    # -----------------------------
    # Fontes
    # -----------------------------
    def env_var_name(self, name: str) -> str:
        return f"{self.env_var_prefix}_{name.upper()}"

    def add_config_files(self, *paths: PathLike) -> None:
        """
        Acrescenta arquivos ao fim da lista ordenada.

        Caminhos relativos são unidos a `root_path` quando definido.
        A ordem de declaração é a ordem de precedência: o primeiro
        arquivo a fornecer uma chave vence.
        """
        if self._frozen:
            raise SchemaError("Cannot add config files: the registry is frozen after the first load")
        for path in paths:
            path = os.fspath(path)
            if self.root_path is not None and not os.path.isabs(path):
                path = os.path.join(os.fspath(self.root_path), path)
            self._files.append(path)

    @property
    def config_files(self) -> List[str]:
        if not self._files:
            raise SchemaError("No config paths have been defined!")
        return list(self._files)

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def defaults(self) -> Dict[str, Any]:
        """
        Snapshot dos defaults declarados.

        Literais e producers sem argumentos são incluídos; producers que
        dependem da instância em construção são omitidos.
        """
        snapshot: Dict[str, Any] = {}
        for spec in self.all():
            default = spec.default
            if callable(default):
                if required_positional_count(default, fallback=0) != 0:
                    continue
                default = default()
            snapshot[spec.name] = default
        return deep_stringify_keys(snapshot)
