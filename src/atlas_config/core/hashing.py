# src/atlas_config/core/hashing.py
"""
Hashing canônico de uma configuração resolvida.

O hash representa a **identidade estrutural** dos valores resolvidos e é
utilizado para rastreabilidade: logs de auditoria podem registrar qual
configuração efetiva estava em uso sem expor os valores.

Política de hashing (v1):
    - Serialização JSON canônica
    - Ordenação estável de chaves
    - Separadores compactos
    - Valores não serializáveis em JSON convertidos com `str`
    - Codificação UTF-8 e SHA-256

Invariantes:
    - Mapeamentos estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Mapping


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Gera um hash SHA-256 determinístico de uma configuração resolvida.

    Raises:
        TypeError: se o objeto fornecido não for um mapeamento.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser mapping, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        dict(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
