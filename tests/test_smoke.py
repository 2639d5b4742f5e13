# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Config.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote pode ser importado sem falhas estruturais
- o namespace público expõe os símbolos canônicos

Limites explícitos:
    - Não testar lógica de resolução
    - Não acumular asserts funcionais
"""


def test_smoke():
    """
    Smoke test mínimo do repositório.

    Garante que o pacote raiz é importável e que `load` e
    `AttributeRegistry` fazem parte do namespace público.
    """
    import atlas_config

    assert callable(atlas_config.load)
    assert "AttributeRegistry" in atlas_config.__all__
