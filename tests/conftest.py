# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Config.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos YAML determinísticos semelhantes ao uso real
- escrita controlada de arquivos em `tmp_path`
- fontes de documentos em memória (sem filesystem)
- transforms instrumentados para observar memoização

Decisões arquiteturais:
    - O ambiente é sempre injetado como dict explícito; nenhum teste
      depende de `os.environ`
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas
    - Fixtures factory retornam callables simples e explícitos

Invariantes:
    - Nenhuma fixture altera estado global
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

from pathlib import Path

import pytest


@pytest.fixture
def project_like_base_yaml() -> str:
    """
    YAML de configuração compartilhada (fallback) semelhante ao uso real.

    Returns:
        str: Conteúdo YAML com chaves escalares de primeiro nível.
    """
    return """\
port: 9090
timeout: 30
log_level: info
database:
  host: db.internal
  port: 5432
"""


@pytest.fixture
def project_like_local_yaml() -> str:
    """YAML de overrides locais com uma chave não declarada (`legacy_flag`)."""
    return """\
timeout: 5
legacy_flag: true
"""


@pytest.fixture
def write_config(tmp_path: Path):
    """
    Fixture factory que grava um documento em `tmp_path`.

    Returns:
        Callable[[str, str], str]: recebe nome e conteúdo, retorna o caminho.
    """

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def StaticDocuments():
    """
    Fixture factory que fornece uma fonte de documentos em memória.

    Satisfaz o protocolo `DocumentSource` por duck typing. Caminhos
    ausentes do mapeamento são tratados como arquivos inexistentes.
    Cada leitura é registrada em `reads`.
    """

    class _StaticDocuments:
        def __init__(self, documents):
            self.documents = documents
            self.reads = []

        def read(self, path):
            self.reads.append(path)
            return self.documents.get(path)

    return _StaticDocuments


@pytest.fixture
def counting_transform():
    """
    Transform instrumentado que conta invocações.

    Converte para inteiro e incrementa `calls` a cada execução,
    permitindo verificar que a coerção ocorre no máximo uma vez.
    """

    class _CountingTransform:
        def __init__(self):
            self.calls = 0

        def __call__(self, value):
            self.calls += 1
            return int(value)

    return _CountingTransform()


@pytest.fixture
def make_registry():
    """
    Fixture factory que cria um `AttributeRegistry` com prefixo `APP`.

    Returns:
        Callable[..., AttributeRegistry]
    """
    from atlas_config.core.schema.registry import AttributeRegistry

    def _make(*config_paths, prefix: str = "APP", root_path=None):
        return AttributeRegistry(
            env_var_prefix=prefix,
            config_paths=list(config_paths),
            root_path=root_path,
        )

    return _make
