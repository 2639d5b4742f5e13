# tests/core/schema/test_registry_declare.py
"""
Testes de declaração no AttributeRegistry.

Os testes asseguram que:
- atributos são registrados na ordem de declaração
- nomes duplicados são rejeitados com exceção específica
- o transform é deduzido de defaults literais
- o registry congelado rejeita novas declarações
- arquivos de configuração são obrigatórios e relativos a `root_path`

Invariantes:
    - O registry nunca contém dois atributos com o mesmo nome
    - A tentativa de duplicidade não corrompe o estado interno
"""

import os

import pytest

try:
    from atlas_config.core.errors import DuplicateAttributeError, SchemaError
    from atlas_config.core.schema.registry import AttributeRegistry, AttributeSpec
except Exception as e:  # noqa: BLE001
    AttributeRegistry = None
    AttributeSpec = None
    DuplicateAttributeError = None
    SchemaError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o registry e suas exceções tipadas estejam disponíveis.

    Falha imediatamente, com mensagem explícita, quando o módulo
    `registry` ou as exceções canônicas não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing AttributeRegistry. Implement:\n"
            "- src/atlas_config/core/schema/registry.py (AttributeRegistry, AttributeSpec)\n"
            "- src/atlas_config/core/errors.py (DuplicateAttributeError, SchemaError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_declare_preserves_order(make_registry):
    """Atributos são retornados por `all()` na ordem de declaração."""
    _require_imports()
    registry = make_registry("app.yaml")
    registry.declare(AttributeSpec(name="port"))
    registry.attribute("host", required=False)
    registry.attribute("timeout", default=30)

    assert registry.names() == ["port", "host", "timeout"]
    assert [spec.name for spec in registry.all()] == ["port", "host", "timeout"]
    assert len(registry) == 3
    assert "host" in registry


def test_duplicate_attribute_is_rejected(make_registry):
    """Declarar o mesmo nome duas vezes levanta `DuplicateAttributeError`."""
    _require_imports()
    registry = make_registry("app.yaml")
    registry.attribute("port")

    with pytest.raises(DuplicateAttributeError):
        registry.attribute("port", default=1)

    assert registry.names() == ["port"]
    assert registry.get("port").default is None
    assert issubclass(DuplicateAttributeError, SchemaError)


def test_transform_is_inferred_from_literal_default(make_registry):
    """Defaults `str` e `int` deduzem os primitivos; `bool` e callables não."""
    _require_imports()
    registry = make_registry("app.yaml")

    assert registry.attribute("name", default="svc").transform == "string"
    assert registry.attribute("port", default=8080).transform == "integer"
    assert registry.attribute("debug", default=False).transform is None
    assert registry.attribute("workers", default=lambda: 4).transform is None
    assert registry.attribute("ratio", default=1, transform="float").transform == "float"


def test_unknown_named_transform_fails_at_declaration(make_registry):
    _require_imports()
    registry = make_registry("app.yaml")

    with pytest.raises(SchemaError):
        registry.attribute("port", transform="hexadecimal")

    assert "port" not in registry


@pytest.mark.parametrize("name", ["", "not-an-identifier", "load", "sources", "_hidden"])
def test_invalid_or_reserved_names_are_rejected(make_registry, name):
    _require_imports()
    registry = make_registry("app.yaml")

    with pytest.raises(SchemaError):
        registry.attribute(name)


def test_frozen_registry_rejects_declarations(make_registry):
    _require_imports()
    registry = make_registry("app.yaml")
    registry.attribute("port")
    registry.freeze()

    assert registry.frozen
    with pytest.raises(SchemaError):
        registry.attribute("host")
    with pytest.raises(SchemaError):
        registry.add_config_files("other.yaml")


def test_env_var_name_uses_prefix_and_uppercased_key(make_registry):
    _require_imports()
    registry = make_registry("app.yaml")

    assert registry.env_var_name("foo_bar") == "APP_FOO_BAR"


def test_missing_prefix_is_a_schema_error():
    _require_imports()
    with pytest.raises(SchemaError):
        AttributeRegistry(env_var_prefix="  ")


def test_config_files_are_required(make_registry):
    """Sem arquivos declarados, `config_files` levanta `SchemaError`."""
    _require_imports()
    registry = make_registry()

    with pytest.raises(SchemaError, match="No config paths have been defined!"):
        registry.config_files


def test_relative_config_files_join_root_path(make_registry, tmp_path):
    _require_imports()
    absolute = str(tmp_path / "abs.yaml")
    registry = make_registry("etc/app.yaml", absolute, root_path=tmp_path)

    assert registry.config_files == [os.path.join(str(tmp_path), "etc/app.yaml"), absolute]


def test_defaults_snapshot_skips_instance_producers(make_registry):
    """`defaults()` inclui literais e producers sem argumentos."""
    _require_imports()
    registry = make_registry("app.yaml")
    registry.attribute("port", default=8080)
    registry.attribute("tags", default=lambda: {1: "one"})
    registry.attribute("url", default=lambda config: f"http://localhost:{config.port}")
    registry.attribute("token", required=False)

    assert registry.defaults() == {"port": 8080, "tags": {"1": "one"}, "token": None}


def test_spec_coercer_resolves_named_and_absent_transforms():
    _require_imports()
    assert AttributeSpec(name="port", transform="integer").coercer()("8080") == 8080
    assert AttributeSpec(name="token").coercer() is None
