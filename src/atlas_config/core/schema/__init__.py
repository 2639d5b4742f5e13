# src/atlas_config/core/schema/__init__.py
"""
Schema de configuração: declaração de atributos e transforms.

Componentes:
    - registry   → `AttributeSpec`, `AttributeRegistry`
    - transforms → primitivos nomeados, `relative_to`

Metadados puros, sem I/O.
"""
