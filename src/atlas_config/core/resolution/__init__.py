# src/atlas_config/core/resolution/__init__.py
"""
Resolução de fontes e proveniência.

Componentes:
    - documents → protocolo `DocumentSource` e leitor YAML/JSON
    - source    → `SourceStruct` (proveniência + coerção memoizada)
    - resolver  → `SourceResolver` (precedência env > arquivo > default)
"""
