# src/atlas_config/core/validation/__init__.py
"""
Validação agregada e diagnósticos.

Componentes:
    - aggregator → `ValidationAggregator`, capacidade `ExternalValidator`
    - formatter  → `DiagnosticFormatter`
"""
