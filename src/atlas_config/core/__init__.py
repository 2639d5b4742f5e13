# src/atlas_config/core/__init__.py
"""
Core do Atlas Config.

Este pacote contém o engine de resolução e validação de atributos:
    - merge por precedência entre ambiente, arquivos e defaults
    - avaliação preguiçosa de defaults
    - coerção de tipos com falhas registradas, nunca propagadas
    - rastreamento de proveniência por chave
    - agregação de falhas e formatação de diagnósticos por fonte

O core é projetado para ser:
    - determinístico
    - síncrono e de execução única por carga
    - independente de framework hospedeiro

Limites explícitos:
    - Não descobre diretórios raiz nem nomes de ambiente
    - Não escreve em loggers diretamente
"""
