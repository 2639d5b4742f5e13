# src/atlas_config/core/errors.py
"""
Exceções canônicas do Atlas Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante a
declaração de atributos, o carregamento de documentos e a resolução de uma
configuração tipada.

As exceções aqui definidas representam **falhas estruturais ou agregadas**.
Falhas individuais por chave (ausência de valor obrigatório, falha de
coerção, falha de validação externa) NÃO são exceções: elas são registradas
como `ValidationFailure` e só chegam ao chamador agregadas no texto de
`ConfigurationInvalidError`.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais interrompem o carregamento inteiro
    - Mensagens de erro são claras e direcionadas ao operador

Invariantes:
    - Todas as exceções do pacote herdam de `ConfigError`
    - Toda exceção levantada por `load` carrega um texto completo e legível

Limites explícitos:
    - Não formata relatórios de validação
    - Não realiza fallback ou recovery
"""

# Cabeçalho comum a toda falha de `load`.
LOAD_ERROR_HEADER = "Cannot continue as the configuration is invalid:"


class ConfigError(Exception):
    """
    Exceção base para erros do Atlas Config.

    Esta hierarquia permite:
        - captura genérica de qualquer falha de configuração
        - distinção clara entre falhas de schema, de documento e de validação
    """


class SchemaError(ConfigError):
    """
    Exceção levantada quando a definição da configuração é inválida.

    Exemplos:
        - nenhum arquivo de configuração declarado
        - prefixo de variável de ambiente ausente
        - declaração em um registry já congelado
        - transform nomeado desconhecido

    Decisões arquiteturais:
        - Falhas de schema são fatais e nunca recuperadas
        - São levantadas na declaração ou na entrada de `load`
    """


class DuplicateAttributeError(SchemaError):
    """
    Exceção levantada quando um atributo é declarado duas vezes
    no mesmo `AttributeRegistry`.

    Invariantes:
        - Nomes de atributos são únicos dentro de um registry
        - O registry permanece inalterado após a tentativa duplicada
    """


class DocumentParseError(ConfigError):
    """
    Exceção levantada quando um documento de configuração não pode
    ser interpretado.

    Inclui:
        - sintaxe YAML/JSON inválida
        - extensão de arquivo não suportada
        - raiz do documento que não é um mapeamento

    Decisões arquiteturais:
        - Um documento malformado invalida o carregamento inteiro
        - Nenhuma chave de um documento malformado é considerada confiável

    Atributos:
        path: caminho do documento que falhou.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ConfigurationInvalidError(ConfigError):
    """
    Exceção agregada levantada por `load` quando existe ao menos uma
    falha de validação.

    A mensagem é o relatório completo produzido pelo `DiagnosticFormatter`,
    precedido por `LOAD_ERROR_HEADER`. Não existe objeto estruturado
    associado: o contrato é o texto.
    """
