"""
Exceções estruturais da API.

Só estas falhas chegam ao cliente; não-achados de navegação e extração
degradam silenciosamente dentro dos serviços.
"""


class ScrapeError(Exception):
    """Falha terminal de um scrape após esgotar as tentativas."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class AssetNotFoundError(Exception):
    """Planilha ou PDF solicitado não existe no diretório de assets."""

    def __init__(self, name: str):
        super().__init__(f"Arquivo não encontrado: {name}")
        self.name = name


class InvalidRangeError(ValueError):
    """Intervalo A1 que não pode ser interpretado."""

    def __init__(self, value: str):
        super().__init__(f"Intervalo inválido: {value!r}")
        self.value = value


class SheetNotFoundError(Exception):
    def __init__(self, sheet: str):
        super().__init__(f"Aba não encontrada: {sheet}")
        self.sheet = sheet
