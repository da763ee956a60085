# ============================================================
# 📦 src/postos_vizinhanca/domain/exceptions.py
# ============================================================

from typing import Optional


class PostosError(Exception):
    """Erro base do núcleo de análise de postos."""


class ValidationError(PostosError):
    """
    Dados de entrada malformados ou fora de faixa.
    Sempre fatal para o parse: nenhum posto é aproveitado.
    """

    def __init__(self, mensagem: str, campo: Optional[str] = None, linha: Optional[int] = None):
        super().__init__(mensagem)
        self.mensagem = mensagem
        self.campo = campo
        self.linha = linha


class FetchError(PostosError):
    """Falha ao buscar a planilha remota."""

    def __init__(self, mensagem: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(mensagem)
        self.mensagem = mensagem
        self.url = url
        self.status_code = status_code


class NoRouteAvailable(PostosError):
    """
    Serviço de rotas sem resposta útil.
    Uso interno do cliente OSRM: convertido em ``None`` antes de sair dele.
    """
