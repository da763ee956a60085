# ============================================================
# 📦 src/postos_vizinhanca/infrastructure/remote_loader.py
# ============================================================

from typing import Optional

import requests
from loguru import logger

from postos_vizinhanca.config.settings import get_settings
from postos_vizinhanca.domain.exceptions import FetchError
from postos_vizinhanca.entities.posto_entity import Posto
from postos_vizinhanca.infrastructure.planilha_reader import ler_planilha


def baixar_planilha(url: Optional[str] = None, timeout: Optional[float] = None) -> bytes:
    """
    Baixa a planilha remota (GET simples, sem cache e sem retentativa).
    Qualquer falha de rede ou status != 2xx vira FetchError.
    """
    settings = get_settings()
    url = url or settings.dataset_url
    timeout = timeout or settings.fetch_timeout

    try:
        resp = requests.get(url, timeout=timeout, headers={"Cache-Control": "no-cache"})
    except requests.RequestException as e:
        logger.error(f"❌ Erro ao carregar dados remotos ({url}): {e}")
        raise FetchError("Falha ao carregar dados remotos. Verifique sua conexão.", url=url) from e

    if not resp.ok:
        logger.error(f"❌ Erro ao carregar dados remotos: HTTP {resp.status_code} ({url})")
        raise FetchError(
            f"Erro ao carregar dados: {resp.status_code}",
            url=url,
            status_code=resp.status_code,
        )

    logger.info(f"🌐 Planilha remota baixada ({len(resp.content)} bytes)")
    return resp.content


def carregar_planilha_remota(url: Optional[str] = None, timeout: Optional[float] = None) -> tuple[Posto, ...]:
    """Baixa e valida. ValidationError do conteúdo segue separado de FetchError."""
    return ler_planilha(baixar_planilha(url, timeout))
