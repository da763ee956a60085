# ============================================================
# 📦 src/postos_vizinhanca/infrastructure/planilha_reader.py
# ============================================================

import io
import os
from typing import Any, BinaryIO, Union

import numpy as np
import pandas as pd
from loguru import logger

from postos_vizinhanca.domain.exceptions import ValidationError
from postos_vizinhanca.domain.posto_parser import parse_tabela
from postos_vizinhanca.entities.posto_entity import Posto

FontePlanilha = Union[str, os.PathLike, bytes, BinaryIO]


def ler_linhas(fonte: FontePlanilha) -> list[list[Any]]:
    """
    Lê somente a primeira aba, sem inferir cabeçalho.
    Células vazias chegam como None.
    """
    if isinstance(fonte, (bytes, bytearray)):
        fonte = io.BytesIO(fonte)

    try:
        df = pd.read_excel(fonte, sheet_name=0, header=None, dtype=object)
    except Exception as e:
        logger.error(f"❌ Erro ao ler planilha: {e}")
        raise ValidationError(f"Erro ao ler o arquivo Excel: {e}") from e

    df = df.astype(object).replace({np.nan: None})
    return df.values.tolist()


def ler_planilha(fonte: FontePlanilha) -> tuple[Posto, ...]:
    nome = fonte if isinstance(fonte, (str, os.PathLike)) else type(fonte).__name__
    logger.info(f"📄 Lendo planilha de postos: {nome}")
    return parse_tabela(ler_linhas(fonte))
