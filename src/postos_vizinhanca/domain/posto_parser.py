# ============================================================
# 📦 src/postos_vizinhanca/domain/posto_parser.py
# ============================================================

import math
from collections import Counter
from typing import Any, Sequence

from loguru import logger

from postos_vizinhanca.config.colunas import (
    CAMPOS_OBRIGATORIOS,
    CAMPOS_TEXTO,
    CAMPOS_CONTADORES,
    COL_SUBREGIAO,
    COL_LATITUDE,
    COL_LONGITUDE,
)
from postos_vizinhanca.domain.exceptions import ValidationError
from postos_vizinhanca.entities.posto_entity import Posto


# ============================================================
# 🧼 Helpers de célula
# ============================================================
def celula_vazia(valor: Any) -> bool:
    """None, NaN ou string em branco."""
    if valor is None:
        return True
    if isinstance(valor, float) and math.isnan(valor):
        return True
    if isinstance(valor, str) and not valor.strip():
        return True
    return False


def texto(valor: Any) -> str:
    if celula_vazia(valor):
        return ""
    return str(valor).strip()


def contador(valor: Any) -> int:
    """
    Converte contadores numéricos.
    Valor inválido, infinito ou negativo vira 0 (sem erro).
    """
    if isinstance(valor, bool) or celula_vazia(valor):
        return 0
    try:
        numero = float(str(valor).strip()) if isinstance(valor, str) else float(valor)
    except (TypeError, ValueError):
        logger.debug(f"Contador inválido '{valor}' -> 0")
        return 0
    if not math.isfinite(numero) or numero < 0:
        logger.debug(f"Contador fora de faixa '{valor}' -> 0")
        return 0
    return int(numero)


def coordenada(valor: Any) -> float:
    """Aceita vírgula ou ponto como separador decimal; falha vira NaN."""
    if celula_vazia(valor):
        return math.nan
    try:
        return float(str(valor).strip().replace(",", "."))
    except ValueError:
        return math.nan


def coordenada_valida(lat: float, lon: float) -> bool:
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


# ============================================================
# 🔍 Parse principal
# ============================================================
def parse_tabela(linhas: Sequence[Sequence[Any]]) -> tuple[Posto, ...]:
    """
    Converte uma tabela (cabeçalho + linhas de dados) em postos validados.

    A numeração de linha nas mensagens segue a planilha: o cabeçalho é a
    linha 1, a primeira linha de dados é a linha 2.
    Qualquer coordenada inválida rejeita a tabela inteira.
    """
    if not linhas or len(linhas) < 2:
        raise ValidationError(
            "Arquivo deve conter pelo menos uma linha de cabeçalho e uma linha de dados"
        )

    cabecalho = [None if celula_vazia(h) else str(h) for h in linhas[0]]
    postos: list[Posto] = []
    numeros_linha: list[int] = []

    for idx, linha in enumerate(linhas[1:]):
        numero_linha = idx + 2
        linha = list(linha or [])

        if all(celula_vazia(v) for v in linha):
            continue

        registro: dict[str, Any] = {}
        for col_idx, nome in enumerate(cabecalho):
            if nome is None:
                continue
            registro[nome] = linha[col_idx] if col_idx < len(linha) else None

        for campo in CAMPOS_OBRIGATORIOS:
            if campo not in registro or celula_vazia(registro[campo]):
                raise ValidationError(
                    f"Campo obrigatório '{campo}' não encontrado ou vazio na linha {numero_linha}",
                    campo=campo,
                    linha=numero_linha,
                )

        if COL_SUBREGIAO not in registro:
            raise ValidationError(
                f"Campo obrigatório '{COL_SUBREGIAO}' não encontrado na linha {numero_linha}",
                campo=COL_SUBREGIAO,
                linha=numero_linha,
            )

        valores = {attr: texto(registro[col]) for col, attr in CAMPOS_TEXTO.items()}
        valores.update({attr: contador(registro[col]) for col, attr in CAMPOS_CONTADORES.items()})

        postos.append(
            Posto(
                **valores,
                subregiao=texto(registro[COL_SUBREGIAO]),
                latitude=coordenada(registro[COL_LATITUDE]),
                longitude=coordenada(registro[COL_LONGITUDE]),
            )
        )
        numeros_linha.append(numero_linha)

    # ============================================================
    # 🌍 Segunda passagem: coordenadas (tudo ou nada)
    # ============================================================
    for posto, numero_linha in zip(postos, numeros_linha):
        if not coordenada_valida(posto.latitude, posto.longitude):
            raise ValidationError(
                f"Coordenadas inválidas na linha {numero_linha}: "
                f"LAT={posto.latitude}, LON={posto.longitude}",
                campo=f"{COL_LATITUDE}/{COL_LONGITUDE}",
                linha=numero_linha,
            )

    if not postos:
        raise ValidationError("Nenhuma linha de dados encontrada no arquivo")

    duplicados = [p for p, n in Counter(p.posto for p in postos).items() if n > 1]
    if duplicados:
        logger.warning(f"⚠️ {len(duplicados)} identificador(es) de POSTO repetido(s): {duplicados[:10]}")

    logger.info(f"✅ {len(postos)} postos validados.")
    return tuple(postos)
