# ============================================================
# 📦 src/postos_vizinhanca/domain/filter_engine.py
# ============================================================

from dataclasses import replace
from typing import Sequence

from postos_vizinhanca.config.colunas import DIMENSOES_FILTRO
from postos_vizinhanca.entities.posto_entity import Posto, EstadoFiltro


# ============================================================
# 🎚️ Filtro categórico
# ============================================================
def aplicar_filtros(postos: Sequence[Posto], filtros: EstadoFiltro) -> tuple[Posto, ...]:
    """
    E entre dimensões, OU dentro de cada dimensão.
    Dimensão com conjunto vazio não restringe nada. Ordem preservada.
    """
    ativos = [(dim, getattr(filtros, dim)) for dim in DIMENSOES_FILTRO if getattr(filtros, dim)]
    if not ativos:
        return tuple(postos)
    return tuple(p for p in postos if all(getattr(p, dim) in permitidos for dim, permitidos in ativos))


def opcoes_de_filtro(postos: Sequence[Posto]) -> dict[str, list[str]]:
    """Valores únicos (ordenados) de cada dimensão, derivados do conjunto atual."""
    opcoes = {"posto": sorted({p.posto for p in postos})}
    for dim in DIMENSOES_FILTRO:
        opcoes[dim] = sorted({getattr(p, dim) for p in postos})
    return opcoes


# ============================================================
# 📍 Seleção do par para comparação
# ============================================================
def selecionar_posto(estado: EstadoFiltro, posto: str) -> EstadoFiltro:
    """
    Clique em um posto:
      - sem A -> vira A
      - com A e sem B (e diferente de A) -> vira B
      - caso contrário recomeça com o posto como A
    """
    if not estado.posto_a:
        return replace(estado, posto_a=posto)
    if not estado.posto_b and estado.posto_a != posto:
        return replace(estado, posto_b=posto)
    return replace(estado, posto_a=posto, posto_b="")


def trocar_selecao(estado: EstadoFiltro) -> EstadoFiltro:
    return replace(estado, posto_a=estado.posto_b, posto_b=estado.posto_a)


def limpar_selecao(estado: EstadoFiltro) -> EstadoFiltro:
    return replace(estado, posto_a="", posto_b="")
