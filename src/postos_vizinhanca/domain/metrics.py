# ============================================================
# 📦 src/postos_vizinhanca/domain/metrics.py
# ============================================================

from collections import defaultdict
from typing import Sequence

import numpy as np

from postos_vizinhanca.entities.posto_entity import Posto, VizinhoMaisProximo, ResumoMetricas


def calcular_resumo(postos: Sequence[Posto], vizinhos: Sequence[VizinhoMaisProximo]) -> ResumoMetricas:
    """Contadores do conjunto filtrado e distância média ao vizinho mais próximo."""
    distancias = [v.distancia_km for v in vizinhos]
    media = float(np.mean(distancias)) if distancias else 0.0

    return ResumoMetricas(
        total_postos=len({p.posto for p in postos}),
        total_coletas=sum(p.total_coletas for p in postos),
        total_chamados=sum(p.chamados_hardware for p in postos),
        distancia_media_km=media,
    )


# ============================================================
# 📈 Séries para gráficos (somente dados)
# ============================================================
def top_chamados(postos: Sequence[Posto], limite: int = 15) -> list[dict]:
    ordenados = sorted(postos, key=lambda p: p.chamados_hardware, reverse=True)
    return [{"posto": p.posto, "chamados": p.chamados_hardware} for p in ordenados[:limite]]


def top_menores_distancias(vizinhos: Sequence[VizinhoMaisProximo], limite: int = 10) -> list[dict]:
    ordenados = sorted(vizinhos, key=lambda v: v.distancia_km)
    return [{"posto": v.posto, "distancia": round(v.distancia_km, 2)} for v in ordenados[:limite]]


def coletas_por_lote(postos: Sequence[Posto]) -> list[dict]:
    totais: dict[str, int] = defaultdict(int)
    for p in postos:
        totais[p.lote] += p.total_coletas
    return [
        {"lote": lote, "coletas": total}
        for lote, total in sorted(totais.items(), key=lambda kv: kv[1], reverse=True)
    ]


def series_graficos(postos: Sequence[Posto], vizinhos: Sequence[VizinhoMaisProximo]) -> dict:
    return {
        "top_chamados": top_chamados(postos),
        "menores_distancias": top_menores_distancias(vizinhos),
        "coletas_por_lote": coletas_por_lote(postos),
    }
