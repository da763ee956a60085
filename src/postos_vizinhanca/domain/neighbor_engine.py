# ============================================================
# 📦 src/postos_vizinhanca/domain/neighbor_engine.py
# ============================================================

import math
from typing import Optional, Sequence

from loguru import logger

from postos_vizinhanca.domain.haversine_utils import haversine_km, estimar_tempo_min
from postos_vizinhanca.entities.posto_entity import Posto, VizinhoMaisProximo, VizinhoNoRaio


# ============================================================
# 🔗 Vizinho mais próximo (varredura O(n²))
# ============================================================
def calcular_vizinhos_mais_proximos(
    postos: Sequence[Posto],
    velocidade_kmh: Optional[float] = None,
) -> tuple[VizinhoMaisProximo, ...]:
    """
    Para cada posto, encontra o outro posto mais próximo (haversine).

    Varredura de todos os pares: O(n²), adequada para alguns milhares de
    postos e não além disso. Empate de distância fica com o menor
    identificador de POSTO, independente da ordem de entrada.
    """
    n = len(postos)
    if n < 2:
        return ()

    resultado = []
    for i, atual in enumerate(postos):
        melhor: Optional[Posto] = None
        melhor_dist = math.inf

        for j, outro in enumerate(postos):
            if i == j:
                continue
            dist = haversine_km(atual.latitude, atual.longitude, outro.latitude, outro.longitude)
            if dist < melhor_dist or (dist == melhor_dist and outro.posto < melhor.posto):
                melhor, melhor_dist = outro, dist

        resultado.append(
            VizinhoMaisProximo(
                posto=atual.posto,
                mais_proximo=melhor.posto,
                distancia_km=melhor_dist,
                lote=atual.lote,
                porte=atual.porte,
                tempo_haversine_min=estimar_tempo_min(melhor_dist, velocidade_kmh),
            )
        )

    logger.debug(f"🔗 Vizinhos calculados para {n} postos ({n * (n - 1)} comparações)")
    return tuple(resultado)


# ============================================================
# 🎯 Vizinhos dentro de uma faixa de raio
# ============================================================
def buscar_vizinhos_no_raio(
    postos: Sequence[Posto],
    centro: str,
    raio_min: float,
    raio_max: float,
    velocidade_kmh: Optional[float] = None,
) -> tuple[VizinhoNoRaio, ...]:
    """
    Todos os postos (exceto o centro) com distância em [raio_min, raio_max] km,
    em ordem crescente de distância.
    Centro inexistente, faixa inválida ou raio máximo zero -> tupla vazia.
    """
    if raio_min < 0 or raio_min > raio_max:
        return ()
    # raio zero não devolve nada, nem postos com as mesmas coordenadas do centro
    if raio_max == 0:
        return ()

    idx_centro = next((i for i, p in enumerate(postos) if p.posto == centro), None)
    if idx_centro is None:
        logger.debug(f"Centro '{centro}' não está no conjunto ativo.")
        return ()

    c = postos[idx_centro]
    encontrados = []
    for i, outro in enumerate(postos):
        if i == idx_centro:
            continue
        dist = haversine_km(c.latitude, c.longitude, outro.latitude, outro.longitude)
        if raio_min <= dist <= raio_max:
            encontrados.append(
                VizinhoNoRaio(
                    posto=outro.posto,
                    centro=c.posto,
                    distancia_km=dist,
                    lote=outro.lote,
                    porte=outro.porte,
                    tempo_haversine_min=estimar_tempo_min(dist, velocidade_kmh),
                )
            )

    encontrados.sort(key=lambda v: (v.distancia_km, v.posto))
    return tuple(encontrados)
