# ============================================================
# 📦 src/postos_vizinhanca/domain/haversine_utils.py
# ============================================================

import math
from typing import Optional

RAIO_TERRA_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calcula a distância entre dois pontos (lat, lon) em quilômetros.
    Terra esférica: aproximação, não é distância por estrada.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return RAIO_TERRA_KM * c


def haversine(coord1: tuple[float, float], coord2: tuple[float, float]) -> float:
    """Mesma distância, recebendo tuplas (lat, lon)."""
    lat1, lon1 = coord1
    lat2, lon2 = coord2
    return haversine_km(lat1, lon1, lat2, lon2)


def estimar_tempo_min(distancia_km: float, velocidade_kmh: Optional[float]) -> Optional[float]:
    """Tempo em linha reta (min) para uma velocidade média; None sem velocidade válida."""
    if not velocidade_kmh or velocidade_kmh <= 0:
        return None
    return round((distancia_km / velocidade_kmh) * 60, 1)
