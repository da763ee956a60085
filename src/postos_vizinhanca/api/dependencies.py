# ============================================================
# 📦 src/postos_vizinhanca/api/dependencies.py
# ============================================================

from functools import lru_cache

from postos_vizinhanca.application.painel_postos_use_case import PainelPostos
from postos_vizinhanca.infrastructure.osrm_client import RoadDistanceService


@lru_cache(maxsize=1)
def get_painel() -> PainelPostos:
    """Sessão única do processo (um usuário, um conjunto ativo)."""
    return PainelPostos(road_service=RoadDistanceService())
