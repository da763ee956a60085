# ============================================================
# 📦 src/postos_vizinhanca/api/schemas.py
# ============================================================

from pydantic import BaseModel
from typing import Optional, Literal


class PostoSchema(BaseModel):
    posto: str
    estado: str
    uf: str
    pais: str
    lote: str
    porte: str
    subregiao: str
    chamados_hardware: int
    qtde_kit: int
    total_coletas: int
    latitude: float
    longitude: float


class VizinhoMaisProximoSchema(BaseModel):
    tipo: Literal["mais_proximo"] = "mais_proximo"
    posto: str
    mais_proximo: str
    distancia_km: float
    lote: str
    porte: str
    tempo_haversine_min: Optional[float] = None
    distancia_rodoviaria_km: Optional[float] = None
    tempo_rodoviario_min: Optional[float] = None


class VizinhoNoRaioSchema(BaseModel):
    tipo: Literal["raio"] = "raio"
    posto: str
    centro: str
    distancia_km: float
    lote: str
    porte: str
    tempo_haversine_min: Optional[float] = None
    distancia_rodoviaria_km: Optional[float] = None
    tempo_rodoviario_min: Optional[float] = None


class MetricasSchema(BaseModel):
    total_postos: int
    total_coletas: int
    total_chamados: int
    distancia_media_km: float


class DistanciaParSchema(BaseModel):
    posto_a: str
    posto_b: str
    haversine_km: float
    rodoviaria_km: Optional[float] = None
    carregando: bool = False


class CargaSchema(BaseModel):
    status: str
    registros: int
    versao: int
