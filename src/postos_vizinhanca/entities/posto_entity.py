# ============================================================
# 📦 src/postos_vizinhanca/entities/posto_entity.py
# ============================================================

from dataclasses import dataclass, asdict, field, replace
from typing import Optional, Literal, Union, FrozenSet, Iterable


@dataclass(frozen=True)
class Posto:
    """
    Entidade Posto
    Representa um posto geolocalizado já validado (uma linha da planilha).
    """

    # ============================================================
    # Identificação e agrupamentos
    # ============================================================
    posto: str
    estado: str
    uf: str
    pais: str
    lote: str
    porte: str
    subregiao: str

    # ============================================================
    # Contadores (sempre inteiros >= 0)
    # ============================================================
    chamados_hardware: int
    qtde_kit: int
    total_coletas: int

    # ============================================================
    # Localização
    # ============================================================
    latitude: float
    longitude: float

    @property
    def coordenadas(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================
# 🔗 Resultados de vizinhança (variante com discriminador)
# ============================================================
@dataclass(frozen=True)
class VizinhoMaisProximo:
    """Posto mais próximo de ``posto`` dentro do conjunto ativo."""

    posto: str
    mais_proximo: str
    distancia_km: float
    lote: str
    porte: str
    tempo_haversine_min: Optional[float] = None
    distancia_rodoviaria_km: Optional[float] = None
    tempo_rodoviario_min: Optional[float] = None
    tipo: Literal["mais_proximo"] = field(default="mais_proximo", init=False)

    @property
    def destino(self) -> str:
        return self.mais_proximo

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class VizinhoNoRaio:
    """Posto ``posto`` encontrado na faixa de raio em torno de ``centro``."""

    posto: str
    centro: str
    distancia_km: float
    lote: str
    porte: str
    tempo_haversine_min: Optional[float] = None
    distancia_rodoviaria_km: Optional[float] = None
    tempo_rodoviario_min: Optional[float] = None
    tipo: Literal["raio"] = field(default="raio", init=False)

    @property
    def destino(self) -> str:
        return self.posto

    def to_dict(self) -> dict:
        return asdict(self)


NeighborResult = Union[VizinhoMaisProximo, VizinhoNoRaio]


def com_rota(vizinho: NeighborResult, distancia_km: Optional[float], tempo_min: Optional[float]) -> NeighborResult:
    """Cópia do vizinho com os campos rodoviários preenchidos."""
    return replace(vizinho, distancia_rodoviaria_km=distancia_km, tempo_rodoviario_min=tempo_min)


# ============================================================
# 🎚️ Estado de filtros e seleção
# ============================================================
@dataclass(frozen=True)
class EstadoFiltro:
    """
    Seleção de par para comparação direta + valores permitidos por dimensão.
    Conjunto vazio = sem restrição naquela dimensão.
    """

    posto_a: str = ""
    posto_b: str = ""
    uf: FrozenSet[str] = frozenset()
    lote: FrozenSet[str] = frozenset()
    porte: FrozenSet[str] = frozenset()
    subregiao: FrozenSet[str] = frozenset()

    def __post_init__(self):
        # aceita listas/sets na construção
        for nome in ("uf", "lote", "porte", "subregiao"):
            valor = getattr(self, nome)
            if not isinstance(valor, frozenset):
                object.__setattr__(self, nome, frozenset(valor or ()))

    def chave_filtros(self) -> tuple:
        """Chave estável das dimensões categóricas (ignora a seleção do par)."""
        return tuple(tuple(sorted(getattr(self, nome))) for nome in ("uf", "lote", "porte", "subregiao"))

    def com_filtros(self, **dimensoes: Iterable[str]) -> "EstadoFiltro":
        return replace(self, **{k: frozenset(v or ()) for k, v in dimensoes.items()})

    def to_dict(self) -> dict:
        return {
            "posto_a": self.posto_a,
            "posto_b": self.posto_b,
            "uf": sorted(self.uf),
            "lote": sorted(self.lote),
            "porte": sorted(self.porte),
            "subregiao": sorted(self.subregiao),
        }


# ============================================================
# 📊 Métricas e comparação de par
# ============================================================
@dataclass(frozen=True)
class ResumoMetricas:
    total_postos: int
    total_coletas: int
    total_chamados: int
    distancia_media_km: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DistanciaPar:
    """Distância entre os dois postos selecionados (rodoviária chega depois)."""

    posto_a: str = ""
    posto_b: str = ""
    haversine_km: float = 0.0
    rodoviaria_km: Optional[float] = None
    carregando: bool = False

    def to_dict(self) -> dict:
        return asdict(self)
