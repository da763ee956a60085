# ============================================================
# 📦 src/postos_vizinhanca/application/painel_postos_use_case.py
# ============================================================

import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional

from loguru import logger

from postos_vizinhanca.application.comparador_distancias import ComparadorDistancias
from postos_vizinhanca.config.settings import get_settings
from postos_vizinhanca.domain.filter_engine import (
    aplicar_filtros,
    opcoes_de_filtro,
    selecionar_posto,
    trocar_selecao,
    limpar_selecao,
)
from postos_vizinhanca.domain.metrics import calcular_resumo, series_graficos
from postos_vizinhanca.domain.neighbor_engine import (
    calcular_vizinhos_mais_proximos,
    buscar_vizinhos_no_raio,
)
from postos_vizinhanca.entities.posto_entity import (
    DistanciaPar,
    EstadoFiltro,
    Posto,
    ResumoMetricas,
    VizinhoMaisProximo,
    VizinhoNoRaio,
)
from postos_vizinhanca.infrastructure.osrm_client import RoadDistanceService
from postos_vizinhanca.infrastructure.planilha_reader import FontePlanilha, ler_planilha
from postos_vizinhanca.infrastructure.remote_loader import carregar_planilha_remota


@dataclass(frozen=True)
class ResultadoAnalise:
    """Fotografia serializável do conjunto filtrado e de tudo que deriva dele."""

    postos: tuple[Posto, ...]
    vizinhos: tuple[VizinhoMaisProximo, ...]
    metricas: ResumoMetricas
    graficos: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "postos": [p.to_dict() for p in self.postos],
            "vizinhos": [v.to_dict() for v in self.vizinhos],
            "metricas": self.metricas.to_dict(),
            "graficos": self.graficos,
        }


class PainelPostos:
    """
    Sessão de análise de um único conjunto de postos.

    - Carga substitui o conjunto inteiro; erro de carga mantém o anterior.
    - Derivados são recalculados a partir do conjunto filtrado e guardados
      por (versão do conjunto, filtros); o cache é zerado a cada carga.
    """

    def __init__(
        self,
        road_service: Optional[RoadDistanceService] = None,
        velocidade_kmh: Optional[float] = None,
    ):
        self.road_service = road_service
        self.velocidade_kmh = velocidade_kmh if velocidade_kmh is not None else get_settings().vel_kmh
        self.comparador = ComparadorDistancias(road_service)

        self._lock = threading.Lock()
        self._postos: tuple[Posto, ...] = ()
        self._versao = 0
        self._filtros = EstadoFiltro()
        self._cache: dict[tuple, ResultadoAnalise] = {}

    # ============================================================
    # 📥 Carga (substituição atômica)
    # ============================================================
    @property
    def postos(self) -> tuple[Posto, ...]:
        return self._postos

    @property
    def versao(self) -> int:
        return self._versao

    @property
    def filtros(self) -> EstadoFiltro:
        return self._filtros

    @property
    def carregado(self) -> bool:
        return bool(self._postos)

    def _instalar(self, postos: tuple[Posto, ...]) -> tuple[Posto, ...]:
        with self._lock:
            self._postos = postos
            self._versao += 1
            self._filtros = EstadoFiltro()
            self._cache.clear()
        self.comparador.selecionar(None, None)
        logger.success(f"✅ {len(postos)} registros importados (versão {self._versao}).")
        return postos

    def carregar_arquivo(self, fonte: FontePlanilha) -> tuple[Posto, ...]:
        return self._instalar(ler_planilha(fonte))

    def carregar_remoto(self, url: Optional[str] = None) -> tuple[Posto, ...]:
        return self._instalar(carregar_planilha_remota(url))

    # ============================================================
    # 🎚️ Filtros e seleção
    # ============================================================
    def atualizar_filtros(
        self,
        uf: Optional[Iterable[str]] = None,
        lote: Optional[Iterable[str]] = None,
        porte: Optional[Iterable[str]] = None,
        subregiao: Optional[Iterable[str]] = None,
    ) -> EstadoFiltro:
        """Substitui as dimensões informadas; as omitidas ficam como estão."""
        dimensoes = {
            nome: valores
            for nome, valores in (("uf", uf), ("lote", lote), ("porte", porte), ("subregiao", subregiao))
            if valores is not None
        }
        self._filtros = self._filtros.com_filtros(**dimensoes)
        return self._filtros

    def selecionar_posto(self, posto: str) -> DistanciaPar:
        self._filtros = selecionar_posto(self._filtros, posto)
        return self.comparar_par()

    def trocar_selecao(self) -> DistanciaPar:
        self._filtros = trocar_selecao(self._filtros)
        return self.comparar_par()

    def limpar_selecao(self) -> DistanciaPar:
        self._filtros = limpar_selecao(self._filtros)
        return self.comparar_par()

    def definir_par(self, posto_a: str, posto_b: str) -> DistanciaPar:
        self._filtros = limpar_selecao(self._filtros)
        for posto in (posto_a, posto_b):
            if posto:
                self._filtros = selecionar_posto(self._filtros, posto)
        return self.comparar_par()

    def buscar_posto(self, identificador: str) -> Optional[Posto]:
        return next((p for p in self._postos if p.posto == identificador), None)

    def comparar_par(self) -> DistanciaPar:
        """Haversine imediata; rodoviária é preenchida em background."""
        a = self.buscar_posto(self._filtros.posto_a) if self._filtros.posto_a else None
        b = self.buscar_posto(self._filtros.posto_b) if self._filtros.posto_b else None
        return self.comparador.selecionar(a, b)

    # ============================================================
    # 🔗 Derivados
    # ============================================================
    def opcoes(self) -> dict[str, list[str]]:
        return opcoes_de_filtro(self._postos)

    def postos_filtrados(self, filtros: Optional[EstadoFiltro] = None) -> tuple[Posto, ...]:
        return aplicar_filtros(self._postos, filtros if filtros is not None else self._filtros)

    def resultado(self, filtros: Optional[EstadoFiltro] = None) -> ResultadoAnalise:
        """
        Derivados do conjunto filtrado. Com ``filtros`` explícitos (uma
        requisição HTTP, por exemplo) o estado da sessão não é lido nem alterado.
        """
        filtros = filtros if filtros is not None else self._filtros
        with self._lock:
            postos, versao = self._postos, self._versao
            chave = (versao, filtros.chave_filtros())
            em_cache = self._cache.get(chave)
        if em_cache is not None:
            return em_cache

        filtrados = aplicar_filtros(postos, filtros)
        vizinhos = calcular_vizinhos_mais_proximos(filtrados, self.velocidade_kmh)
        resultado = ResultadoAnalise(
            postos=filtrados,
            vizinhos=vizinhos,
            metricas=calcular_resumo(filtrados, vizinhos),
            graficos=series_graficos(filtrados, vizinhos),
        )

        with self._lock:
            if self._versao == chave[0]:
                self._cache[chave] = resultado
        logger.info(
            f"📊 Análise: {len(filtrados)} postos filtrados | "
            f"distância média {resultado.metricas.distancia_media_km:.2f} km"
        )
        return resultado

    def vizinhos_no_raio(
        self,
        centro: str,
        raio_min: float,
        raio_max: float,
        filtros: Optional[EstadoFiltro] = None,
    ) -> tuple[VizinhoNoRaio, ...]:
        return buscar_vizinhos_no_raio(
            self.postos_filtrados(filtros), centro, raio_min, raio_max, self.velocidade_kmh
        )

    def enriquecer_rodoviario(self, vizinhos):
        """Distâncias rodoviárias por par; sem serviço configurado devolve como veio."""
        if self.road_service is None:
            return tuple(vizinhos)
        return self.road_service.enriquecer_rodoviario(vizinhos, self._postos)
