# ============================================================
# 📦 src/postos_vizinhanca/application/comparador_distancias.py
# ============================================================

import threading
from concurrent.futures import CancelledError, Future, TimeoutError as FuturoTimeout
from dataclasses import replace
from typing import Optional

from loguru import logger

from postos_vizinhanca.domain.haversine_utils import haversine
from postos_vizinhanca.entities.posto_entity import DistanciaPar, Posto
from postos_vizinhanca.infrastructure.osrm_client import RoadDistanceService, RotaRodoviaria


class ComparadorDistancias:
    """
    Distância entre o par selecionado.

    A haversine é devolvida na hora; a rodoviária chega depois, em
    background. Cada consulta carrega a seleção que a originou e o
    resultado só é instalado se essa seleção ainda for a atual.
    """

    def __init__(self, road_service: Optional[RoadDistanceService] = None):
        self.road_service = road_service
        self._lock = threading.Lock()
        self._geracao = 0
        self._atual = DistanciaPar()
        self._pendente: Optional[tuple[int, Future]] = None

    @property
    def atual(self) -> DistanciaPar:
        with self._lock:
            return self._atual

    def selecionar(self, a: Optional[Posto], b: Optional[Posto]) -> DistanciaPar:
        futuro = None
        with self._lock:
            self._geracao += 1
            geracao = self._geracao
            if self._pendente is not None:
                self._pendente[1].cancel()
                self._pendente = None

            if a is None or b is None:
                self._atual = DistanciaPar()
                return self._atual

            self._atual = DistanciaPar(
                posto_a=a.posto,
                posto_b=b.posto,
                haversine_km=haversine(a.coordenadas, b.coordenadas),
                carregando=self.road_service is not None,
            )
            resultado = self._atual

            if self.road_service is not None:
                futuro = self.road_service.consultar_async(a.coordenadas, b.coordenadas)
                self._pendente = (geracao, futuro)

        if futuro is not None:
            futuro.add_done_callback(lambda f: self._instalar(geracao, f))
        return resultado

    def _instalar(self, geracao: int, futuro: Future):
        if futuro.cancelled():
            return
        rota: Optional[RotaRodoviaria] = futuro.result()
        with self._lock:
            if geracao != self._geracao:
                logger.debug(f"Resultado rodoviário descartado (seleção {geracao} substituída)")
                return
            self._atual = replace(
                self._atual,
                rodoviaria_km=rota.distancia_km if rota else None,
                carregando=False,
            )
            self._pendente = None

    def aguardar(self, timeout: Optional[float] = None) -> DistanciaPar:
        """Espera a consulta pendente (uso em CLI/API síncronas)."""
        with self._lock:
            pendente = self._pendente
        if pendente is not None:
            geracao, futuro = pendente
            try:
                futuro.result(timeout=timeout)
            except FuturoTimeout:
                logger.warning("⚠️ Distância rodoviária ainda pendente após o tempo limite.")
                return self.atual
            except CancelledError:
                return self.atual
            # o callback pode ainda não ter rodado quando result() retorna
            self._instalar(geracao, futuro)
        return self.atual
