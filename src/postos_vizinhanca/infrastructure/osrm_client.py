# ============================================================
# 📦 src/postos_vizinhanca/infrastructure/osrm_client.py
# ============================================================

import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Sequence

import requests
from loguru import logger

from postos_vizinhanca.config.settings import get_settings
from postos_vizinhanca.domain.exceptions import NoRouteAvailable
from postos_vizinhanca.entities.posto_entity import NeighborResult, Posto, com_rota


@dataclass(frozen=True)
class RotaRodoviaria:
    distancia_km: float
    tempo_min: Optional[float] = None


class RoadDistanceService:
    """
    Distância rodoviária via OSRM, como enriquecimento opcional.

    Nunca propaga erro: rota ausente, status HTTP de falha, timeout ou
    conexão recusada resultam em ``None`` (registrado em log).
    Uma única tentativa por consulta.
    """

    def __init__(
        self,
        osrm_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
    ):
        settings = get_settings()
        self.osrm_url = (osrm_url or settings.osrm_url).rstrip("/")
        self.timeout = timeout or settings.osrm_timeout
        self.max_workers = max_workers or settings.osrm_max_workers
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="osrm")

        self.stats = {"total": 0, "osrm": 0, "sem_rota": 0}
        self.stats_lock = threading.Lock()

        logger.info(f"⚙️ RoadDistanceService inicializado | OSRM={self.osrm_url} | timeout={self.timeout}s")

    # ============================================================
    # OSRM (ordem lon,lat na URL)
    # ============================================================
    def _from_osrm(self, a: tuple[float, float], b: tuple[float, float]) -> RotaRodoviaria:
        url = (
            f"{self.osrm_url}/route/v1/driving/{a[1]},{a[0]};{b[1]},{b[0]}"
            "?overview=false&alternatives=false&annotations=distance"
        )

        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise NoRouteAvailable(f"Falha de conexão com OSRM ({e})") from e

        if not resp.ok:
            raise NoRouteAvailable(f"HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise NoRouteAvailable(f"Resposta OSRM inválida ({e})") from e

        rotas = data.get("routes") if isinstance(data, dict) else None
        if not rotas:
            code = data.get("code") if isinstance(data, dict) else None
            raise NoRouteAvailable(f"Sem rota OSRM para {a} → {b} (code={code})")

        try:
            rota = rotas[0]
            dist_km = round(float(rota["distance"]) / 1000, 2)
            duracao = rota.get("duration")
            tempo_min = round(float(duracao) / 60, 1) if duracao is not None else None
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise NoRouteAvailable(f"Rota OSRM sem distância ({e})") from e

        logger.debug(f"📍 OSRM rota: {dist_km:.2f} km / {tempo_min} min")
        return RotaRodoviaria(distancia_km=dist_km, tempo_min=tempo_min)

    # ============================================================
    # Consulta par a par (síncrona, best effort)
    # ============================================================
    def distancia_rodoviaria(self, a: tuple[float, float], b: tuple[float, float]) -> Optional[RotaRodoviaria]:
        with self.stats_lock:
            self.stats["total"] += 1
        try:
            rota = self._from_osrm(a, b)
        except NoRouteAvailable as e:
            logger.warning(f"⚠️ OSRM indisponível: {e}")
            with self.stats_lock:
                self.stats["sem_rota"] += 1
            return None

        with self.stats_lock:
            self.stats["osrm"] += 1
        return rota

    def consultar_async(self, a: tuple[float, float], b: tuple[float, float]) -> "Future[Optional[RotaRodoviaria]]":
        """Dispara a consulta em background; o Future sempre resolve (nunca com exceção)."""
        return self._executor.submit(self.distancia_rodoviaria, a, b)

    # ============================================================
    # ⚡ Enriquecimento em lote de tabelas de vizinhos
    # ============================================================
    def enriquecer_rodoviario(
        self,
        vizinhos: Sequence[NeighborResult],
        postos: Sequence[Posto],
    ) -> tuple[NeighborResult, ...]:
        """
        Preenche distância/tempo rodoviários de cada par (origem, destino).
        Pares sem rota mantêm os campos em None.
        """
        if not vizinhos:
            return ()

        coords = {}
        for p in postos:
            coords.setdefault(p.posto, p.coordenadas)

        def _origem(v: NeighborResult) -> str:
            return v.centro if v.tipo == "raio" else v.posto

        resultados: list[NeighborResult] = list(vizinhos)
        futuros = {}
        for idx, v in enumerate(vizinhos):
            a, b = coords.get(_origem(v)), coords.get(v.destino)
            if a is None or b is None:
                logger.warning(f"⚠️ Par sem coordenadas conhecidas: {_origem(v)} → {v.destino}")
                continue
            futuros[self._executor.submit(self.distancia_rodoviaria, a, b)] = idx

        for futuro in as_completed(futuros):
            idx = futuros[futuro]
            rota = futuro.result()
            if rota is not None:
                resultados[idx] = com_rota(resultados[idx], rota.distancia_km, rota.tempo_min)

        self.log_resumo()
        return tuple(resultados)

    # ============================================================
    # Logs e fechamento
    # ============================================================
    def log_resumo(self):
        total = self.stats["total"]
        pct = (self.stats["osrm"] / total * 100) if total else 0
        logger.info(
            f"📊 Rotas consultadas: {total} (OSRM {pct:.1f}%, sem rota {self.stats['sem_rota']})"
        )

    def close(self):
        self._executor.shutdown(wait=False, cancel_futures=True)
        logger.info(f"🏁 Encerrando RoadDistanceService | Total: {self.stats['total']}")
