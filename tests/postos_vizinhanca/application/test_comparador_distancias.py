"""Comparação do par selecionado: haversine imediata e descarte de resultado rodoviário antigo."""

from concurrent.futures import Future

import pytest

from postos_vizinhanca.application.comparador_distancias import ComparadorDistancias
from postos_vizinhanca.infrastructure.osrm_client import RotaRodoviaria


class FakeRoadService:
    """Devolve futuros controlados pelo teste, já em execução (não canceláveis)."""

    def __init__(self):
        self.futuros = []

    def consultar_async(self, a, b):
        futuro = Future()
        futuro.set_running_or_notify_cancel()
        self.futuros.append(futuro)
        return futuro


def test_sem_servico_rodoviario(postos_linha):
    a, b, _ = postos_linha
    par = ComparadorDistancias().selecionar(a, b)

    assert par.haversine_km == pytest.approx(111.19, abs=0.5)
    assert par.rodoviaria_km is None
    assert par.carregando is False


def test_selecao_incompleta_zera(postos_linha):
    comparador = ComparadorDistancias(FakeRoadService())
    par = comparador.selecionar(postos_linha[0], None)

    assert par.haversine_km == 0.0
    assert par.posto_a == ""
    assert comparador.road_service.futuros == []


def test_resultado_rodoviario_instalado(postos_linha):
    a, b, _ = postos_linha
    fake = FakeRoadService()
    comparador = ComparadorDistancias(fake)

    par = comparador.selecionar(a, b)
    assert par.carregando is True
    assert par.rodoviaria_km is None

    fake.futuros[0].set_result(RotaRodoviaria(distancia_km=130.5, tempo_min=95.0))

    atual = comparador.atual
    assert atual.rodoviaria_km == 130.5
    assert atual.carregando is False
    assert atual.haversine_km == par.haversine_km


def test_sem_rota_resolve_para_none(postos_linha):
    a, b, _ = postos_linha
    fake = FakeRoadService()
    comparador = ComparadorDistancias(fake)
    comparador.selecionar(a, b)

    fake.futuros[0].set_result(None)

    assert comparador.atual.rodoviaria_km is None
    assert comparador.atual.carregando is False


def test_resultado_antigo_descartado(postos_linha):
    a, b, c = postos_linha
    fake = FakeRoadService()
    comparador = ComparadorDistancias(fake)

    comparador.selecionar(a, b)
    comparador.selecionar(a, c)
    antigo, novo = fake.futuros

    antigo.set_result(RotaRodoviaria(distancia_km=999.0))
    assert comparador.atual.posto_b == "C"
    assert comparador.atual.rodoviaria_km is None
    assert comparador.atual.carregando is True

    novo.set_result(RotaRodoviaria(distancia_km=340.0))
    assert comparador.atual.rodoviaria_km == 340.0


def test_limpar_selecao_descarta_pendente(postos_linha):
    a, b, _ = postos_linha
    fake = FakeRoadService()
    comparador = ComparadorDistancias(fake)

    comparador.selecionar(a, b)
    comparador.selecionar(None, None)
    fake.futuros[0].set_result(RotaRodoviaria(distancia_km=10.0))

    assert comparador.atual.posto_a == ""
    assert comparador.atual.rodoviaria_km is None


def test_aguardar(postos_linha):
    a, b, _ = postos_linha
    fake = FakeRoadService()
    comparador = ComparadorDistancias(fake)
    comparador.selecionar(a, b)

    # ainda pendente: devolve o estado atual após o timeout
    assert comparador.aguardar(timeout=0.01).carregando is True

    fake.futuros[0].set_result(RotaRodoviaria(distancia_km=120.0))
    assert comparador.aguardar(timeout=1).rodoviaria_km == 120.0
