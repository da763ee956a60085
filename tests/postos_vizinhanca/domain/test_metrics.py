import pytest

from postos_vizinhanca.domain.metrics import calcular_resumo, series_graficos, coletas_por_lote
from postos_vizinhanca.domain.neighbor_engine import calcular_vizinhos_mais_proximos


def test_resumo_conjunto_vazio():
    resumo = calcular_resumo([], [])
    assert resumo.total_postos == 0
    assert resumo.total_coletas == 0
    assert resumo.total_chamados == 0
    assert resumo.distancia_media_km == 0.0


def test_resumo(postos_linha):
    vizinhos = calcular_vizinhos_mais_proximos(postos_linha)
    resumo = calcular_resumo(postos_linha, vizinhos)

    assert resumo.total_postos == 3
    assert resumo.total_coletas == 60
    assert resumo.total_chamados == 15
    media = sum(v.distancia_km for v in vizinhos) / 3
    assert resumo.distancia_media_km == pytest.approx(media)


def test_resumo_conta_postos_distintos(fabrica_posto):
    postos = [fabrica_posto("A", 0, 0, coletas=1), fabrica_posto("A", 0, 1, coletas=2)]
    resumo = calcular_resumo(postos, calcular_vizinhos_mais_proximos(postos))
    assert resumo.total_postos == 1
    assert resumo.total_coletas == 3


def test_resumo_com_um_posto_tem_media_zero(fabrica_posto):
    postos = [fabrica_posto("A", 0, 0)]
    assert calcular_resumo(postos, calcular_vizinhos_mais_proximos(postos)).distancia_media_km == 0.0


def test_series_graficos(postos_linha):
    series = series_graficos(postos_linha, calcular_vizinhos_mais_proximos(postos_linha))

    assert [s["posto"] for s in series["top_chamados"]] == ["C", "A", "B"]
    assert series["menores_distancias"][0]["distancia"] == pytest.approx(111.19, abs=0.5)
    assert series["coletas_por_lote"] == [{"lote": "L1", "coletas": 30}, {"lote": "L2", "coletas": 30}]


def test_coletas_por_lote_ordenado(fabrica_posto):
    postos = [
        fabrica_posto("A", 0, 0, lote="X", coletas=5),
        fabrica_posto("B", 0, 0, lote="Y", coletas=50),
        fabrica_posto("C", 0, 0, lote="X", coletas=10),
    ]
    assert coletas_por_lote(postos) == [{"lote": "Y", "coletas": 50}, {"lote": "X", "coletas": 15}]
