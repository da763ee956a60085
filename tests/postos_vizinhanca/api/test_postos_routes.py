"""Rotas HTTP sobre uma sessão isolada (dependency override, sem OSRM)."""

from io import BytesIO
from unittest.mock import patch

import pandas as pd
import pytest
import requests
from fastapi import FastAPI
from fastapi.testclient import TestClient

from postos_vizinhanca.api.dependencies import get_painel
from postos_vizinhanca.api.routes import router
from postos_vizinhanca.application.painel_postos_use_case import PainelPostos

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def painel():
    return PainelPostos(road_service=None, velocidade_kmh=60)


@pytest.fixture
def client(painel):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_painel] = lambda: painel
    return TestClient(app)


@pytest.fixture
def carregado(client, xlsx_valido):
    resp = client.post("/postos/upload", files={"arquivo": ("Pasta1.xlsx", xlsx_valido, XLSX_MIME)})
    assert resp.status_code == 200
    return client


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_sem_dados_404(client):
    assert client.get("/postos").status_code == 404
    assert client.get("/postos/vizinhos").status_code == 404


def test_upload(client, xlsx_valido, painel):
    resp = client.post("/postos/upload", files={"arquivo": ("Pasta1.xlsx", xlsx_valido, XLSX_MIME)})

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "registros": 3, "versao": 1}
    assert len(painel.postos) == 3


def test_upload_invalido_422_e_mantem_dados(carregado, xlsx_latitude_invalida, painel):
    resp = carregado.post("/postos/upload", files={"arquivo": ("ruim.xlsx", xlsx_latitude_invalida, XLSX_MIME)})

    assert resp.status_code == 422
    assert "Coordenadas inválidas na linha 3" in resp.json()["detail"]
    assert painel.versao == 1


def test_listar_com_filtros(carregado):
    todos = carregado.get("/postos").json()
    assert [p["posto"] for p in todos] == ["PPT A", "PPT B", "PPT C"]

    rj = carregado.get("/postos", params={"uf": ["RJ"]}).json()
    assert [p["posto"] for p in rj] == ["PPT C"]

    varios = carregado.get("/postos", params={"porte": ["P", "G"]}).json()
    assert [p["posto"] for p in varios] == ["PPT A", "PPT C"]


def test_opcoes(carregado):
    assert carregado.get("/postos/opcoes").json()["lote"] == ["L1", "L2"]


def test_vizinhos_e_metricas(carregado):
    vizinhos = carregado.get("/postos/vizinhos").json()
    assert [(v["posto"], v["mais_proximo"]) for v in vizinhos] == [
        ("PPT A", "PPT B"),
        ("PPT B", "PPT A"),
        ("PPT C", "PPT B"),
    ]
    assert all(v["tipo"] == "mais_proximo" for v in vizinhos)

    metricas = carregado.get("/postos/metricas").json()
    assert metricas["total_postos"] == 3
    assert metricas["total_coletas"] == 60

    vazio = carregado.get("/postos/metricas", params={"uf": ["MG"]}).json()
    assert vazio["distancia_media_km"] == 0.0


def test_raio(carregado):
    resp = carregado.get("/postos/raio", params={"centro": "PPT A", "raio_min": 0, "raio_max": 1000})
    assert [v["posto"] for v in resp.json()] == ["PPT B", "PPT C"]
    assert all(v["centro"] == "PPT A" and v["tipo"] == "raio" for v in resp.json())

    assert carregado.get("/postos/raio", params={"centro": "PPT A", "raio_min": 0, "raio_max": 0}).json() == []
    assert carregado.get("/postos/raio", params={"centro": "NADA"}).json() == []
    assert carregado.get("/postos/raio", params={"centro": "PPT A", "raio_min": -5}).status_code == 422


def test_distancia_par(carregado):
    resp = carregado.get("/postos/distancia", params={"posto_a": "PPT A", "posto_b": "PPT C"})

    corpo = resp.json()
    assert corpo["posto_a"] == "PPT A"
    assert corpo["haversine_km"] > 300
    assert corpo["rodoviaria_km"] is None
    assert corpo["carregando"] is False


def test_distancia_posto_desconhecido(carregado):
    resp = carregado.get("/postos/distancia", params={"posto_a": "PPT A", "posto_b": "XPTO"})
    assert resp.status_code == 404


def test_graficos(carregado):
    corpo = carregado.get("/postos/graficos").json()
    assert set(corpo) == {"top_chamados", "menores_distancias", "coletas_por_lote"}


def test_exportar_xlsx(carregado):
    resp = carregado.get("/postos/exportar")

    assert resp.status_code == 200
    abas = pd.ExcelFile(BytesIO(resp.content)).sheet_names
    assert abas == ["Dados Principais", "Vizinhos Mais Próximos", "Métricas Resumo"]


def test_exportar_ignora_filtros_de_requisicoes_anteriores(carregado):
    assert len(carregado.get("/postos", params={"uf": ["RJ"]}).json()) == 1

    resp = carregado.get("/postos/exportar")

    dados = pd.read_excel(BytesIO(resp.content), sheet_name="Dados Principais")
    assert len(dados) == 3
    assert len(carregado.get("/postos").json()) == 3


def test_exportar_e_graficos_com_filtros(carregado):
    resp = carregado.get("/postos/exportar", params={"uf": ["SP"]})
    dados = pd.read_excel(BytesIO(resp.content), sheet_name="Dados Principais")
    assert len(dados) == 2

    graficos = carregado.get("/postos/graficos", params={"uf": ["RJ"]}).json()
    assert graficos["menores_distancias"] == []


@patch("postos_vizinhanca.infrastructure.remote_loader.requests.get")
def test_remoto_indisponivel_502(mock_get, client):
    mock_get.side_effect = requests.ConnectionError("sem rede")

    resp = client.post("/postos/remoto", params={"url": "https://exemplo.test/x.xlsx"})

    assert resp.status_code == 502
    assert "Verifique sua conexão" in resp.json()["detail"]
