"""
Fixtures compartilhadas: tabelas de entrada, postos prontos e planilhas XLSX em memória.
"""

from io import BytesIO

import pandas as pd
import pytest

from postos_vizinhanca.entities.posto_entity import Posto

CABECALHO = [
    "POSTO", "ESTADO", "UF", "PAIS", "LOTE", "PORTE", "SUBREGIAO",
    "CHAMADOS HARDWARE", "QTDE. KIT", "TOTAL DE COLETAS", "LATITUDE", "LONGITUDE",
]


def novo_posto(posto, lat, lon, uf="SP", lote="L1", porte="P", subregiao="", chamados=0, coletas=0):
    return Posto(
        posto=posto,
        estado="Estado",
        uf=uf,
        pais="Brasil",
        lote=lote,
        porte=porte,
        subregiao=subregiao,
        chamados_hardware=chamados,
        qtde_kit=0,
        total_coletas=coletas,
        latitude=lat,
        longitude=lon,
    )


def tabela_para_xlsx(linhas) -> bytes:
    """Grava cabeçalho + linhas na primeira aba de um XLSX em memória."""
    df = pd.DataFrame(linhas[1:], columns=linhas[0])
    buf = BytesIO()
    df.to_excel(buf, index=False)
    return buf.getvalue()


@pytest.fixture
def linhas_validas():
    return [
        list(CABECALHO),
        ["PPT A", "São Paulo", "SP", "Brasil", "L1", "P", "Norte", 3, 1, 10, "-23,55", "-46.63"],
        ["PPT B", "São Paulo", "SP", "Brasil", "L1", "M", "Sul", "x", 2, 20, -23.0, -46.0],
        ["PPT C", "Rio de Janeiro", "RJ", "Brasil", "L2", "G", None, 5, "abc", 30, -22.9, -43.2],
    ]


@pytest.fixture
def xlsx_valido(linhas_validas) -> bytes:
    return tabela_para_xlsx(linhas_validas)


@pytest.fixture
def xlsx_latitude_invalida(linhas_validas) -> bytes:
    linhas = [list(l) for l in linhas_validas]
    linhas[2][10] = 95
    return tabela_para_xlsx(linhas)


@pytest.fixture
def postos_linha():
    """Três postos no equador: A(0,0), B(0,1), C(0,3)."""
    return (
        novo_posto("A", 0.0, 0.0, uf="SP", lote="L1", porte="P", chamados=5, coletas=10),
        novo_posto("B", 0.0, 1.0, uf="RJ", lote="L1", porte="M", chamados=1, coletas=20),
        novo_posto("C", 0.0, 3.0, uf="SP", lote="L2", porte="G", subregiao="Sul", chamados=9, coletas=30),
    )


@pytest.fixture
def fabrica_posto():
    return novo_posto


@pytest.fixture
def para_xlsx():
    return tabela_para_xlsx
