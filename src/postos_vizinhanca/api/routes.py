# ==========================================================
# 📦 src/postos_vizinhanca/api/routes.py
# ==========================================================

import io
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse
from loguru import logger

from postos_vizinhanca.api.dependencies import get_painel
from postos_vizinhanca.api.schemas import (
    CargaSchema,
    DistanciaParSchema,
    MetricasSchema,
    PostoSchema,
    VizinhoMaisProximoSchema,
    VizinhoNoRaioSchema,
)
from postos_vizinhanca.application.painel_postos_use_case import PainelPostos
from postos_vizinhanca.domain.exceptions import FetchError, ValidationError
from postos_vizinhanca.entities.posto_entity import EstadoFiltro
from postos_vizinhanca.reporting.export_xlsx import exportar_xlsx

router = APIRouter()


# ==========================================================
# 🧠 Helpers
# ==========================================================
def _exigir_dados(painel: PainelPostos):
    if not painel.carregado:
        raise HTTPException(status_code=404, detail="Nenhum conjunto de postos carregado.")


def filtros_da_query(
    uf: List[str] = Query([]),
    lote: List[str] = Query([]),
    porte: List[str] = Query([]),
    subregiao: List[str] = Query([]),
) -> EstadoFiltro:
    # filtros valem só para a requisição; a sessão compartilhada não é alterada
    return EstadoFiltro(uf=uf, lote=lote, porte=porte, subregiao=subregiao)


# ==========================================================
# 🩺 Health check
# ==========================================================
@router.get("/health", tags=["Status"])
def health_check():
    return {"status": "ok", "message": "Postos Vizinhança API saudável 🧩"}


# ==========================================================
# 📥 Carga de dados
# ==========================================================
@router.post("/postos/upload", response_model=CargaSchema, tags=["Carga"])
async def upload_planilha(arquivo: UploadFile = File(...), painel: PainelPostos = Depends(get_painel)):
    conteudo = await arquivo.read()
    try:
        postos = painel.carregar_arquivo(conteudo)
    except ValidationError as e:
        logger.warning(f"⚠️ Planilha rejeitada ({arquivo.filename}): {e.mensagem}")
        raise HTTPException(status_code=422, detail=e.mensagem)

    return {"status": "ok", "registros": len(postos), "versao": painel.versao}


@router.post("/postos/remoto", response_model=CargaSchema, tags=["Carga"])
def carregar_remoto(url: Optional[str] = Query(None), painel: PainelPostos = Depends(get_painel)):
    try:
        postos = painel.carregar_remoto(url)
    except FetchError as e:
        raise HTTPException(status_code=502, detail=e.mensagem)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.mensagem)

    return {"status": "ok", "registros": len(postos), "versao": painel.versao}


# ==========================================================
# 📋 Consultas
# ==========================================================
@router.get("/postos", response_model=List[PostoSchema], tags=["Postos"])
def listar_postos(
    filtros: EstadoFiltro = Depends(filtros_da_query),
    painel: PainelPostos = Depends(get_painel),
):
    _exigir_dados(painel)
    return [p.to_dict() for p in painel.resultado(filtros).postos]


@router.get("/postos/opcoes", tags=["Postos"])
def listar_opcoes(painel: PainelPostos = Depends(get_painel)):
    _exigir_dados(painel)
    return painel.opcoes()


@router.get("/postos/vizinhos", response_model=List[VizinhoMaisProximoSchema], tags=["Vizinhança"])
def listar_vizinhos(
    filtros: EstadoFiltro = Depends(filtros_da_query),
    rodoviario: bool = Query(False, description="Enriquecer com distância OSRM"),
    painel: PainelPostos = Depends(get_painel),
):
    _exigir_dados(painel)
    vizinhos = painel.resultado(filtros).vizinhos
    if rodoviario:
        vizinhos = painel.enriquecer_rodoviario(vizinhos)
    return [v.to_dict() for v in vizinhos]


@router.get("/postos/metricas", response_model=MetricasSchema, tags=["Vizinhança"])
def obter_metricas(
    filtros: EstadoFiltro = Depends(filtros_da_query),
    painel: PainelPostos = Depends(get_painel),
):
    _exigir_dados(painel)
    return painel.resultado(filtros).metricas.to_dict()


@router.get("/postos/graficos", tags=["Vizinhança"])
def obter_graficos(
    filtros: EstadoFiltro = Depends(filtros_da_query),
    painel: PainelPostos = Depends(get_painel),
):
    _exigir_dados(painel)
    return painel.resultado(filtros).graficos


@router.get("/postos/raio", response_model=List[VizinhoNoRaioSchema], tags=["Vizinhança"])
def listar_no_raio(
    centro: str = Query(..., description="POSTO usado como centro"),
    raio_min: float = Query(0, ge=0),
    raio_max: float = Query(50, ge=0),
    filtros: EstadoFiltro = Depends(filtros_da_query),
    painel: PainelPostos = Depends(get_painel),
):
    _exigir_dados(painel)
    return [v.to_dict() for v in painel.vizinhos_no_raio(centro, raio_min, raio_max, filtros)]


@router.get("/postos/distancia", response_model=DistanciaParSchema, tags=["Vizinhança"])
def distancia_par(
    posto_a: str = Query(...),
    posto_b: str = Query(...),
    aguardar: float = Query(0, ge=0, le=30, description="Segundos de espera pela rota OSRM"),
    painel: PainelPostos = Depends(get_painel),
):
    _exigir_dados(painel)
    for posto in (posto_a, posto_b):
        if painel.buscar_posto(posto) is None:
            raise HTTPException(status_code=404, detail=f"Posto não encontrado: {posto}")

    par = painel.definir_par(posto_a, posto_b)
    if aguardar:
        par = painel.comparador.aguardar(timeout=aguardar)
    return par.to_dict()


# ==========================================================
# 📤 Exportação
# ==========================================================
@router.get("/postos/exportar", tags=["Exportação"])
def exportar(
    filtros: EstadoFiltro = Depends(filtros_da_query),
    painel: PainelPostos = Depends(get_painel),
):
    _exigir_dados(painel)
    resultado = painel.resultado(filtros)
    buffer = exportar_xlsx(list(resultado.postos), list(resultado.vizinhos), resultado.metricas, io.BytesIO())
    buffer.seek(0)
    return StreamingResponse(
        buffer,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": 'attachment; filename="dashboard-export.xlsx"'},
    )
