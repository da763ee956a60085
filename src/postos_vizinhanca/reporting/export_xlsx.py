# ============================================================
# 📊 src/postos_vizinhanca/reporting/export_xlsx.py
# ============================================================

import io
from datetime import date
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from loguru import logger
from openpyxl.styles import Font, Alignment
from openpyxl.utils import get_column_letter

from postos_vizinhanca.config.colunas import (
    COL_POSTO, COL_ESTADO, COL_UF, COL_PAIS, COL_LOTE, COL_PORTE, COL_SUBREGIAO,
    COL_CHAMADOS_HARDWARE, COL_QTDE_KIT, COL_TOTAL_COLETAS, COL_LATITUDE, COL_LONGITUDE,
)
from postos_vizinhanca.config.settings import get_settings
from postos_vizinhanca.entities.posto_entity import Posto, VizinhoMaisProximo, ResumoMetricas

ABA_DADOS = "Dados Principais"
ABA_VIZINHOS = "Vizinhos Mais Próximos"
ABA_METRICAS = "Métricas Resumo"


def _df_postos(postos) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                COL_POSTO: p.posto,
                COL_ESTADO: p.estado,
                COL_UF: p.uf,
                COL_PAIS: p.pais,
                COL_LOTE: p.lote,
                COL_PORTE: p.porte,
                COL_SUBREGIAO: p.subregiao,
                COL_CHAMADOS_HARDWARE: p.chamados_hardware,
                COL_QTDE_KIT: p.qtde_kit,
                COL_TOTAL_COLETAS: p.total_coletas,
                COL_LATITUDE: p.latitude,
                COL_LONGITUDE: p.longitude,
            }
            for p in postos
        ],
        columns=[
            COL_POSTO, COL_ESTADO, COL_UF, COL_PAIS, COL_LOTE, COL_PORTE, COL_SUBREGIAO,
            COL_CHAMADOS_HARDWARE, COL_QTDE_KIT, COL_TOTAL_COLETAS, COL_LATITUDE, COL_LONGITUDE,
        ],
    )


def _df_vizinhos(vizinhos) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Posto": v.posto,
                "Mais Próximo": v.mais_proximo,
                "Distância (km)": round(v.distancia_km, 2),
                "Lote": v.lote,
                "Porte": v.porte,
                "Tempo Haversine (min)": v.tempo_haversine_min or 0,
                "Tempo OSRM (min)": v.tempo_rodoviario_min or 0,
            }
            for v in vizinhos
        ],
        columns=[
            "Posto", "Mais Próximo", "Distância (km)", "Lote", "Porte",
            "Tempo Haversine (min)", "Tempo OSRM (min)",
        ],
    )


def _df_metricas(metricas: ResumoMetricas) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Métrica": "Total de Postos", "Valor": metricas.total_postos},
            {"Métrica": "Total de Coletas", "Valor": metricas.total_coletas},
            {"Métrica": "Chamados Hardware", "Valor": metricas.total_chamados},
            {"Métrica": "Distância Média Vizinhos (km)", "Valor": round(metricas.distancia_media_km, 2)},
        ]
    )


def exportar_xlsx(
    postos: list[Posto],
    vizinhos: list[VizinhoMaisProximo],
    metricas: ResumoMetricas,
    destino: Optional[Union[str, Path, io.BytesIO]] = None,
    output_dir: Optional[str] = None,
):
    """
    Gera o workbook com três abas (dados, vizinhos, métricas).
    Sem destino, grava em ``output_dir/dashboard-export-AAAA-MM-DD.xlsx``
    (padrão: OUTPUT_DIR das configurações).
    Retorna o caminho gravado (ou o próprio buffer).
    """
    if destino is None:
        pasta = Path(output_dir or get_settings().output_dir)
        pasta.mkdir(parents=True, exist_ok=True)
        destino = pasta / f"dashboard-export-{date.today().isoformat()}.xlsx"
    elif isinstance(destino, (str, Path)):
        Path(destino).parent.mkdir(parents=True, exist_ok=True)

    abas = {
        ABA_DADOS: _df_postos(postos),
        ABA_VIZINHOS: _df_vizinhos(vizinhos),
        ABA_METRICAS: _df_metricas(metricas),
    }

    with pd.ExcelWriter(destino, engine="openpyxl") as writer:
        for nome, df in abas.items():
            df.to_excel(writer, sheet_name=nome, index=False)
            ws = writer.book[nome]

            # 🔒 Freeze header
            ws.freeze_panes = "A2"

            header_font = Font(bold=True)
            header_align = Alignment(horizontal="center", vertical="center")
            for cell in ws[1]:
                cell.font = header_font
                cell.alignment = header_align

            for col_idx, coluna in enumerate(df.columns, start=1):
                ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(str(coluna)) + 4)

    if isinstance(destino, (str, Path)):
        logger.success(f"✅ XLSX gerado: {destino}")
        return str(destino)
    return destino
