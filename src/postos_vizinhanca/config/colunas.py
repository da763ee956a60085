# ============================================================
# 📋 Colunas esperadas na planilha de postos
# ============================================================

COL_POSTO = "POSTO"
COL_ESTADO = "ESTADO"
COL_UF = "UF"
COL_PAIS = "PAIS"
COL_LOTE = "LOTE"
COL_PORTE = "PORTE"
COL_SUBREGIAO = "SUBREGIAO"
COL_CHAMADOS_HARDWARE = "CHAMADOS HARDWARE"
COL_QTDE_KIT = "QTDE. KIT"
COL_TOTAL_COLETAS = "TOTAL DE COLETAS"
COL_LATITUDE = "LATITUDE"
COL_LONGITUDE = "LONGITUDE"

# Obrigatórias com valor preenchido (SUBREGIAO só precisa existir)
CAMPOS_OBRIGATORIOS = [
    COL_POSTO,
    COL_ESTADO,
    COL_UF,
    COL_PAIS,
    COL_LOTE,
    COL_PORTE,
    COL_CHAMADOS_HARDWARE,
    COL_QTDE_KIT,
    COL_TOTAL_COLETAS,
    COL_LATITUDE,
    COL_LONGITUDE,
]

CAMPOS_TEXTO = {
    COL_POSTO: "posto",
    COL_ESTADO: "estado",
    COL_UF: "uf",
    COL_PAIS: "pais",
    COL_LOTE: "lote",
    COL_PORTE: "porte",
}

CAMPOS_CONTADORES = {
    COL_CHAMADOS_HARDWARE: "chamados_hardware",
    COL_QTDE_KIT: "qtde_kit",
    COL_TOTAL_COLETAS: "total_coletas",
}

# Dimensões usadas pelo filtro categórico
DIMENSOES_FILTRO = ("uf", "lote", "porte", "subregiao")
