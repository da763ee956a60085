# ============================================================
# 📦 src/postos_vizinhanca/cli/run_analise.py
# ============================================================

import argparse
import json
import sys
import time

from dotenv import load_dotenv
from loguru import logger

from postos_vizinhanca.application.painel_postos_use_case import PainelPostos
from postos_vizinhanca.config.settings import get_settings
from postos_vizinhanca.domain.exceptions import FetchError, ValidationError
from postos_vizinhanca.infrastructure.osrm_client import RoadDistanceService
from postos_vizinhanca.logs.logging_config import setup_logging
from postos_vizinhanca.reporting.export_xlsx import exportar_xlsx
from postos_vizinhanca.reporting.exporters.json_exporter import JSONExporter


# ============================================================
# 🔵 Função auxiliar para emitir JSON final
# ============================================================
def emit_final(obj):
    print(json.dumps(obj, ensure_ascii=False))
    sys.stdout.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Análise de proximidade entre postos (vizinho mais próximo, raio e métricas)"
    )
    origem = parser.add_mutually_exclusive_group(required=True)
    origem.add_argument("--arquivo", help="Planilha XLSX local (primeira aba)")
    origem.add_argument("--remoto", action="store_true", help="Baixa a planilha de DATASET_URL")
    parser.add_argument("--url", help="URL alternativa para --remoto")

    parser.add_argument("--uf", nargs="*", default=[])
    parser.add_argument("--lote", nargs="*", default=[])
    parser.add_argument("--porte", nargs="*", default=[])
    parser.add_argument("--subregiao", nargs="*", default=[])

    parser.add_argument("--centro", help="POSTO central para a busca por raio")
    parser.add_argument("--raio_min", type=float, default=0.0)
    parser.add_argument("--raio_max", type=float, default=50.0)

    parser.add_argument("--posto_a", help="Primeiro posto da comparação direta")
    parser.add_argument("--posto_b", help="Segundo posto da comparação direta")
    parser.add_argument("--rodoviario", action="store_true", help="Consulta OSRM para distâncias rodoviárias")

    parser.add_argument("--xlsx", help="Caminho do XLSX exportado")
    parser.add_argument("--json", help="Caminho do JSON exportado")
    return parser


# ============================================================
# 🚀 Main
# ============================================================
def main(argv=None):
    args = build_parser().parse_args(argv)

    load_dotenv()
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir, nome="run_analise")

    inicio = time.time()
    road_service = RoadDistanceService() if args.rodoviario else None
    painel = PainelPostos(road_service=road_service)

    try:
        if args.remoto:
            painel.carregar_remoto(args.url)
        else:
            painel.carregar_arquivo(args.arquivo)
    except ValidationError as e:
        emit_final({"status": "error", "tipo": "validacao", "erro": e.mensagem, "linha": e.linha})
        return 2
    except FetchError as e:
        emit_final({"status": "error", "tipo": "download", "erro": e.mensagem})
        return 3

    try:
        painel.atualizar_filtros(uf=args.uf, lote=args.lote, porte=args.porte, subregiao=args.subregiao)
        resultado = painel.resultado()
        vizinhos = resultado.vizinhos
        if road_service is not None:
            vizinhos = painel.enriquecer_rodoviario(vizinhos)

        saida = {
            "status": "done",
            "filtros": painel.filtros.to_dict(),
            "metricas": resultado.metricas.to_dict(),
            "vizinhos": [v.to_dict() for v in vizinhos],
        }

        if args.centro:
            no_raio = painel.vizinhos_no_raio(args.centro, args.raio_min, args.raio_max)
            if road_service is not None:
                no_raio = painel.enriquecer_rodoviario(no_raio)
            saida["raio"] = {
                "centro": args.centro,
                "raio_min": args.raio_min,
                "raio_max": args.raio_max,
                "postos": [v.to_dict() for v in no_raio],
            }

        if args.posto_a and args.posto_b:
            painel.definir_par(args.posto_a, args.posto_b)
            saida["par"] = painel.comparador.aguardar(timeout=settings.osrm_timeout + 1).to_dict()

        if args.xlsx:
            saida["arquivo_xlsx"] = exportar_xlsx(
                list(resultado.postos), list(vizinhos), resultado.metricas, args.xlsx
            )
        if args.json:
            saida["arquivo_json"] = JSONExporter.export(resultado, args.json)

        saida["duracao_segundos"] = round(time.time() - inicio, 2)
        emit_final(saida)
        return 0

    except Exception as e:
        logger.exception(f"💥 Erro inesperado: {e}")
        emit_final({"status": "error", "erro": str(e)})
        return 1

    finally:
        if road_service is not None:
            road_service.close()


if __name__ == "__main__":
    sys.exit(main())
