# ============================================================
# 📦 src/postos_vizinhanca/reporting/exporters/json_exporter.py
# ============================================================

import json
from pathlib import Path
from loguru import logger


class JSONExporter:
    """Grava snapshots (dict ou objetos com ``to_dict``) em JSON legível."""

    @staticmethod
    def export(data, output_path: str):
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        if not data:
            logger.warning("⚠️ Nenhum dado para exportar.")
            return None

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        logger.success(f"✅ Snapshot JSON salvo em {output_path} ({len(data)} chave(s))")
        return output_path
