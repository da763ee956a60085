# ============================================================
# 📦 src/postos_vizinhanca/logs/logging_config.py
# ============================================================

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

FORMATO = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(nivel: str = "INFO", log_dir: Optional[str] = None, nome: str = "postos_vizinhanca"):
    """
    Sink no stderr + arquivo rotativo (quando ``log_dir`` é informado).
    Chamado uma vez pelos entrypoints (CLI e API).
    """
    logger.remove()
    logger.add(sys.stderr, level=nivel, format=FORMATO)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(
            Path(log_dir) / f"{nome}.log",
            level=nivel,
            rotation="10 MB",
            retention="14 days",
            encoding="utf-8",
        )

    logger.debug(f"🪵 Logging configurado | nível={nivel} | dir={log_dir}")
    return logger
