# ============================================================
# ⚙️ src/postos_vizinhanca/config/settings.py
# ============================================================

import os
from dataclasses import dataclass
from functools import lru_cache

DATASET_URL_PADRAO = (
    "https://raw.githubusercontent.com/Hrqtrch/BASE-MAPA-PPT/refs/heads/main/Pasta1.xlsx"
)


@dataclass(frozen=True)
class Settings:
    """
    Parâmetros operacionais lidos do ambiente (.env carregado nos entrypoints).
    """

    osrm_url: str = "https://router.project-osrm.org"
    osrm_timeout: float = 6.0
    osrm_max_workers: int = 8
    dataset_url: str = DATASET_URL_PADRAO
    fetch_timeout: float = 15.0
    vel_kmh: float = 60.0
    log_level: str = "INFO"
    log_dir: str = "logs"
    output_dir: str = "output/reports"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            osrm_url=os.getenv("OSRM_URL", cls.osrm_url).rstrip("/"),
            osrm_timeout=float(os.getenv("OSRM_TIMEOUT", cls.osrm_timeout)),
            osrm_max_workers=int(os.getenv("OSRM_MAX_WORKERS", cls.osrm_max_workers)),
            dataset_url=os.getenv("DATASET_URL", cls.dataset_url),
            fetch_timeout=float(os.getenv("FETCH_TIMEOUT", cls.fetch_timeout)),
            vel_kmh=float(os.getenv("VEL_KMH", cls.vel_kmh)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            log_dir=os.getenv("LOG_DIR", cls.log_dir),
            output_dir=os.getenv("OUTPUT_DIR", cls.output_dir),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
