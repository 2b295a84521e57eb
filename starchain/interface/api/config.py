# starchain/interface/api/config.py

import os
import logging
from dataclasses import dataclass

from starchain.core.config.config_manager import ConfigManager

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ApiConfig:
    host: str
    port: int
    title: str
    version: str
    debug_mode: bool
    challenge_window_sec: int

    @classmethod
    def load(cls) -> 'ApiConfig':

        # 1. Leemos del entorno (Infraestructura)
        host = os.getenv("STARCHAIN_API_HOST", "0.0.0.0")
        port = int(os.getenv("STARCHAIN_API_PORT", 8000))
        title = os.getenv("STARCHAIN_API_TITLE", "Star Notary Ledger API")
        version = "0.1.0"
        debug = os.getenv("STARCHAIN_DEBUG", "False").lower() == "true"

        # 2. Leemos del Núcleo (Dominio)
        window = ConfigManager().challenge_window_sec

        config = cls(
            host=host,
            port=port,
            title=title,
            version=version,
            debug_mode=debug,
            challenge_window_sec=window
        )

        logger.info("⚙️  Configuración de la API cargada:")
        logger.info(f"   URL: http://{config.host}:{config.port}")
        logger.info(f"   Título: {config.title} v{config.version}")
        logger.debug(f"   Debug: {config.debug_mode} | Ventana de reto: {config.challenge_window_sec}s")

        return config

# Instancia Singleton inmutable
settings = ApiConfig.load()
