# starchain/interface/api/dependencies.py
import logging
from typing import Optional

from starchain.core.models.ledger import Ledger

logger = logging.getLogger(__name__)

class LedgerContainer:
    """
    Dueño explícito del Ledger durante la vida del proceso.
    El lifespan de la API lo inyecta; los endpoints lo reciben vía Depends.
    """
    _instance: Optional[Ledger] = None

    @classmethod
    def get_instance(cls) -> Ledger:
        if cls._instance is None:
            logger.critical("🚨 ERROR DE ARRANQUE: El Ledger no ha sido inicializado. Ejecute set_instance() primero.")
            raise RuntimeError("El Ledger no ha sido inicializado. Ejecute set_instance() primero.")
        return cls._instance

    @classmethod
    def set_instance(cls, ledger: Ledger) -> None:
        if cls._instance is not None:
            logger.debug("Ledger ya inyectado. Ignorando set_instance.")
            return

        cls._instance = ledger
        logger.info(f"✅ [API-DI] Ledger inyectado correctamente (altura {ledger.height}).")

    @classmethod
    def shutdown(cls) -> None:
        if cls._instance:
            logger.info(f"🛑 [API] Liberando Ledger (altura final {cls._instance.height}). La cadena no se persiste.")
            cls._instance = None
        else:
            logger.debug("El Ledger ya estaba liberado.")

def get_ledger_dependency() -> Ledger:
    return LedgerContainer.get_instance()
