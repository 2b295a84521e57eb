# starchain/core/config/registry_config.py

import os
from typing import Dict, Any

class RegistryConfig:
    """
    Configuración del Protocolo de Registro de Estrellas.
    """
    # --- CONSTANTES ESTÁTICAS ---
    DEFAULT_CHALLENGE_WINDOW_SEC = 5 * 60
    DEFAULT_GENESIS_MESSAGE = "Genesis Block"

    def __init__(self):
        # Valores por defecto (Env Vars)
        self._challenge_window_sec = int(os.getenv(
            "STARCHAIN_CHALLENGE_WINDOW_SEC", RegistryConfig.DEFAULT_CHALLENGE_WINDOW_SEC
        ))
        self._genesis_message = os.getenv(
            "STARCHAIN_GENESIS_MESSAGE", RegistryConfig.DEFAULT_GENESIS_MESSAGE
        )

    # --- Getters ---
    @property
    def challenge_window_sec(self) -> int: return self._challenge_window_sec
    @property
    def genesis_message(self) -> str: return self._genesis_message

    @property
    def genesis_payload(self) -> Dict[str, Any]:
        return {"data": self._genesis_message}

    # --- Actualización desde JSON ---
    def update_from_dict(self, registry_data: Dict[str, Any]) -> None:
        if not registry_data:
            return

        if "challenge_window_sec" in registry_data:
            window = int(registry_data["challenge_window_sec"])
            if window <= 0:
                raise ValueError("challenge_window_sec debe ser positivo.")
            self._challenge_window_sec = window

        if "genesis_message" in registry_data:
            self._genesis_message = str(registry_data["genesis_message"])
