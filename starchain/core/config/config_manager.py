# starchain/core/config/config_manager.py
'''
class ConfigManager:
    Centraliza el acceso a la configuración (Registro y Red), cargando valores desde el entorno o JSON.

    Methods:
        __new__(cls): Implementa el patrón Singleton para asegurar una única instancia.
        _initialize(self): Inicializa las configuraciones especializadas con valores por defecto/entorno.
        load_from_json_dict(self, json_data: Dict[str, Any]) -> None: Actualiza las sub-configuraciones desde un diccionario JSON.
'''

from dotenv import load_dotenv
from typing import Dict, Any

# Cargar variables de entorno si existen
load_dotenv()

from starchain.core.config.registry_config import RegistryConfig

class ConfigManager:

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._registry = RegistryConfig()   # Reglas del handshake
        self._api: Dict[str, Any] = {}      # Overrides de host/puerto

    def load_from_json_dict(self, json_data: Dict[str, Any]) -> None:

        # Registro
        if "registry" in json_data:
            self._registry.update_from_dict(json_data["registry"])

        # API (Se aplica vía entorno en main.py)
        if "api" in json_data:
            self._api.update(json_data["api"])

    # --- ACCESORES ---

    @property
    def registry(self) -> RegistryConfig:
        return self._registry

    @property
    def api(self) -> Dict[str, Any]:
        return dict(self._api)

    # --- DELEGACIÓN (Atajos) ---

    @property
    def challenge_window_sec(self) -> int: return self._registry.challenge_window_sec
    @property
    def genesis_payload(self) -> Dict[str, Any]: return self._registry.genesis_payload
