import os
import sys
import json
import argparse
import logging
from typing import Any, Dict, Optional

# Importamos uvicorn para servir la API del Ledger
import uvicorn

# =========================================================
# ⚡ CONFIGURACIÓN INICIAL DEL SISTEMA
# =========================================================

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

import logger_config
from starchain.core.config.config_manager import ConfigManager

logger = logging.getLogger()

# =========================================================
# 🛠️ FUNCIONES DE UTILIDAD
# =========================================================

def load_config(config_name: str) -> Dict[str, Any]:
    """Carga el archivo JSON de configuración (ruta directa o dentro de config/)."""
    config_path = config_name
    if not os.path.exists(config_path):
        config_path = os.path.join(ROOT_DIR, 'config', config_name)

    if not os.path.exists(config_path):
        logger.critical(f"❌ No existe el archivo de configuración: {config_name}")
        sys.exit(1)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.critical(f"❌ JSON Corrupto en {config_name}: {e}")
        sys.exit(1)

def inject_environment(config: Dict[str, Any], host: Optional[str], port: Optional[int]) -> Dict[str, Any]:
    """Aplica el JSON al ConfigManager y publica host/puerto para la API."""
    manager = ConfigManager()
    manager.load_from_json_dict(config)

    api = manager.api
    final_host = host or api.get("host") or os.getenv("STARCHAIN_API_HOST", "0.0.0.0")
    final_port = port or api.get("port") or int(os.getenv("STARCHAIN_API_PORT", 8000))

    os.environ["STARCHAIN_API_HOST"] = str(final_host)
    os.environ["STARCHAIN_API_PORT"] = str(final_port)

    logger.info(f"🔧 Ventana de reto: {manager.challenge_window_sec}s | API: {final_host}:{final_port}")
    return {"host": str(final_host), "port": int(final_port)}

# =========================================================
# 🚀 ENTRY POINT PRINCIPAL
# =========================================================

def main():
    parser = argparse.ArgumentParser(description="Lanzador Star Notary Ledger")

    parser.add_argument("--config", help="Archivo JSON de configuración (opcional)")
    parser.add_argument("--host", type=str, help="Forzar host de la API")
    parser.add_argument("--port", type=int, help="Forzar puerto de la API")
    parser.add_argument("--debug", action="store_true", help="Logs en nivel DEBUG")

    args = parser.parse_args()

    logger_config.setup_logging(logging.DEBUG if args.debug else logging.INFO)

    config_data = load_config(args.config) if args.config else {}
    endpoint = inject_environment(config_data, args.host, args.port)

    print("\n" + "="*60)
    print("⭐ INICIANDO STAR NOTARY LEDGER (En memoria, sin persistencia)")
    print(f"🌐 API Disponible en: http://{endpoint['host']}:{endpoint['port']}")
    print("="*60 + "\n")

    uvicorn.run(
        "starchain.interface.api.server:app",
        host=endpoint["host"],
        port=endpoint["port"],
        log_level="debug" if args.debug else "info"
    )

if __name__ == "__main__":
    main()
