# logger_config.py
import logging
import re
import sys
from pathlib import Path

from starchain.core.config.paths import Paths

_SESSION_FILE = re.compile(r"ledger_(\d+)\.log$")

def _next_session_file(log_dir: Path) -> Path:
    # ledger_0.log, ledger_1.log... el siguiente número libre
    numbers = [int(m.group(1)) for m in (_SESSION_FILE.match(p.name) for p in log_dir.iterdir()) if m]
    return log_dir / f"ledger_{max(numbers, default=-1) + 1}.log"

def setup_logging(level: int = logging.INFO) -> str:
    log_file = _next_session_file(Path(Paths.ensure_directories_exist()["logs"]))

    to_file = logging.FileHandler(log_file, encoding='utf-8')
    to_file.setLevel(level)
    to_file.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] [%(name)s]: %(message)s'))

    # Consola: solo ERROR o superior
    to_console = logging.StreamHandler(sys.stdout)
    to_console.setLevel(logging.ERROR)
    to_console.setFormatter(logging.Formatter('\n❌ ERROR EN: %(name)s | Línea: %(lineno)d\nDetalle: %(message)s\n'))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [to_file, to_console]

    print(f"📝 Log de sesión: {log_file}")
    return str(log_file)
