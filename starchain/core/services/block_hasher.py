# starchain/core/services/block_hasher.py

import json
import hashlib
import logging

from starchain.core.interfaces.hasher_protocols import BlockProtocol
from starchain.core.exceptions import HashComputationError

logger = logging.getLogger(__name__)

class BlockHasher:
    """
    Calcula el SHA-256 de un bloque sobre todos sus campos EXCEPTO el propio hash.
    El enlace (previousBlockHash) se incluye: el hash compromete el estado final del bloque.
    """

    @staticmethod
    def serialize(block: BlockProtocol) -> bytes:
        # JSON canónico: claves ordenadas y sin espacios para que el digest sea reproducible
        payload = {
            "body": block.body,
            "height": block.height,
            "time": block.time,
            "previousBlockHash": block.previous_block_hash,
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")

    @staticmethod
    def calculate(block: BlockProtocol) -> str:
        try:
            return hashlib.sha256(BlockHasher.serialize(block)).hexdigest()
        except Exception as e:
            height = getattr(block, 'height', 'Unknown')
            logger.exception(f"Error crítico de serialización en Bloque #{height}")
            raise HashComputationError(f"No se pudo calcular el hash del bloque #{height}") from e
