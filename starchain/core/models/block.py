# starchain/core/models/block.py

import json
import logging
import binascii
from typing import Any, Dict, Optional

from starchain.core.services.block_hasher import BlockHasher
from starchain.core.exceptions import BlockAlreadySealed, DecodeError, HashComputationError, InvalidPayload

logger = logging.getLogger(__name__)

# Marca JSON para valores binarios: {"$bytes": "<hex>"}
BYTES_TAG = "$bytes"

def _encode_extra(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return {BYTES_TAG: bytes(value).hex()}
    raise TypeError(f"Tipo no serializable: {type(value).__name__}")

def _decode_extra(obj: Dict[str, Any]) -> Any:
    if len(obj) == 1 and isinstance(obj.get(BYTES_TAG), str):
        return bytes.fromhex(obj[BYTES_TAG])
    return obj

class Block:
    """
    Registro de la cadena. El payload se guarda como hex del JSON (UTF-8)
    para que cualquier contenido pase por el hash de forma determinista.
    Los bytes viajan envueltos como {"$bytes": "<hex>"} y vuelven como bytes.
    Un payload que no se puede codificar lanza InvalidPayload.

    height, time, previous_block_hash y hash quedan vacíos hasta que el
    Ledger sella el bloque al agregarlo.
    """

    def __init__(self, payload: Any) -> None:
        try:
            encoded = json.dumps(payload, default=_encode_extra)
        except (TypeError, ValueError) as e:
            # ValueError: referencias circulares
            raise InvalidPayload(f"Payload no serializable: {e}") from e

        self._body: str = encoded.encode('utf-8').hex()
        self._height: Optional[int] = None
        self._time: Optional[int] = None
        self._previous_block_hash: Optional[str] = None
        self._hash: Optional[str] = None

    # --- Getters ---
    @property
    def body(self) -> str: return self._body
    @property
    def height(self) -> Optional[int]: return self._height
    @property
    def time(self) -> Optional[int]: return self._time
    @property
    def previous_block_hash(self) -> Optional[str]: return self._previous_block_hash
    @property
    def hash(self) -> Optional[str]: return self._hash

    @property
    def is_sealed(self) -> bool:
        return self._hash is not None

    def seal(self, height: int, timestamp: int, previous_block_hash: Optional[str]) -> str:
        """
        Fija los metadatos de enlace y calcula el hash. Solo lo invoca el Ledger.
        El enlace se asigna ANTES del hash para que el digest lo cubra.
        """
        if self.is_sealed:
            raise BlockAlreadySealed(f"El bloque #{self._height} ya está sellado.")

        self._height = height
        self._time = timestamp
        self._previous_block_hash = previous_block_hash

        try:
            self._hash = BlockHasher.calculate(self)
        except HashComputationError:
            # Sin hash el bloque vuelve a su estado sin sellar
            self._height = None
            self._time = None
            self._previous_block_hash = None
            raise

        return self._hash

    def decode_payload(self) -> Any:
        """Decodifica el body (hex -> UTF-8 -> JSON)."""
        try:
            raw = binascii.unhexlify(self._body)
            return json.loads(raw.decode('utf-8'), object_hook=_decode_extra)
        except (binascii.Error, ValueError, TypeError) as e:
            # json.JSONDecodeError y UnicodeDecodeError son subclases de ValueError
            logger.warning(f"Payload corrupto en Bloque #{self._height}: {e}")
            raise DecodeError(f"Payload del bloque #{self._height} no decodificable: {e}", height=self._height) from e

    def validate(self) -> bool:
        """Recalcula el hash sin tocar el almacenado y lo compara."""
        if self._hash is None:
            return False
        try:
            return BlockHasher.calculate(self) == self._hash
        except HashComputationError:
            return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self._hash,
            "height": self._height,
            "body": self._body,
            "time": self._time,
            "previousBlockHash": self._previous_block_hash,
        }

    def __repr__(self) -> str:
        short = self._hash[:12] if self._hash else "unsealed"
        return f"Block(height={self._height}, hash={short})"
