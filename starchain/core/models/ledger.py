# starchain/core/models/ledger.py

import time
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from starchain.core.models.block import Block
from starchain.core.validators.chain_validator import ChainValidator
from starchain.core.services.challenge_codec import ChallengeCodec
from starchain.core.interfaces.i_signature_verifier import ISignatureVerifier
from starchain.core.config.registry_config import RegistryConfig
from starchain.core.exceptions import (
    ChainCorrupted, ChallengeExpired, InvalidChallenge, InvalidSignature
)

logger = logging.getLogger(__name__)

class Ledger:
    """
    Cadena en memoria, de un solo escritor.

    Todas las mutaciones (initialize, append_block, submit) pasan por un único
    candado: validar-y-agregar es una sola sección crítica. Las lecturas usan el
    mismo candado y devuelven copias, nunca la lista interna.
    """

    def __init__(
        self,
        verifier: ISignatureVerifier,
        config: Optional[RegistryConfig] = None,
        clock: Callable[[], float] = time.time
    ) -> None:
        self._verifier = verifier
        self._config = config if config is not None else RegistryConfig()
        self._clock = clock
        self._chain: List[Block] = []
        self._lock = threading.RLock()

        self.initialize()
        logger.info(f"🚀 Ledger iniciado. Altura actual: {self.height}")

    # --- Getters ---
    @property
    def height(self) -> int:
        with self._lock:
            return len(self._chain) - 1

    @property
    def tip(self) -> Optional[Block]:
        with self._lock:
            return self._chain[-1] if self._chain else None

    def _now(self) -> int:
        # Segundos enteros, igual que el timestamp del mensaje de reto
        return int(self._clock())

    def initialize(self) -> None:
        with self._lock:
            if self.height == -1:
                genesis = Block(self._config.genesis_payload)
                self.append_block(genesis)
                logger.info(f"🌌 Bloque Génesis creado: {genesis.hash}")

    def get_height(self) -> int:
        return self.height

    def append_block(self, block: Block) -> Block:
        """
        Agrega un bloque al final de la cadena.
        Antes de tocar nada se valida la cadena existente; si está corrupta el bloque se rechaza.
        """
        with self._lock:
            errors = ChainValidator.find_errors(self._chain)
            if errors:
                logger.error(f"❌ Cadena corrupta, bloque rechazado: {errors}")
                raise ChainCorrupted(errors)

            previous_hash = self._chain[-1].hash if self._chain else None
            block.seal(
                height=len(self._chain),
                timestamp=self._now(),
                previous_block_hash=previous_hash
            )

            self._chain.append(block)
            logger.info(f"✅ Bloque #{block.height} agregado ({block.hash}).")
            return block

    # --- Consultas ---

    def get_all_blocks(self) -> List[Block]:
        with self._lock:
            return self._chain[:]

    def get_block_by_hash(self, block_hash: str) -> Optional[Block]:
        # Los hashes son únicos por construcción: devolvemos la primera coincidencia
        with self._lock:
            for block in self._chain:
                if block.hash == block_hash:
                    return block
        return None

    def get_block_by_height(self, height: int) -> Optional[Block]:
        with self._lock:
            for block in self._chain:
                if block.height == height:
                    return block
        return None

    def get_stars_by_wallet(self, address: str) -> List[Dict[str, Any]]:
        """
        Devuelve los payloads decodificados cuyo 'owner' es la dirección dada.
        Un solo bloque corrupto aborta la búsqueda completa (DecodeError).
        """
        stars: List[Dict[str, Any]] = []
        for block in self.get_all_blocks():
            decoded = block.decode_payload()
            if isinstance(decoded, dict) and decoded.get("owner") == address:
                stars.append(decoded)
        return stars

    def validate_chain(self) -> bool:
        with self._lock:
            return ChainValidator.verify(self._chain)

    # --- Protocolo de Registro ---

    def request_challenge(self, address: str) -> str:
        message = ChallengeCodec.build(address, self._now())
        logger.info(f"📨 Mensaje de reto emitido para {address[:12]}...")
        return message

    def submit(self, address: str, message: str, signature: str, star: Any) -> Block:
        """
        Registra una estrella tras verificar el reto firmado.
        Cada paso corta el flujo al fallar: la cadena solo cambia si todo es válido.
        El bloque se arma primero: una estrella no serializable (InvalidPayload)
        se rechaza sin llegar al verificador.
        """
        block = Block({"owner": address, "star": star})

        challenge = ChallengeCodec.parse(message)

        if challenge.address != address:
            logger.warning(f"🚫 Reto emitido para {challenge.address[:12]}... presentado por {address[:12]}...")
            raise InvalidChallenge("La dirección del mensaje no coincide con la dirección enviada.")

        window = self._config.challenge_window_sec
        elapsed = self._now() - challenge.timestamp
        if elapsed >= window:
            logger.warning(f"⏱️ Reto expirado para {address[:12]}... ({elapsed}s)")
            raise ChallengeExpired(elapsed, window)

        try:
            is_valid = self._verifier.verify(message, address, signature)
        except Exception as e:
            logger.warning(f"🚫 Error del verificador de firmas: {e}")
            raise InvalidSignature(f"Firma mal formada: {e}") from e

        if not is_valid:
            logger.warning(f"🚫 Firma inválida para {address[:12]}...")
            raise InvalidSignature("Failed message validation.")

        return self.append_block(block)

    def __len__(self) -> int:
        with self._lock:
            return len(self._chain)
