# starchain/infra/crypto/message_verifier.py

import base64
import hashlib
import logging
import binascii
from typing import Any, List

# Importamos librería criptográfica (silenciando errores de tipado legacy)
from ecdsa import VerifyingKey, SECP256k1, util, BadSignatureError # type: ignore

from starchain.core.interfaces.i_signature_verifier import ISignatureVerifier
from starchain.infra.crypto.bitcoin_message import BitcoinMessage
from starchain.infra.identity.address_factory import AddressFactory

logger = logging.getLogger(__name__)

class BitcoinMessageVerifier(ISignatureVerifier):
    """
    Verifica firmas compactas (Base64, 65 bytes) de mensajes estilo Bitcoin.
    Recupera la clave pública de la firma y compara su dirección P2PKH con la reclamada.
    """

    def verify(self, message: str, address: str, signature: str) -> bool:
        # 1. Decodificar la firma (errores de formato se propagan como ValueError)
        try:
            raw: bytes = base64.b64decode(signature, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Firma no es Base64 válido: {e}") from e

        if len(raw) != 65:
            raise ValueError(f"Longitud de firma inválida: {len(raw)} bytes (se esperaban 65).")

        header = raw[0]
        if not BitcoinMessage.HEADER_MIN <= header <= BitcoinMessage.HEADER_MAX:
            raise ValueError(f"Cabecera de firma fuera de rango: {header}.")

        if header >= BitcoinMessage.HEADER_SEGWIT:
            logger.warning("Firma con cabecera SegWit: solo se soportan direcciones P2PKH.")
            return False

        if not AddressFactory.is_valid_address(address):
            logger.warning(f"Dirección no válida para verificación: {address[:12]}...")
            return False

        compressed = header >= BitcoinMessage.HEADER_COMPRESSED
        recid = (header - BitcoinMessage.HEADER_MIN) & 3
        if recid > 1:
            # r + n excede el campo en secp256k1 salvo probabilidad despreciable
            return False

        rs = raw[1:]
        digest = BitcoinMessage.digest(message)

        # 2. Recuperar la clave pública candidata
        try:
            candidates: List[Any] = VerifyingKey.from_public_key_recovery_with_digest( # type: ignore
                rs, digest, curve=SECP256k1, hashfunc=hashlib.sha256, sigdecode=util.sigdecode_string
            )
        except Exception as e:
            raise ValueError(f"No se pudo recuperar la clave pública de la firma: {e}") from e

        if recid >= len(candidates):
            return False

        vk = candidates[recid]

        # 3. Verificar Firma (ECDSA)
        try:
            vk.verify_digest(rs, digest, sigdecode=util.sigdecode_string) # type: ignore
        except BadSignatureError:
            return False

        # 4. Comparar la dirección derivada con la reclamada
        encoding = "compressed" if compressed else "uncompressed"
        recovered_address = AddressFactory.create_from_public_key(vk.to_string(encoding).hex()) # type: ignore
        return recovered_address == address
