# starchain/infra/crypto/message_signer.py
import base64
import hashlib
import logging
import binascii
from typing import Any

from ecdsa import SigningKey, VerifyingKey, SECP256k1, util # type: ignore

# Importación del contrato
from starchain.core.interfaces.i_signer import ISigner
from starchain.infra.crypto.bitcoin_message import BitcoinMessage
from starchain.infra.identity.address_factory import AddressFactory

logger = logging.getLogger(__name__)

class MessageSigner(ISigner):

    def __init__(self, private_key_hex: str) -> None:
        self._sk: Any = None
        try:
            priv_key_bytes = binascii.unhexlify(private_key_hex)
            self._sk = SigningKey.from_string(priv_key_bytes, curve=SECP256k1) # type: ignore

            logger.info("Firmante de mensajes inicializado.")
        except Exception:
            logger.exception("Fallo al cargar la clave privada en MessageSigner")
            raise ValueError("Formato de clave privada inválido.")

    @classmethod
    def generate(cls) -> 'MessageSigner':
        """Crea un firmante con una clave privada nueva (aleatoria)."""
        sk = SigningKey.generate(curve=SECP256k1) # type: ignore
        return cls(sk.to_string().hex())

    @property
    def private_key_hex(self) -> str:
        return self._sk.to_string().hex()

    def sign_message(self, message: str) -> str:
        try:
            digest = BitcoinMessage.digest(message)

            # Firma determinista (RFC 6979) con s canónico (low-s)
            rs: bytes = self._sk.sign_digest_deterministic(
                digest,
                hashfunc=hashlib.sha256,
                sigencode=util.sigencode_string_canonize # type: ignore
            )

            # Buscamos el recid que recupera nuestra propia clave
            own_key: bytes = self._sk.verifying_key.to_string("compressed")
            candidates = VerifyingKey.from_public_key_recovery_with_digest( # type: ignore
                rs, digest, curve=SECP256k1, hashfunc=hashlib.sha256, sigdecode=util.sigdecode_string
            )
            for recid, candidate in enumerate(candidates):
                if candidate.to_string("compressed") == own_key:
                    header = BitcoinMessage.HEADER_COMPRESSED + recid
                    signature = base64.b64encode(bytes([header]) + rs).decode('ascii')
                    logger.info(f"Mensaje firmado: {message[:24]}...")
                    return signature

            raise ValueError("Ningún recid recupera la clave del firmante.")

        except Exception:
            logger.exception("Error criptográfico durante el proceso de firma")
            raise ValueError("Error al firmar con ecdsa.")

    def get_public_key(self) -> str:
        try:
            vk = self._sk.verifying_key
            pub_key_bytes: bytes = vk.to_string(encoding="compressed") # type: ignore

            return binascii.hexlify(pub_key_bytes).decode('utf-8')
        except Exception:
            logger.exception("Error exportando clave pública")
            raise ValueError("No se pudo obtener la identidad pública.")

    def get_address(self) -> str:
        return AddressFactory.create_from_public_key(self.get_public_key())
