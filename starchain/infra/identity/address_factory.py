# starchain/infra/identity/address_factory.py
import hashlib
import binascii
import logging
import base58

logger = logging.getLogger(__name__)

class AddressFactory:
    """
    Direcciones P2PKH (Base58Check) a partir de claves públicas secp256k1.
    """

    MAINNET_PREFIX = b'\x00'

    @staticmethod
    def _hash160(data: bytes) -> bytes:
        # SHA256 seguido de RIPEMD160
        sha256_digest = hashlib.sha256(data).digest()
        ripemd160 = hashlib.new('ripemd160')
        ripemd160.update(sha256_digest)
        return ripemd160.digest()

    @staticmethod
    def _checksum(payload: bytes) -> bytes:
        # Doble SHA256, tomamos los primeros 4 bytes
        return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4]

    @staticmethod
    def create_from_public_key(public_key_hex: str) -> str:
        try:
            pub_key_bytes: bytes = binascii.unhexlify(public_key_hex)

            versioned_payload = AddressFactory.MAINNET_PREFIX + AddressFactory._hash160(pub_key_bytes)
            binary_address = versioned_payload + AddressFactory._checksum(versioned_payload)

            return base58.b58encode(binary_address).decode('utf-8')

        except Exception:
            logger.exception("Error crítico derivando dirección desde clave pública")
            raise ValueError("Clave pública corrupta o inválida.")

    @staticmethod
    def is_valid_address(address: str) -> bool:
        """Comprueba prefijo, longitud y checksum de una dirección P2PKH."""
        try:
            raw: bytes = base58.b58decode(address)
        except ValueError:
            return False

        if len(raw) != 25 or raw[:1] != AddressFactory.MAINNET_PREFIX:
            return False

        return AddressFactory._checksum(raw[:21]) == raw[21:]
