# starchain/infra/crypto/bitcoin_message.py

import struct
import hashlib

class BitcoinMessage:
    """
    Digest estándar de "Bitcoin Signed Message" (el que firman Electrum y Bitcoin Core).

    digest = SHA256(SHA256(MAGIC || varint(len(msg)) || msg))
    """

    MAGIC = b"\x18Bitcoin Signed Message:\n"

    # Cabeceras de la firma compacta (65 bytes: header || r || s)
    HEADER_MIN = 27
    HEADER_COMPRESSED = 31
    HEADER_SEGWIT = 35
    HEADER_MAX = 42

    @staticmethod
    def varint(n: int) -> bytes:
        if n < 0xfd:
            return struct.pack('<B', n)
        if n <= 0xffff:
            return b'\xfd' + struct.pack('<H', n)
        if n <= 0xffffffff:
            return b'\xfe' + struct.pack('<I', n)
        return b'\xff' + struct.pack('<Q', n)

    @staticmethod
    def digest(message: str) -> bytes:
        msg_bytes = message.encode('utf-8')
        payload = BitcoinMessage.MAGIC + BitcoinMessage.varint(len(msg_bytes)) + msg_bytes
        return hashlib.sha256(hashlib.sha256(payload).digest()).digest()
