# starchain/core/services/challenge_codec.py
'''
Mensaje de reto del registro de estrellas.

    Formato exacto: "<address>:<timestamp>:starRegistry", tres campos separados por ':'.
    El parseo exige exactamente tres campos, así que una dirección que contenga ':'
    no puede registrar estrellas (submit lanza InvalidChallenge). Las direcciones
    P2PKH en Base58 nunca contienen ':'.
'''

import logging
from dataclasses import dataclass

from starchain.core.exceptions import InvalidChallenge

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Challenge:
    address: str
    timestamp: int
    tag: str

class ChallengeCodec:
    """
    Formato del mensaje de reto: "<address>:<timestamp>:starRegistry".
    """

    PROTOCOL_TAG = "starRegistry"
    SEPARATOR = ":"

    @staticmethod
    def build(address: str, timestamp: int) -> str:
        return f"{address}{ChallengeCodec.SEPARATOR}{timestamp}{ChallengeCodec.SEPARATOR}{ChallengeCodec.PROTOCOL_TAG}"

    @staticmethod
    def parse(message: str) -> Challenge:
        parts = message.split(ChallengeCodec.SEPARATOR)

        if len(parts) != 3:
            raise InvalidChallenge(f"Mensaje de reto mal formado: se esperaban 3 campos, llegaron {len(parts)}.")

        address, time_text, tag = parts

        try:
            timestamp = int(time_text)
        except ValueError:
            raise InvalidChallenge(f"Timestamp inválido en el mensaje de reto: '{time_text}'.")

        if tag != ChallengeCodec.PROTOCOL_TAG:
            raise InvalidChallenge(f"Etiqueta de protocolo desconocida: '{tag}'.")

        return Challenge(address=address, timestamp=timestamp, tag=tag)
