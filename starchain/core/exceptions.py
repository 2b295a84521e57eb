# starchain/core/exceptions.py
'''
Taxonomía de errores del Ledger.

    LedgerError: Base común para que la capa de interfaz capture todo lo del dominio.
    ChainCorrupted: La validación previa al append encontró inconsistencias (bloque rechazado).
    ValidationFailed: validate_chain() encontró inconsistencias (lista completa y ordenada).
    ChallengeExpired: La ventana de firma del mensaje de reto ya pasó.
    InvalidChallenge: El mensaje de reto no respeta el formato "<address>:<timestamp>:starRegistry".
    InvalidSignature: La firma no es válida o el verificador falló.
    DecodeError: El payload guardado en un bloque no se puede decodificar.
    HashComputationError: Falló el cálculo del digest (no esperado en la práctica).
    BlockAlreadySealed: Intento de re-sellar un bloque ya enlazado a la cadena.
    InvalidPayload: El payload no se puede codificar (ni JSON ni bytes).
'''

from typing import List, Optional


class LedgerError(Exception):
    pass


class ChainCorrupted(LedgerError):

    def __init__(self, errors: List[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__(f"Cadena corrupta, bloque rechazado: {'; '.join(self.errors)}")


class ValidationFailed(LedgerError):

    def __init__(self, errors: List[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__(f"Validación de cadena fallida ({len(self.errors)} errores): {'; '.join(self.errors)}")


class ChallengeExpired(LedgerError):

    def __init__(self, elapsed_sec: int, window_sec: int) -> None:
        self.elapsed_sec = elapsed_sec
        self.window_sec = window_sec
        super().__init__(f"Mensaje expirado: {elapsed_sec}s transcurridos (ventana {window_sec}s).")


class InvalidChallenge(LedgerError):
    pass


class InvalidSignature(LedgerError):
    pass


class DecodeError(LedgerError):

    def __init__(self, message: str, height: Optional[int] = None) -> None:
        self.height = height
        super().__init__(message)


class HashComputationError(LedgerError):
    pass


class BlockAlreadySealed(LedgerError):
    pass


class InvalidPayload(LedgerError):
    pass
