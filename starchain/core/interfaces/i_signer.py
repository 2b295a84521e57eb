# starchain/core/interfaces/i_signer.py

from abc import ABC, abstractmethod

class ISigner(ABC):
    """
    [Abstracción de Seguridad]
    Contrato del lado cliente: firmar el mensaje de reto con la clave de la billetera.

    El Ledger nunca firma; solo verifica. Este contrato lo usan las herramientas
    de cliente (scripts/sign_challenge.py) y los tests.
    """

    @abstractmethod
    def sign_message(self, message: str) -> str:
        """
        Firma un mensaje de texto.

        Returns:
            str: Firma compacta en Base64 (65 bytes: header || r || s).
        """
        pass

    @abstractmethod
    def get_public_key(self) -> str:
        """
        Returns:
            str: Clave Pública comprimida en formato hexadecimal.
        """
        pass

    @abstractmethod
    def get_address(self) -> str:
        """
        Returns:
            str: Dirección P2PKH (Base58Check) que corresponde a la clave.
        """
        pass
