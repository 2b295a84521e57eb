# starchain/core/interfaces/i_signature_verifier.py

from abc import ABC, abstractmethod

class ISignatureVerifier(ABC):
    """
    [Abstracción de Seguridad]
    Contrato de la capacidad externa de verificación de firmas.

    Permite desacoplar el protocolo de registro del algoritmo de curva elíptica
    concreto (en producción: mensajes firmados estilo Bitcoin).
    """

    @abstractmethod
    def verify(self, message: str, address: str, signature: str) -> bool:
        """
        Verifica que 'signature' firme 'message' con la clave dueña de 'address'.

        Returns:
            bool: True si la firma es válida.

        Raises:
            ValueError: Si la firma está mal formada. El Ledger trata cualquier
            excepción como firma inválida.
        """
        pass
