# starchain/core/interfaces/hasher_protocols.py

from typing import Optional, Protocol

class BlockProtocol(Protocol):
    """
    Define los campos de un bloque que entran en el digest.
    Permite que el BlockHasher trabaje sin depender de la clase Block completa.
    """
    @property
    def body(self) -> str: ...
    @property
    def height(self) -> Optional[int]: ...
    @property
    def time(self) -> Optional[int]: ...
    @property
    def previous_block_hash(self) -> Optional[str]: ...
