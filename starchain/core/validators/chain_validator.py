# starchain/core/validators/chain_validator.py

import logging
from typing import List, Sequence

from starchain.core.models.block import Block
from starchain.core.exceptions import ValidationFailed

logger = logging.getLogger(__name__)

class ChainValidator:
    """
    Validación completa de la cadena: auto-hash de cada bloque y enlace con el anterior.
    Reporta TODAS las inconsistencias en orden, no solo la primera.
    """

    @staticmethod
    def find_errors(chain: Sequence[Block]) -> List[str]:
        errors: List[str] = []

        if len(chain) == 0:
            return errors

        # El génesis siempre se auto-verifica, sea o no el único bloque
        if not chain[0].validate():
            errors.append("Block 0 validation failed.")

        for i in range(1, len(chain)):
            previous_block = chain[i - 1]
            current_block = chain[i]

            if not current_block.validate():
                errors.append(f"Block {i} validation failed.")

            if current_block.previous_block_hash != previous_block.hash:
                errors.append(f"Block {i} previous hash invalid!")

        return errors

    @staticmethod
    def verify(chain: Sequence[Block]) -> bool:
        errors = ChainValidator.find_errors(chain)

        if errors:
            logger.warning(f"Quiebre de integridad ({len(errors)} errores): {errors}")
            raise ValidationFailed(errors)

        logger.info(f"Integridad de cadena verificada ({len(chain)} bloques).")
        return True
