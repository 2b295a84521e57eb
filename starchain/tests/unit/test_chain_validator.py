# starchain/tests/unit/test_chain_validator.py
'''
Test Suite para ChainValidator:
    Verifica que la validación de cadena reporte TODAS las inconsistencias, en orden.
'''

import sys
import os
import unittest
from typing import List

# --- AJUSTE DE RUTA ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '../../..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from starchain.core.models.block import Block
from starchain.core.validators.chain_validator import ChainValidator
from starchain.core.exceptions import ValidationFailed

def build_chain(length: int) -> List[Block]:
    """Cadena enlazada a mano, sin pasar por el Ledger."""
    chain: List[Block] = []
    for i in range(length):
        block = Block({"data": "Genesis Block"} if i == 0 else {"owner": f"1Addr{i}", "star": {"story": f"s{i}"}})
        previous = chain[-1].hash if chain else None
        block.seal(height=i, timestamp=1_700_000_000 + i, previous_block_hash=previous)
        chain.append(block)
    return chain

class TestChainValidator(unittest.TestCase):

    def test_empty_chain_is_valid(self):
        self.assertEqual(ChainValidator.find_errors([]), [])
        self.assertTrue(ChainValidator.verify([]))

    def test_single_valid_genesis(self):
        self.assertEqual(ChainValidator.find_errors(build_chain(1)), [])

    def test_single_tampered_genesis(self):
        chain = build_chain(1)
        chain[0]._body = Block({"data": "Fake"}).body # type: ignore

        self.assertEqual(ChainValidator.find_errors(chain), ["Block 0 validation failed."])

    def test_tampered_genesis_in_longer_chain(self):
        # El enlace del bloque 1 apunta al hash ALMACENADO del génesis: solo falla el auto-hash
        chain = build_chain(3)
        chain[0]._body = Block({"data": "Fake"}).body # type: ignore

        self.assertEqual(ChainValidator.find_errors(chain), ["Block 0 validation failed."])

    def test_genesis_error_comes_first(self):
        chain = build_chain(3)
        chain[0]._body = Block({"data": "Fake"}).body # type: ignore
        chain[2]._body = Block("x").body # type: ignore

        self.assertEqual(
            ChainValidator.find_errors(chain),
            ["Block 0 validation failed.", "Block 2 validation failed."]
        )

    def test_valid_chain(self):
        print("\n>> Ejecutando: test_valid_chain...")
        chain = build_chain(5)

        self.assertEqual(ChainValidator.find_errors(chain), [])
        self.assertTrue(ChainValidator.verify(chain))
        print("[SUCCESS] Cadena de 5 bloques íntegra.")

    def test_tampered_payload_reports_only_that_block(self):
        print("\n>> Ejecutando: test_tampered_payload_reports_only_that_block...")
        chain = build_chain(3)
        chain[1]._body = Block({"owner": "1Mallory", "star": {"story": "robada"}}).body # type: ignore

        # El previousBlockHash del bloque 2 apunta al hash ALMACENADO del 1, que no cambió
        self.assertEqual(ChainValidator.find_errors(chain), ["Block 1 validation failed."])
        print("[SUCCESS] Un único error para el bloque manipulado.")

    def test_broken_link_with_valid_self_hash(self):
        chain = build_chain(2)
        forged = Block({"owner": "1Mallory", "star": {}})
        forged.seal(height=2, timestamp=1_700_000_010, previous_block_hash="00" * 32)
        chain.append(forged)

        self.assertEqual(ChainValidator.find_errors(chain), ["Block 2 previous hash invalid!"])

    def test_rewritten_link_breaks_both_checks(self):
        chain = build_chain(3)
        chain[2]._previous_block_hash = "00" * 32 # type: ignore

        self.assertEqual(
            ChainValidator.find_errors(chain),
            ["Block 2 validation failed.", "Block 2 previous hash invalid!"]
        )

    def test_all_errors_reported_in_order(self):
        chain = build_chain(4)
        chain[1]._body = Block("x").body # type: ignore
        chain[3]._previous_block_hash = "11" * 32 # type: ignore

        self.assertEqual(
            ChainValidator.find_errors(chain),
            ["Block 1 validation failed.", "Block 3 validation failed.", "Block 3 previous hash invalid!"]
        )

    def test_verify_raises_with_error_list(self):
        chain = build_chain(3)
        chain[2]._body = Block("x").body # type: ignore

        with self.assertRaises(ValidationFailed) as ctx:
            ChainValidator.verify(chain)

        self.assertEqual(ctx.exception.errors, ["Block 2 validation failed."])

if __name__ == "__main__":
    unittest.main()
