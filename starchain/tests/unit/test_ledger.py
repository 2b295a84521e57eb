# starchain/tests/unit/test_ledger.py
'''
Test Suite para el Ledger:
    Génesis, enlace de bloques, consultas, escaneo por billetera y detección de manipulación.
'''

import sys
import os
import threading
import unittest

# --- AJUSTE DE RUTA ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '../../..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from starchain.core.models.block import Block
from starchain.core.models.ledger import Ledger
from starchain.core.services.block_hasher import BlockHasher
from starchain.core.exceptions import (
    BlockAlreadySealed, ChainCorrupted, DecodeError, ValidationFailed
)
from starchain.tests.mocks.mock_verifier import FakeClock, MockVerifier

ALICE = "1AliceAddressXXXXXXXXXXXXXXXXXXXX"
BOB = "1BobAddressXXXXXXXXXXXXXXXXXXXXXX"
CAROL = "1CarolAddressXXXXXXXXXXXXXXXXXXXX"

class TestLedger(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.ledger = Ledger(verifier=MockVerifier(True), clock=self.clock)

    def register(self, address: str, story: str) -> Block:
        message = self.ledger.request_challenge(address)
        return self.ledger.submit(address, message, "firma", {"dec": "1", "ra": "2", "story": story})

    # --- Génesis ---

    def test_genesis_invariant(self):
        print("\n>> Ejecutando: test_genesis_invariant...")
        blocks = self.ledger.get_all_blocks()

        self.assertEqual(self.ledger.get_height(), 0)
        self.assertEqual(len(blocks), 1)
        self.assertIsNone(blocks[0].previous_block_hash)
        self.assertEqual(blocks[0].height, 0)
        self.assertTrue(blocks[0].validate())
        self.assertEqual(blocks[0].decode_payload(), {"data": "Genesis Block"})
        print("[SUCCESS] Génesis creado automáticamente.")

    def test_initialize_is_idempotent(self):
        genesis_hash = self.ledger.tip.hash # type: ignore

        self.ledger.initialize()
        self.ledger.initialize()

        self.assertEqual(self.ledger.get_height(), 0)
        self.assertEqual(self.ledger.tip.hash, genesis_hash) # type: ignore

    # --- Append ---

    def test_append_links_blocks(self):
        print("\n>> Ejecutando: test_append_links_blocks...")
        for i in range(4):
            self.clock.advance(10)
            self.ledger.append_block(Block({"n": i}))

        blocks = self.ledger.get_all_blocks()
        self.assertEqual(self.ledger.get_height(), 4)
        for i in range(1, len(blocks)):
            self.assertEqual(blocks[i].previous_block_hash, blocks[i - 1].hash)
            self.assertEqual(blocks[i].height, i)
            self.assertEqual(blocks[i].hash, BlockHasher.calculate(blocks[i]))

        self.assertTrue(self.ledger.validate_chain())
        print("[SUCCESS] Enlace y alturas verificados.")

    def test_append_stamps_time_from_clock(self):
        self.clock.now = 1_800_000_000.75
        block = self.ledger.append_block(Block({"n": 1}))

        self.assertEqual(block.time, 1_800_000_000)

    def test_append_returns_the_block(self):
        block = Block({"n": 1})
        returned = self.ledger.append_block(block)

        self.assertIs(returned, block)
        self.assertTrue(block.is_sealed)

    def test_append_sealed_block_is_rejected(self):
        block = self.ledger.append_block(Block({"n": 1}))

        with self.assertRaises(BlockAlreadySealed):
            self.ledger.append_block(block)
        self.assertEqual(self.ledger.get_height(), 1)

    def test_get_all_blocks_is_snapshot(self):
        snapshot = self.ledger.get_all_blocks()
        snapshot.append(Block({"intruso": True}))
        snapshot.clear()

        self.assertEqual(len(self.ledger), 1)

    # --- Consultas ---

    def test_lookup_semantics(self):
        self.register(ALICE, "a")
        self.register(BOB, "b")

        self.assertIsNone(self.ledger.get_block_by_height(99))
        self.assertIsNone(self.ledger.get_block_by_height(-1))
        self.assertEqual(self.ledger.get_block_by_height(1).height, 1) # type: ignore

        target = self.ledger.get_all_blocks()[2]
        found = self.ledger.get_block_by_hash(target.hash) # type: ignore
        self.assertIs(found, target)
        self.assertIsNone(self.ledger.get_block_by_hash("00" * 32))

    def test_wallet_scan(self):
        print("\n>> Ejecutando: test_wallet_scan...")
        self.register(ALICE, "primera")
        self.register(BOB, "de bob")
        self.register(ALICE, "segunda")

        alice_stars = self.ledger.get_stars_by_wallet(ALICE)
        self.assertEqual(len(alice_stars), 2)
        self.assertEqual([s["star"]["story"] for s in alice_stars], ["primera", "segunda"])
        self.assertTrue(all(s["owner"] == ALICE for s in alice_stars))

        self.assertEqual(len(self.ledger.get_stars_by_wallet(BOB)), 1)
        self.assertEqual(self.ledger.get_stars_by_wallet(CAROL), [])
        print("[SUCCESS] Escaneo por billetera correcto.")

    def test_wallet_scan_aborts_on_corrupt_block(self):
        self.register(ALICE, "a")
        self.ledger.get_all_blocks()[1]._body = "no-es-hex" # type: ignore

        with self.assertRaises(DecodeError):
            self.ledger.get_stars_by_wallet(ALICE)

    # --- Manipulación ---

    def test_tamper_detection(self):
        print("\n>> Ejecutando: test_tamper_detection...")
        self.register(ALICE, "a")
        self.register(BOB, "b")
        blocks = self.ledger.get_all_blocks()
        blocks[1]._body = Block({"owner": CAROL, "star": {"story": "robada"}}).body # type: ignore

        with self.assertRaises(ValidationFailed) as ctx:
            self.ledger.validate_chain()

        self.assertEqual(ctx.exception.errors, ["Block 1 validation failed."])
        print("[SUCCESS] Manipulación detectada con un único error.")

    def test_append_refused_on_corrupted_chain(self):
        self.register(ALICE, "a")
        self.ledger.get_all_blocks()[1]._body = Block("x").body # type: ignore
        height_before = self.ledger.get_height()
        candidate = Block({"n": 1})

        with self.assertRaises(ChainCorrupted) as ctx:
            self.ledger.append_block(candidate)

        self.assertEqual(ctx.exception.errors, ["Block 1 validation failed."])
        self.assertEqual(self.ledger.get_height(), height_before)
        self.assertFalse(candidate.is_sealed)

    def test_tampered_genesis_detected_in_longer_chain(self):
        print("\n>> Ejecutando: test_tampered_genesis_detected_in_longer_chain...")
        self.register(ALICE, "a")
        blocks = self.ledger.get_all_blocks()
        blocks[0]._body = Block({"data": "Génesis falso"}).body # type: ignore

        self.assertFalse(blocks[0].validate())
        with self.assertRaises(ValidationFailed) as ctx:
            self.ledger.validate_chain()
        self.assertEqual(ctx.exception.errors, ["Block 0 validation failed."])

        with self.assertRaises(ChainCorrupted):
            self.ledger.append_block(Block({"n": 1}))
        self.assertEqual(self.ledger.get_height(), 1)
        print("[SUCCESS] Génesis manipulado detectado con la cadena ya extendida.")

    # --- Concurrencia ---

    def test_concurrent_appends_keep_chain_consistent(self):
        print("\n>> Ejecutando: test_concurrent_appends_keep_chain_consistent...")
        ledger = Ledger(verifier=MockVerifier(True))

        def worker(worker_id: int):
            for i in range(10):
                ledger.append_block(Block({"worker": worker_id, "n": i}))

        threads = [threading.Thread(target=worker, args=(w,)) for w in range(5)]
        for t in threads: t.start()
        for t in threads: t.join()

        self.assertEqual(ledger.get_height(), 50)
        self.assertEqual([b.height for b in ledger.get_all_blocks()], list(range(51)))
        self.assertTrue(ledger.validate_chain())
        print("[SUCCESS] 50 appends concurrentes sin pérdida de actualizaciones.")

if __name__ == "__main__":
    unittest.main()
