# starchain/interface/api/server.py

import sys
import os
import logging
from typing import List

# --- Configuración de Path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '../../..'))
if project_root not in sys.path: sys.path.insert(0, project_root)

# --- Framework Imports ---
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

# --- Project Imports ---
from starchain.interface.api import schemas
from starchain.interface.api.dependencies import LedgerContainer, get_ledger_dependency
from starchain.interface.api.config import settings
from starchain.core.config.config_manager import ConfigManager
from starchain.core.models.block import Block
from starchain.core.models.ledger import Ledger
from starchain.infra.crypto.message_verifier import BitcoinMessageVerifier
from starchain.core.exceptions import (
    ChainCorrupted, ChallengeExpired, DecodeError, InvalidChallenge,
    InvalidPayload, InvalidSignature, ValidationFailed
)

logger = logging.getLogger(__name__)

# ==============================================================================
# 🏗️ SERVICE LAYER
# ==============================================================================

class LedgerService:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    @staticmethod
    def _to_response(block: Block) -> schemas.BlockResponse:
        return schemas.BlockResponse(**block.to_dict())

    def get_status(self) -> schemas.ChainStatusResponse:
        return schemas.ChainStatusResponse(
            height=self.ledger.get_height(),
            length=len(self.ledger)
        )

    def get_chain(self) -> List[schemas.BlockResponse]:
        return [self._to_response(b) for b in self.ledger.get_all_blocks()]

    def get_block_by_height(self, height: int) -> schemas.BlockResponse:
        block = self.ledger.get_block_by_height(height)
        if block is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Bloque con altura {height} no encontrado.")
        return self._to_response(block)

    def get_block_by_hash(self, block_hash: str) -> schemas.BlockResponse:
        block = self.ledger.get_block_by_hash(block_hash)
        if block is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bloque no encontrado.")
        return self._to_response(block)

    def get_stars(self, address: str) -> List[schemas.StarResponse]:
        try:
            stars = self.ledger.get_stars_by_wallet(address)
        except DecodeError as e:
            logger.error(f"❌ Escaneo de estrellas abortado: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
        return [schemas.StarResponse(owner=s["owner"], star=s.get("star")) for s in stars]

    def request_validation(self, req: schemas.ValidationRequest) -> schemas.ValidationResponse:
        return schemas.ValidationResponse(message=self.ledger.request_challenge(req.address))

    def submit_star(self, req: schemas.SubmitStarRequest) -> schemas.BlockResponse:
        try:
            block = self.ledger.submit(req.address, req.message, req.signature, req.star.model_dump())
            return self._to_response(block)

        except (ChallengeExpired, InvalidChallenge, InvalidPayload) as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        except InvalidSignature as e:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
        except ChainCorrupted as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.errors)

    def validate_chain(self) -> schemas.ChainValidationResponse:
        try:
            self.ledger.validate_chain()
            return schemas.ChainValidationResponse(valid=True, errors=[])
        except ValidationFailed as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.errors)

# ==============================================================================
# 🚀 APP
# ==============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("⭐ [BOOT] Iniciando Star Notary Ledger...")
    ledger = Ledger(verifier=BitcoinMessageVerifier(), config=ConfigManager().registry)
    LedgerContainer.set_instance(ledger)
    try:
        yield
    finally:
        logger.info("🛑 Apagando Ledger...")
        LedgerContainer.shutdown()

app = FastAPI(title=settings.title, version=settings.version, debug=settings.debug_mode, lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_credentials=True, allow_methods=["*"], allow_headers=["*"])

def get_ledger_service(ledger: Ledger = Depends(get_ledger_dependency)) -> LedgerService:
    return LedgerService(ledger)

@app.get("/status", response_model=schemas.ChainStatusResponse, tags=["Sistema"])
def get_status(service: LedgerService = Depends(get_ledger_service)):
    return service.get_status()

@app.get("/chain", response_model=List[schemas.BlockResponse], tags=["Bloques"])
def get_chain(service: LedgerService = Depends(get_ledger_service)):
    return service.get_chain()

@app.get("/block/height/{height}", response_model=schemas.BlockResponse, tags=["Bloques"])
def get_block_by_height(height: int, service: LedgerService = Depends(get_ledger_service)):
    return service.get_block_by_height(height)

@app.get("/block/hash/{block_hash}", response_model=schemas.BlockResponse, tags=["Bloques"])
def get_block_by_hash(block_hash: str, service: LedgerService = Depends(get_ledger_service)):
    return service.get_block_by_hash(block_hash)

@app.get("/blocks/{address}", response_model=List[schemas.StarResponse], tags=["Estrellas"])
def get_stars_by_wallet(address: str, service: LedgerService = Depends(get_ledger_service)):
    return service.get_stars(address)

@app.post("/requestValidation", response_model=schemas.ValidationResponse, tags=["Estrellas"])
def request_validation(req: schemas.ValidationRequest, service: LedgerService = Depends(get_ledger_service)):
    return service.request_validation(req)

@app.post("/submitstar", response_model=schemas.BlockResponse, tags=["Estrellas"])
def submit_star(req: schemas.SubmitStarRequest, service: LedgerService = Depends(get_ledger_service)):
    return service.submit_star(req)

@app.get("/validate", response_model=schemas.ChainValidationResponse, tags=["Sistema"])
def validate_chain(service: LedgerService = Depends(get_ledger_service)):
    return service.validate_chain()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
