# starchain/interface/api/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional

class ImmutableModel(BaseModel):
    """
    Clase base que fuerza la inmutabilidad (frozen=True).
    Garantiza que el estado del objeto no sea modificado después de crearse.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra='ignore'
    )

# --- PROTOCOLO DE REGISTRO ---

class ValidationRequest(ImmutableModel):
    address: str = Field(..., min_length=1, description="Dirección Base58 de la billetera")

class ValidationResponse(ImmutableModel):
    message: str = Field(..., description="Mensaje a firmar con la billetera (válido 5 minutos)")

class StarData(ImmutableModel):
    model_config = ConfigDict(frozen=True, extra='allow')

    dec: str
    ra: str
    story: str

class SubmitStarRequest(ImmutableModel):
    address: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, description="Mensaje devuelto por /requestValidation")
    signature: str = Field(..., min_length=1, description="Firma Base64 del mensaje")
    star: StarData

# --- CONSULTAS DE BLOQUE Y ESTADO ---

class BlockResponse(ImmutableModel):
    hash: str
    height: int
    body: str
    time: int
    previous_block_hash: Optional[str] = Field(None, alias="previousBlockHash")

class StarResponse(ImmutableModel):
    owner: str
    star: Any

class ChainStatusResponse(ImmutableModel):
    height: int
    length: int

class ChainValidationResponse(ImmutableModel):
    valid: bool
    errors: List[str] = []
