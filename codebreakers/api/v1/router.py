from fastapi import APIRouter

from codebreakers.api.v1.endpoints import decrypt, encrypt, frequency

api_router = APIRouter()

api_router.include_router(
    encrypt.router,
    prefix="/encrypt",
    tags=["Encryption"],
)

api_router.include_router(
    decrypt.router,
    prefix="/decrypt",
    tags=["Decryption"],
)

api_router.include_router(
    frequency.router,
    prefix="/frequency",
    tags=["Analysis"],
)
