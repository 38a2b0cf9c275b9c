from fastapi import APIRouter, HTTPException, status

from codebreakers.core.exceptions import CipherError
from codebreakers.dependencies import RegistryDep, SettingsDep
from codebreakers.models.schemas import EncryptRequest, EncryptResponse, ErrorResponse
from codebreakers.services.output.formatter import format_output

router = APIRouter()


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or key"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext using a specified cipher type and key.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a specified cipher type.

    The plaintext is sanitized to the letters A-Z before enciphering.
    When no key is supplied the engine generates a random one and
    returns it in ``key_used``.
    """
    # Validate plaintext length
    if len(request.plaintext) > settings.max_text_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Plaintext exceeds maximum length of {settings.max_text_length}",
        )

    # Get the appropriate engine
    engine = registry.get_engine(request.cipher_type)

    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cipher type '{request.cipher_type.value}' is not supported",
        )

    try:
        # Generate key if not provided
        key = request.key
        if key is None:
            key = engine.generate_random_key()

        ciphertext = engine.encrypt(request.plaintext, key)

        return EncryptResponse(
            ciphertext=ciphertext,
            formatted=format_output(
                ciphertext,
                settings.output_group_size,
                settings.output_line_length,
            ),
            cipher_type=request.cipher_type,
            key_used=key,
        )

    except CipherError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
