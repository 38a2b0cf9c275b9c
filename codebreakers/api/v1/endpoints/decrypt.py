from fastapi import APIRouter, HTTPException, status

from codebreakers.core.exceptions import CipherError
from codebreakers.dependencies import RegistryDep, SettingsDep
from codebreakers.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse
from codebreakers.services.output.formatter import format_output

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or key"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Decrypt ciphertext",
    description="Decrypt ciphertext using a specified cipher type and a known key.",
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> DecryptResponse:
    """
    Decrypt ciphertext with a known key.

    Grouping spaces and line breaks in the ciphertext are ignored, so
    formatted output from /encrypt can be passed back unchanged.
    """
    # Validate ciphertext length
    if len(request.ciphertext) > settings.max_text_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Ciphertext exceeds maximum length of {settings.max_text_length}",
        )

    # Get the appropriate engine
    engine = registry.get_engine(request.cipher_type)

    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cipher type '{request.cipher_type.value}' is not supported",
        )

    try:
        result = engine.decrypt_with_key(request.ciphertext, request.key)

        return DecryptResponse(
            plaintext=result.plaintext,
            formatted=format_output(
                result.plaintext,
                settings.output_group_size,
                settings.output_line_length,
            ),
            key_used=result.key,
            explanation=result.explanation,
        )

    except CipherError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
