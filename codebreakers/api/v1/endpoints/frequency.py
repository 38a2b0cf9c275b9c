from fastapi import APIRouter, HTTPException, status

from codebreakers.dependencies import SettingsDep
from codebreakers.models.schemas import (
    DigramCount,
    ErrorResponse,
    FrequencyRequest,
    FrequencyResponse,
    LetterCount,
)
from codebreakers.services.analysis.frequency import FrequencyAnalyzer

router = APIRouter()


@router.post(
    "",
    response_model=FrequencyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Count letter frequencies",
    description="Count single letters and, optionally, digrams in a text.",
)
async def count_frequencies(
    request: FrequencyRequest,
    settings: SettingsDep,
) -> FrequencyResponse:
    """
    Count letters in the sanitized text.

    Letters are returned most common first, ties in alphabetical order.
    """
    if len(request.text) > settings.max_text_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Text exceeds maximum length of {settings.max_text_length}",
        )

    analyzer = FrequencyAnalyzer()
    letters = analyzer.single_letter(request.text)

    digrams = []
    if request.include_digrams:
        digram_counts = analyzer.digram(request.text)
        digrams = [
            DigramCount(digram=left + right, count=count)
            for (left, right), count in sorted(
                digram_counts.items(), key=lambda x: (-x[1], x[0])
            )
        ]

    return FrequencyResponse(
        length=sum(letters.values()),
        letters=[
            LetterCount(letter=letter, count=count)
            for letter, count in sorted(letters.items(), key=lambda x: (-x[1], x[0]))
        ],
        digrams=digrams,
    )
