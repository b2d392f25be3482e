from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DetectionMethod = Literal["lingua", "langdetect"]
DetectionMethods = Annotated[List[DetectionMethod], Field(min_length=1)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IsEnglishRequest(_CamelModel):
    text: str = Field(description="The text to be analyzed.")
    detection_methods: Optional[DetectionMethods] = Field(
        default=None,
        alias="detectionMethods",
        description="Engines to try in order; the first determined answer wins. Defaults to the configured engines.",
    )
    default_on_undetermined: bool = Field(
        default=False,
        alias="defaultOnUndetermined",
        description="Value returned when the language of the text cannot be determined.",
    )


class IsEnglishBatchRequest(_CamelModel):
    texts: List[str] = Field(description="The texts to be analyzed.")
    detection_methods: Optional[DetectionMethods] = Field(
        default=None,
        alias="detectionMethods",
        description="Engines to try in order; the first determined answer wins. Defaults to the configured engines.",
    )
    default_on_undetermined: bool = Field(
        default=False,
        alias="defaultOnUndetermined",
        description="Value returned when the language of a text cannot be determined.",
    )


class IsEnglishResponse(_CamelModel):
    is_english: bool = Field(alias="isEnglish", description="Whether the text is English.")


class IsEnglishBatchItem(_CamelModel):
    text: str = Field(description="The original text that was analyzed.")
    is_english: bool = Field(alias="isEnglish", description="Whether the text is English.")


class ErrorResponse(BaseModel):
    error: str
