from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import settings

SuggestionCategory = Literal["Experience", "Skills", "Education", "Summary"]

SUGGESTION_CATEGORIES: tuple[str, ...] = ("Experience", "Skills", "Education", "Summary")


class KeywordCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    keyword: str = Field(min_length=1)
    job_description_count: int = Field(ge=0, alias="jobDescriptionCount")
    resume_count: int = Field(ge=0, alias="resumeCount")


class Suggestion(BaseModel):
    id: str
    category: SuggestionCategory
    text: str


class AnalyzeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(ge=0, le=100)
    message: str | None = None
    matched_keywords: list[str] = Field(default_factory=list, alias="matchedKeywords")
    missing_keywords: list[str] = Field(default_factory=list, alias="missingKeywords")
    keyword_frequency: list[KeywordCount] = Field(default_factory=list, alias="keywordFrequency")
    suggestions: list[Suggestion] = Field(default_factory=list)

    def to_wire(self) -> dict:
        payload = self.model_dump(mode="json", by_alias=True)
        if payload.get("message") is None:
            payload.pop("message", None)
        return payload


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_text: str = Field(default="", max_length=settings.max_input_chars, alias="resumeText")
    job_description: str = Field(default="", max_length=settings.max_input_chars, alias="jobDescription")
    raw_completion: str = Field(default="", max_length=settings.max_input_chars, alias="rawCompletion")
