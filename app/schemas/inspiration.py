"""여행 영감 콘텐츠 도구 스키마."""

from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.records import Provenance

ContentType = Literal["ARTICLE", "EMAIL", "SOCIAL_POST", "ITINERARY_PREVIEW"]
Theme = Literal["ADVENTURE", "LUXURY", "FAMILY", "ROMANTIC", "CULTURAL", "BEACH"]
Tone = Literal["INSPIRING", "INFORMATIVE", "EXCITING", "LUXURIOUS"]


class InspirationRequest(BaseModel):
    content_type: ContentType
    theme: Theme
    target_destination: str | None = Field(default=None)
    target_audience: str = Field(default="travelers")
    tone: Tone = Field(default="INSPIRING")
    word_count: int = Field(default=500, ge=50, description="목표 단어 수 (MAX_CONTENT_LENGTH로 상한 적용)")


class InspirationBody(BaseModel):
    title: str
    subtitle: str
    body: str
    call_to_action: str
    related_packages: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list, max_length=5)
    estimated_read_time: int


class SeoMetadata(BaseModel):
    meta_title: str
    meta_description: str = Field(..., max_length=160)
    keywords: list[str]


class InspirationResponse(BaseModel):
    content: InspirationBody
    seo_metadata: SeoMetadata
    provenance: Provenance


class GeneratedInspiration(BaseModel):
    """생성형 보강이 반환해야 하는 콘텐츠 스키마."""

    title: str = Field(..., min_length=1)
    subtitle: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1, description="마크다운 본문")
    call_to_action: str = Field(..., min_length=1)
