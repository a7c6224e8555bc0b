"""여행 영감 콘텐츠 도구 (generate-travel-inspiration)."""

from __future__ import annotations

import math

from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.graph.content import ContentStrategy, TemplateHit, resolve_content
from app.schemas.inspiration import (
    GeneratedInspiration,
    InspirationBody,
    InspirationRequest,
    InspirationResponse,
    SeoMetadata,
)
from app.schemas.records import DestinationRecord, InspirationRecord, Provenance
from app.services.context import ToolContext
from app.services.enrichment import EnrichmentPrompt

logger = get_logger(__name__)

WORDS_PER_MINUTE = 200
MAX_IMAGES = 5
META_DESCRIPTION_LIMIT = 160

INSPIRATION_SYSTEM_PROMPT = (
    "You are an expert travel content creator who writes inspiring, engaging content "
    "that motivates people to travel."
)

_THEME_PHRASES = {
    "ADVENTURE": "thrilling adventures and wide-open landscapes",
    "LUXURY": "refined stays and unforgettable indulgence",
    "FAMILY": "experiences the whole family will love",
    "ROMANTIC": "romantic moments made for two",
    "CULTURAL": "rich history, art and living traditions",
    "BEACH": "sun-soaked shores and turquoise water",
}


def estimated_read_time(word_count: int) -> int:
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def _truncate(text: str, limit: int) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


class InspirationStrategy(ContentStrategy[InspirationResponse, GeneratedInspiration]):
    """영감 콘텐츠 해석 전략. 구조 키는 (콘텐츠 유형, 테마, 여행지)입니다."""

    kind = "inspiration"
    schema = GeneratedInspiration

    def __init__(
        self,
        context: ToolContext,
        request: InspirationRequest,
        destination: DestinationRecord | None,
    ) -> None:
        self._context = context
        self._request = request
        self._destination = destination
        self._word_count = min(request.word_count, context.settings.MAX_CONTENT_LENGTH)

    def _images(self, stored: list[str] | None = None) -> list[str]:
        images = list(stored or [])
        if self._destination is not None:
            images += self._destination.gallery_images
            if self._destination.hero_image_url:
                images.append(self._destination.hero_image_url)
        return list(dict.fromkeys(images))[:MAX_IMAGES]

    def _seo(self, title: str, subtitle: str) -> SeoMetadata:
        destination_keyword = self._destination.city.lower() if self._destination else "travel"
        return SeoMetadata(
            meta_title=title,
            meta_description=_truncate(subtitle or title, META_DESCRIPTION_LIMIT),
            keywords=[
                self._request.theme.lower(),
                destination_keyword,
                self._request.target_audience,
                "vacation",
                "travel guide",
            ],
        )

    def _response(
        self,
        *,
        title: str,
        subtitle: str,
        body: str,
        call_to_action: str,
        read_words: int,
        provenance: Provenance,
        stored_images: list[str] | None = None,
    ) -> InspirationResponse:
        return InspirationResponse(
            content=InspirationBody(
                title=title,
                subtitle=subtitle,
                body=body,
                call_to_action=call_to_action,
                images=self._images(stored_images),
                estimated_read_time=estimated_read_time(read_words),
            ),
            seo_metadata=self._seo(title, subtitle),
            provenance=provenance,
        )

    def lookup(self) -> TemplateHit[InspirationResponse] | None:
        repository = self._context.repository
        record: InspirationRecord | None = repository.find_inspiration(
            content_type=self._request.content_type,
            theme=self._request.theme,
            destination_id=self._destination.id if self._destination else None,
        )
        if record is None:
            return None
        artifact = self._response(
            title=record.title,
            subtitle=record.subtitle or "",
            body=record.content,
            call_to_action=record.call_to_action or self._default_call_to_action(),
            read_words=len(record.content.split()),
            provenance="TEMPLATE",
            stored_images=record.images,
        )
        return TemplateHit(artifact=artifact, on_reuse=lambda: repository.increment_inspiration_views(record.id))

    def build_prompt(self) -> EnrichmentPrompt:
        request = self._request
        subject = self._destination.city if self._destination else "travel destinations"
        lines = [
            f"Create {request.content_type} content about {subject}.",
            "",
            f"Theme: {request.theme}",
            f"Target Audience: {request.target_audience}",
            f"Tone: {request.tone}",
            f"Word Count: {self._word_count} words",
        ]
        if self._destination is not None:
            destination = self._destination
            lines.append(f"Known attractions: {', '.join(destination.famous_attractions)}")
            lines.append(f"Local cuisine: {', '.join(destination.local_cuisine_highlights)}")
            lines.append(f"Best time to visit: {destination.best_time_label()}")
        lines.extend(
            [
                "",
                "Create compelling travel content that:",
                "- Inspires readers to travel",
                "- Includes specific details and examples",
                "- Ends with a clear call-to-action",
                "- Uses markdown for the body",
            ]
        )
        return EnrichmentPrompt(system=INSPIRATION_SYSTEM_PROMPT, user="\n".join(lines))

    def merge(self, generated: GeneratedInspiration) -> InspirationResponse:
        return self._response(
            title=generated.title.strip(),
            subtitle=generated.subtitle.strip(),
            body=generated.body.strip(),
            call_to_action=generated.call_to_action.strip(),
            read_words=self._word_count,
            provenance="GENERATED",
        )

    def persist(self, generated: GeneratedInspiration, artifact: InspirationResponse) -> object:
        content = artifact.content
        return self._context.repository.save_inspiration(
            content_type=self._request.content_type,
            theme=self._request.theme,
            tone=self._request.tone,
            destination_id=self._destination.id if self._destination else None,
            title=content.title,
            subtitle=content.subtitle,
            content=content.body,
            call_to_action=content.call_to_action,
            images=content.images,
            seo_metadata=artifact.seo_metadata.model_dump(),
            target_audience=[self._request.target_audience],
            published_at=self._context.now(),
        )

    def _default_call_to_action(self) -> str:
        if self._destination is not None:
            return f"Start planning your {self._destination.city} escape today"
        return "Start planning your next getaway today"

    def fallback(self) -> InspirationResponse:
        theme = self._request.theme
        theme_label = theme.capitalize()
        phrase = _THEME_PHRASES.get(theme, "unforgettable experiences")
        destination = self._destination

        if destination is None:
            title = f"{theme_label} Travel: Your Next Great Escape"
            subtitle = f"Ideas for {self._request.target_audience} looking for {phrase}"
            body = "\n\n".join(
                [
                    f"Some trips are remembered for a lifetime. A {theme.lower()} getaway offers {phrase}.",
                    "Pick a destination that matches your pace, plan a few must-do experiences "
                    "and leave room for the unexpected.",
                    "Travel in the shoulder season for better prices and fewer crowds.",
                ]
            )
        else:
            title = f"Discover {destination.city}: {theme_label} Escapes"
            subtitle = _truncate(
                destination.short_description or f"{destination.city}, {destination.country} awaits with {phrase}",
                META_DESCRIPTION_LIMIT,
            )
            paragraphs = [
                destination.long_description
                or destination.short_description
                or f"{destination.city}, {destination.country} offers {phrase}."
            ]
            if destination.famous_attractions:
                paragraphs.append(f"Don't miss {', '.join(destination.famous_attractions[:4])}.")
            if destination.local_cuisine_highlights:
                paragraphs.append(
                    f"Taste the local favorites: {', '.join(destination.local_cuisine_highlights[:4])}."
                )
            paragraphs.append(f"Best time to visit: {destination.best_time_label()}.")
            body = "\n\n".join(paragraphs)

        return self._response(
            title=title,
            subtitle=subtitle,
            body=body,
            call_to_action=self._default_call_to_action(),
            read_words=self._word_count,
            provenance="FALLBACK",
        )


def generate_travel_inspiration(context: ToolContext, request: InspirationRequest) -> InspirationResponse:
    """영감 콘텐츠를 템플릿 → 생성 → 폴백 순으로 해석합니다."""
    destination = None
    if request.target_destination:
        destination = context.repository.find_destination(request.target_destination)
        if destination is None:
            raise NotFoundError(f'Destination "{request.target_destination}" not found')

    resolved = resolve_content(
        InspirationStrategy(context, request, destination),
        context.enricher,
        context.writer,
        persist_generated=context.settings.ENABLE_CONTENT_CACHING,
    )
    logger.info("영감 콘텐츠 해석 완료: %s/%s (%s)", request.content_type, request.theme, resolved.provenance)
    return resolved.artifact
