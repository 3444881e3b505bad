"""Data models for content records and analysis reports."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 200
MAIN_CONTENT_MAX_LENGTH = 500


def truncate(text: str | None, limit: int) -> str:
    """Cap *text* at *limit* characters; ``None`` becomes an empty string."""
    return (text or "")[:limit]


@dataclass
class ScrapedContent:
    """A flat content record, scraped or manually entered."""

    title: str = ""
    description: str = ""
    main_content: str = ""
    services: str = ""

    def truncated(self) -> dict[str, str]:
        """Return the capped fields that are sent to the model."""
        return {
            "title": truncate(self.title, TITLE_MAX_LENGTH),
            "description": truncate(self.description, DESCRIPTION_MAX_LENGTH),
            "mainContent": truncate(self.main_content, MAIN_CONTENT_MAX_LENGTH),
        }

    def is_empty(self) -> bool:
        return not any(
            s.strip() for s in (self.title, self.description, self.main_content, self.services)
        )


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Questionnaire answers folded into mainContent, in display order.
_FORM_SECTIONS: tuple[tuple[str, str], ...] = (
    ("business_model", "Business Model"),
    ("revenue_streams", "Revenue Streams"),
    ("target_market", "Target Market"),
    ("growth_strategy", "Growth Strategy"),
)


class ManualFormData(_CamelModel):
    """Manually entered business details.

    Accepts either the content-record keys directly or the questionnaire
    keys submitted by the analyzer form.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    description: str = ""
    main_content: str = ""
    services: str = ""

    business_name: str = ""
    business_description: str = ""
    business_model: str = ""
    revenue_streams: str = ""
    target_market: str = ""
    growth_strategy: str = ""

    def to_content(self) -> ScrapedContent:
        sections = [
            f"{label}: {getattr(self, name).strip()}"
            for name, label in _FORM_SECTIONS
            if getattr(self, name).strip()
        ]
        return ScrapedContent(
            title=self.title or self.business_name,
            description=self.description or self.business_description,
            main_content=self.main_content or " ".join(sections),
            services=self.services,
        )


class Scores(_CamelModel):
    market_fit: float = Field(ge=0, le=10)
    growth_potential: float = Field(ge=0, le=10)
    business_model: float = Field(ge=0, le=10)
    overall: float = Field(ge=0, le=10)

    @field_validator("market_fit", "growth_potential", "business_model", "overall")
    @classmethod
    def _round_one_decimal(cls, value: float) -> float:
        return round(value, 1)


class Analysis(_CamelModel):
    strengths: list[str] = []
    improvements: list[str] = []
    recommendations: list[str] = []


class AnalysisReport(_CamelModel):
    """Scored business report parsed from the model's reply."""

    scores: Scores
    analysis: Analysis
    market_position: str
