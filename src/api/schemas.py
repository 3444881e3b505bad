"""Request/response Pydantic models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.analyzer.models import AnalysisReport, ManualFormData


class AnalyzeRequest(BaseModel):
    """Body of ``POST /api/analyze``: a URL, form data, or both."""

    model_config = ConfigDict(populate_by_name=True)

    url: str | None = None
    form_data: ManualFormData | None = Field(default=None, alias="formData")


class WebsiteAnalyzeRequest(BaseModel):
    url: str | None = None


class ManualAnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_data: ManualFormData | None = Field(default=None, alias="formData")


class AnalyzeResponse(BaseModel):
    success: Literal[True] = True
    analysis: AnalysisReport


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
