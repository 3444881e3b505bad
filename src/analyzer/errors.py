"""Analyzer pipeline error taxonomy."""

from __future__ import annotations


class AnalyzerError(Exception):
    """Base class for every failure surfaced by the analysis pipeline."""

    stage = "processing"


class MissingInputError(AnalyzerError):
    """Neither a URL nor form data was supplied."""

    stage = "input"


class FetchError(AnalyzerError):
    """The website could not be fetched (non-2xx or transport failure)."""

    stage = "fetch"


class ContentError(AnalyzerError):
    """The page had no usable description or paragraph text."""

    stage = "extract"


class ModelInvocationError(AnalyzerError):
    stage = "model"


class ParseError(AnalyzerError):
    stage = "parse"


class ValidationError(AnalyzerError):
    """The model's JSON lacked the required report shape."""

    stage = "validate"
