"""Exception hierarchy for the conversation pipeline."""


class CareerQuestError(Exception):
    """Base class for every error raised by career_quest."""


class ValidationError(CareerQuestError, ValueError):
    """User input was empty or otherwise unusable. Correctable by the user."""


class GenerationError(CareerQuestError):
    """The content API could not produce a usable response for this turn."""


class GenerationNetworkError(GenerationError):
    """The content API could not be reached or answered with an error status."""


class GenerationParseError(GenerationError):
    """The content API answered, but the payload was not the expected JSON shape."""


class ImageEnrichmentError(CareerQuestError):
    """A single image request failed. Never escapes the enrichment fan-out."""
