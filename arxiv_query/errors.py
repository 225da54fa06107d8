"""Exceptions and warnings raised by the arXiv query client."""


class ArxivError(Exception):
    """Base class for all arXiv client errors."""


class UrlConstructionError(ArxivError):
    """The request URL could not be built from the base endpoint and parameters."""


class TransportError(ArxivError):
    """Every attempt to reach the API failed at the transport level.

    Attributes:
        messages: One failure message per attempt, in attempt order
        attempts: Number of attempts made
    """

    def __init__(self, messages: list[str], attempts: int):
        self.messages = list(messages)
        self.attempts = attempts
        joined = "\n".join(self.messages)
        super().__init__(f"Request failed after {attempts} attempts:\n{joined}")


class ResponseReadError(ArxivError):
    """The connection succeeded but the response body could not be read."""


class DecodeError(ArxivError):
    """The response body did not match the expected feed schema."""


class AmbiguousPdfLinkWarning(UserWarning):
    """An entry carries more than one link titled "pdf"; the first one is used."""
