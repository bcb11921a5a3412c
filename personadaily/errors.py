"""Exception hierarchy for Persona Daily."""

from typing import Optional


class PersonaError(Exception):
    """Base class for all Persona Daily errors."""


class InputValidationError(PersonaError):
    """Required user input is missing or blank."""


class EstimatorError(PersonaError):
    """The AI gain estimate could not be obtained."""


class RequestFailedError(EstimatorError):
    """The AI endpoint rejected the request or retries ran out."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseValidationError(EstimatorError):
    """The AI response did not contain a usable gains object."""


class ImportFormatError(PersonaError):
    """An import file is not a valid Persona Daily export."""


class ExportError(PersonaError):
    """Writing the export file failed."""


class ExportPermissionError(ExportError):
    """Writing the export file was denied by the filesystem."""
