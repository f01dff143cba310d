"""Detector registry.

``DETECTORS`` maps each detector's identifier to its class, in the order
detectors run.

Usage:
    from schema_doctor.detectors import DETECTORS

    DETECTORS["incorrect_length_validation"].description
"""

from schema_doctor.detectors.base import (
    BASE_CONFIG,
    Detector,
    ImplementationMissingError,
    OptionSpec,
    UnknownOptionError,
    resolve_option,
)
from schema_doctor.detectors.incorrect_length_validation import (
    IncorrectLengthValidation,
    LengthProblem,
)

DETECTORS: dict[str, type[Detector]] = {
    detector.identifier(): detector
    for detector in (IncorrectLengthValidation,)
}

__all__ = [
    "DETECTORS",
    "BASE_CONFIG",
    "Detector",
    "OptionSpec",
    "resolve_option",
    "UnknownOptionError",
    "ImplementationMissingError",
    "IncorrectLengthValidation",
    "LengthProblem",
]
