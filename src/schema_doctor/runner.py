"""Run a set of detectors over one schema snapshot.

Usage:
    import sys
    from schema_doctor.runner import run_detectors

    ok = run_detectors(config, CachingSchemaInspector(provider), models, sys.stdout)
"""

import logging
from collections.abc import Iterable, Mapping
from typing import TextIO

from schema_doctor.config.models import DoctorConfig
from schema_doctor.detectors import DETECTORS, Detector
from schema_doctor.schema.inspector import CachingSchemaInspector
from schema_doctor.validations.base import ValidationMetadataProvider

logger = logging.getLogger(__name__)


def select_detectors(
    names: Iterable[str] | None = None,
    registry: Mapping[str, type[Detector]] | None = None,
) -> list[type[Detector]]:
    """Return the detectors named in *names*, in registry order.

    Raises:
        KeyError: If a name isn't a registered detector identifier.
    """
    if registry is None:
        registry = DETECTORS
    if names is None:
        return list(registry.values())

    names = set(names)
    unknown = names - set(registry)
    if unknown:
        raise KeyError(
            f"Unknown detectors: {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(registry)}"
        )
    return [detector for identifier, detector in registry.items() if identifier in names]


def run_detectors(
    config: DoctorConfig,
    schema_inspector: CachingSchemaInspector,
    models: ValidationMetadataProvider,
    io: TextIO,
    only: Iterable[str] | None = None,
    registry: Mapping[str, type[Detector]] | None = None,
) -> bool:
    """Run the selected detectors in order, sharing one schema inspector.

    Every detector runs even after an earlier one reported problems.

    Returns:
        True if every detector succeeded.
    """
    success = True
    for detector in select_detectors(only, registry):
        detector_success = detector.run(config, schema_inspector, models, io)
        if not detector_success:
            logger.info(f"{detector.identifier()} reported problems")
        success = success and detector_success
    return success
