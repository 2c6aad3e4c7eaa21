# insights_plus/preprocessing/point_validators.py
"""
Validation pipeline for reconstructed data points using Chain of Responsibility pattern.

Each validator is independent, testable, and can be composed into a pipeline.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from insights_plus.models import DomainPoint


logger = logging.getLogger(__name__)


# ==================== BASE VALIDATOR ====================


class PointValidator(ABC):
    """
    Abstract base class for point validators.

    Each validator implements a single validation concern and can be
    chained together in a ValidationPipeline.
    """

    @abstractmethod
    def validate(self, points: List[DomainPoint]) -> List[DomainPoint]:
        """
        Validate and filter points.

        Args:
            points: Reconstructed observations

        Returns:
            Filtered (possibly reordered) list of points
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return validator name for logging"""
        pass


# ==================== INDIVIDUAL VALIDATORS ====================


class FiniteValueValidator(PointValidator):
    """
    Drops points without a real date or a finite value.

    An invalid point is never propagated to the forecast layer.
    """

    def get_name(self) -> str:
        return "FiniteValueValidator"

    def validate(self, points: List[DomainPoint]) -> List[DomainPoint]:
        valid = [p for p in points if p.is_valid()]
        removed = len(points) - len(valid)
        if removed > 0:
            logger.debug(f"{self.get_name()}: Removed {removed} invalid points")
        return valid


class ChronologicalOrderValidator(PointValidator):
    """Sorts points by date; points sharing a date keep their drawing order."""

    def get_name(self) -> str:
        return "ChronologicalOrderValidator"

    def validate(self, points: List[DomainPoint]) -> List[DomainPoint]:
        return sorted(points, key=lambda p: p.date)


class DayDecimationValidator(PointValidator):
    """
    Keeps at most one point per calendar day.

    The rendered line interpolates between daily samples, so sub-day
    points carry no information. The first point seen for a day wins;
    run after ChronologicalOrderValidator.
    """

    def get_name(self) -> str:
        return "DayDecimationValidator"

    def validate(self, points: List[DomainPoint]) -> List[DomainPoint]:
        sampled = []
        last_day = None
        for point in points:
            day = point.date.date()
            if day != last_day:
                sampled.append(point)
                last_day = day

        removed = len(points) - len(sampled)
        if removed > 0:
            logger.debug(f"{self.get_name()}: Collapsed {removed} same-day points")
        return sampled


# ==================== VALIDATION PIPELINE ====================


class ValidationPipeline:
    """
    Chains multiple validators together.

    Validators are applied in sequence; the pipeline stops once no points remain.
    Each step is logged for debugging.
    """

    def __init__(self, validators: List[PointValidator]):
        """
        Args:
            validators: List of validators to apply in sequence
        """
        self.validators = validators
        self.logger = logging.getLogger(__name__)

    def validate(self, points: List[DomainPoint]) -> List[DomainPoint]:
        """
        Apply all validators in sequence.

        Args:
            points: Reconstructed observations

        Returns:
            Points that pass all validations
        """
        if not points:
            self.logger.debug("ValidationPipeline: No points to validate")
            return list(points)

        current = list(points)
        for i, validator in enumerate(self.validators, 1):
            before_count = len(current)
            current = validator.validate(current)

            self.logger.debug(
                f"ValidationPipeline: Step {i}/{len(self.validators)} - "
                f"{validator.get_name()}: {before_count} -> {len(current)} points"
            )

            if not current:
                break

        return current

    def add_validator(self, validator: PointValidator) -> None:
        """Add a validator to the pipeline"""
        self.validators.append(validator)

    def remove_validator(self, validator_name: str) -> bool:
        """
        Remove a validator by name.

        Returns:
            True if validator was found and removed, False otherwise
        """
        for i, validator in enumerate(self.validators):
            if validator.get_name() == validator_name:
                self.validators.pop(i)
                return True
        return False


def default_point_pipeline(decimate: bool = True) -> ValidationPipeline:
    """Pipeline used for cumulative series: validity, ordering, one point per day."""
    validators: List[PointValidator] = [FiniteValueValidator(), ChronologicalOrderValidator()]
    if decimate:
        validators.append(DayDecimationValidator())
    return ValidationPipeline(validators)
