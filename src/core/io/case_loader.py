"""
YAML potential case loader with validation.

A case file describes a domain and the contributions of a complex potential:

    name: cylinder_with_vortex
    domain:
      type: disk
      inf_image: [0.0, 0.0]
    contributions:
      - kind: uniform_flow
        strength: 1.0
        scale: 1.0
      - kind: point_vortex
        location: [0.0, 0.0]
        strength: -2.0
    sampling:
      x_range: [-1.0, 1.0]
      y_range: [-1.0, 1.0]
      resolution: [81, 81]
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

import yaml

from ..config.schemas import (
    ContributionConfig,
    ContributionKind,
    DomainConfig,
    DomainType,
    PotentialConfig,
    to_complex,
)
from ..domains import PlaneDomain, PotentialDomain, UnitDomain
from ..errors import InvalidArgumentError

if TYPE_CHECKING:
    from postprocessing import FieldData
    from potential import Contribution, Potential

logger = logging.getLogger(__name__)


class PotentialLoader:
    """Load and validate potential cases from YAML files."""

    @staticmethod
    def _read(filepath: Path) -> PotentialConfig:
        if not filepath.exists():
            raise FileNotFoundError(f"Case file not found: {filepath}")

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f)

        if not isinstance(raw_config, dict):
            raise InvalidArgumentError(f"Case file must hold a mapping: {filepath}")

        # Validate with Pydantic
        return PotentialConfig(**raw_config)

    @staticmethod
    def load(filepath: str | Path) -> Tuple["Potential", PotentialConfig]:
        """
        Load case file and create the Potential.

        Args:
            filepath: Path to YAML case file

        Returns:
            Tuple of (Potential object, validated config)

        Raises:
            FileNotFoundError: no file at ``filepath``
            pydantic.ValidationError: the case file is malformed
            InvalidArgumentError, DomainBindingError: the case is well formed
                but the domain or a contribution is not admissible
        """
        filepath = Path(filepath)
        config = PotentialLoader._read(filepath)
        potential = PotentialLoader.build(config)

        logger.info(
            "Loaded case '%s' from %s: %d contribution(s) on %s domain",
            config.name, filepath, len(config.contributions),
            potential.domain.connectivity_text,
        )
        return potential, config

    @staticmethod
    def build(config: PotentialConfig) -> "Potential":
        """Build the Potential described by a validated config."""
        # Deferred: the potential package imports core.
        from potential import Potential

        domain = PotentialLoader.build_domain(config.domain)
        contributions = [PotentialLoader.build_contribution(c) for c in config.contributions]
        return Potential(domain, *contributions)

    @staticmethod
    def build_domain(config: DomainConfig) -> PotentialDomain:
        """
        Build a domain from its config.

        Args:
            config: Validated domain config

        Returns:
            PlaneDomain or UnitDomain
        """
        if config.type == DomainType.PLANE:
            return PlaneDomain()

        return UnitDomain(
            centers=config.hole_centers(),
            radii=list(config.radii),
            inf_image=to_complex(config.inf_image),
            truncation_level=config.truncation_level,
        )

    @staticmethod
    def build_contribution(config: ContributionConfig) -> "Contribution":
        """
        Build an unbound contribution description from its config.

        Args:
            config: Validated contribution config

        Returns:
            One of the contribution kinds of the potential package
        """
        from potential import Dipole, PointVortex, Source, SourceSinkPair, UniformFlow

        location = to_complex(config.location)
        kind = config.kind

        if kind == ContributionKind.SOURCE:
            return Source(location, config.strength)
        if kind == ContributionKind.SOURCE_SINK_PAIR:
            return SourceSinkPair(location, config.strength,
                                  opposite=to_complex(config.opposite))
        if kind == ContributionKind.DIPOLE:
            return Dipole(location, config.strength, angle=config.angle, scale=config.scale)
        if kind == ContributionKind.POINT_VORTEX:
            return PointVortex(location, config.strength)
        return UniformFlow(config.strength, angle=config.angle, scale=config.scale)

    @staticmethod
    def load_fields(filepath: str | Path) -> Optional["FieldData"]:
        """
        Load a case and sample it on its grid.

        Returns:
            FieldData, or None if the case has no sampling section
        """
        from postprocessing import sample_potential

        potential, config = PotentialLoader.load(filepath)
        if config.sampling is None:
            return None

        s = config.sampling
        return sample_potential(potential, s.x_range, s.y_range, s.resolution)

    @staticmethod
    def validate(filepath: str | Path) -> bool:
        """
        Validate case file without building the potential.

        Args:
            filepath: Path to YAML case file

        Returns:
            True if valid, raises ValidationError otherwise
        """
        # This will raise ValidationError if invalid
        PotentialLoader._read(Path(filepath))

        return True
