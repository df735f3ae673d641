"""
Pydantic schemas for potential case validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Tuple, Optional
from enum import Enum


Point = Tuple[float, float]


class DomainType(str, Enum):
    """Valid domain types."""
    PLANE = "plane"
    DISK = "disk"
    CIRCULAR = "circular"


class ContributionKind(str, Enum):
    """Valid contribution kinds."""
    SOURCE = "source"
    SOURCE_SINK_PAIR = "source_sink_pair"
    DIPOLE = "dipole"
    POINT_VORTEX = "point_vortex"
    UNIFORM_FLOW = "uniform_flow"


def to_complex(point: Optional[Point]) -> Optional[complex]:
    """[x, y] pair to a complex number (None passes through)."""
    if point is None:
        return None
    return complex(point[0], point[1])


class DomainConfig(BaseModel):
    """Domain configuration."""
    model_config = ConfigDict(extra="forbid")

    type: DomainType = Field(
        default=DomainType.PLANE,
        description="Domain type: entire plane, unit disk, or unit disk with holes"
    )
    centers: List[Point] = Field(
        default_factory=list,
        description="Hole centers [x, y] (circular domains only)"
    )
    radii: List[float] = Field(
        default_factory=list,
        description="Hole radii (circular domains only)"
    )
    inf_image: Optional[Point] = Field(
        default=None,
        description="Image of infinity [x, y] under the physical-domain map"
    )
    truncation_level: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Schottky group word length for multiply connected domains"
    )

    @field_validator('radii')
    @classmethod
    def check_radii(cls, v):
        """Radii must be positive."""
        if any(q <= 0 for q in v):
            raise ValueError("Hole radii must be positive")
        return v

    @model_validator(mode='after')
    def check_holes(self):
        """Holes belong to circular domains, one radius per center."""
        if len(self.centers) != len(self.radii):
            raise ValueError(
                f"Need one radius per center, got {len(self.centers)} centers "
                f"and {len(self.radii)} radii"
            )
        if self.type != DomainType.CIRCULAR and self.centers:
            raise ValueError(f"A '{self.type.value}' domain takes no holes")
        if self.type == DomainType.CIRCULAR and not self.centers:
            raise ValueError("A 'circular' domain needs at least one hole (use 'disk')")
        if self.type == DomainType.PLANE and self.inf_image is not None:
            raise ValueError("The entire plane has no image of infinity")
        return self

    def hole_centers(self) -> List[complex]:
        return [to_complex(c) for c in self.centers]


class ContributionConfig(BaseModel):
    """Configuration for a single contribution."""
    model_config = ConfigDict(extra="forbid")

    kind: ContributionKind = Field(..., description="Contribution kind")
    strength: float = Field(..., description="Real strength (speed for uniform flow)")
    location: Optional[Point] = Field(
        default=None,
        description="Singularity location [x, y]"
    )
    opposite: Optional[Point] = Field(
        default=None,
        description="Sink location [x, y] (source_sink_pair only)"
    )
    angle: float = Field(
        default=0.0,
        description="Orientation in radians (dipole, uniform_flow)"
    )
    scale: Optional[float] = Field(
        default=None,
        description="Physical-map scale at the pole (dipole, uniform_flow)"
    )

    @model_validator(mode='after')
    def check_kind_fields(self):
        """Only the fields a kind uses may be given."""
        kind = self.kind
        if kind == ContributionKind.UNIFORM_FLOW:
            if self.location is not None:
                raise ValueError("uniform_flow takes no location")
        elif self.location is None:
            raise ValueError(f"{kind.value} needs a location")

        if self.opposite is not None and kind != ContributionKind.SOURCE_SINK_PAIR:
            raise ValueError(f"{kind.value} takes no opposite point")

        directional = (ContributionKind.DIPOLE, ContributionKind.UNIFORM_FLOW)
        if kind not in directional and (self.angle != 0.0 or self.scale is not None):
            raise ValueError(f"{kind.value} takes no angle or scale")
        return self


class SamplingConfig(BaseModel):
    """Cartesian sampling grid for field output."""
    model_config = ConfigDict(extra="forbid")

    x_range: Tuple[float, float] = Field(default=(-1.0, 1.0), description="x extent")
    y_range: Tuple[float, float] = Field(default=(-1.0, 1.0), description="y extent")
    resolution: Tuple[int, int] = Field(
        default=(101, 101),
        description="Grid resolution (nx, ny)"
    )

    @field_validator('x_range', 'y_range')
    @classmethod
    def check_range(cls, v):
        """Ranges must be increasing."""
        if v[1] <= v[0]:
            raise ValueError(f"Range must be increasing, got {v}")
        return v

    @field_validator('resolution')
    @classmethod
    def check_resolution(cls, v):
        if min(v) < 2:
            raise ValueError(f"Resolution needs at least 2 points per axis, got {v}")
        return v


class PotentialConfig(BaseModel):
    """Top-level potential case configuration."""
    model_config = ConfigDict(extra="forbid")  # Catch typos in YAML

    name: str = Field(..., description="Case name")
    description: str = Field(default="", description="Case description")

    domain: DomainConfig = Field(
        default_factory=DomainConfig,
        description="Domain settings"
    )
    contributions: List[ContributionConfig] = Field(
        default_factory=list,
        description="Contributions in evaluation order"
    )
    sampling: Optional[SamplingConfig] = Field(
        default=None,
        description="Optional field sampling grid"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Check name is not blank."""
        if not v or not v.strip():
            raise ValueError("Case name cannot be empty")
        return v.strip()
