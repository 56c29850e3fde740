"""Pydantic models for planner settings."""

from pydantic import BaseModel, Field, field_validator

from core.types import InfraType, LevelOfService, Tier


def _default_los_cost_multipliers() -> dict[LevelOfService, float]:
    return {
        LevelOfService.HIGH: 1.0,
        LevelOfService.MEDIUM: 1.5,
        LevelOfService.LOW: 3.0,
        LevelOfService.SHOULD_NOT_BE_USED: 10.0,
    }


class PlannerConfig(BaseModel):
    """Settings for classification, imports and routing.

    Defaults reproduce the behaviour planners expect out of the box; override
    individual fields rather than subclassing.
    """

    # Classification
    default_speed_mph: int = Field(
        default=30, gt=0, description="Speed assumed for roads of unrecognized class"
    )

    # Imports
    import_notes: str = Field(
        default="imported from existing network",
        description="Notes attached to every imported route",
    )
    existing_infra_tier: Tier = Field(
        default=Tier.LOCAL_ACCESS, description="Tier given to imported existing infrastructure"
    )
    existing_infra_types: frozenset[InfraType] = Field(
        default=frozenset(
            {InfraType.SEGREGATED_WIDE, InfraType.OFF_ROAD, InfraType.SEGREGATED_NARROW}
        ),
        description="Tag-classifier guesses accepted as already-built infrastructure",
    )
    core_network_infra_type: InfraType = Field(
        default=InfraType.SEGREGATED_NARROW,
        description="Placeholder infrastructure type for core network imports",
    )

    # Routing
    los_cost_multipliers: dict[LevelOfService, float] = Field(
        default_factory=_default_los_cost_multipliers,
        description="Routing cost per metre for each level of service",
    )

    @field_validator("los_cost_multipliers")
    @classmethod
    def validate_multipliers(cls, v: dict[LevelOfService, float]) -> dict[LevelOfService, float]:
        """Ensure every level of service has a usable multiplier."""
        missing = [los.value for los in LevelOfService if los not in v]
        if missing:
            raise ValueError(f"missing cost multipliers for: {', '.join(missing)}")
        if any(m < 1.0 for m in v.values()):
            raise ValueError("cost multipliers must be >= 1.0")
        return v

    @field_validator("existing_infra_types")
    @classmethod
    def validate_existing_types(cls, v: frozenset[InfraType]) -> frozenset[InfraType]:
        if InfraType.UNKNOWN in v:
            raise ValueError("Unknown cannot be imported as existing infrastructure")
        return v
