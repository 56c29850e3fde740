"""DTOs for network quality statistics."""

from pydantic import BaseModel, Field

OFF_NETWORK = "Off network"


class NetworkStatsDTO(BaseModel):
    """Network quality scorecard.

    Attributes:
        od_percents: Share of OD flow per infrastructure type name, plus "Off network"
        average_weighted_directness: Trip-weighted routed/straight-line length ratio
    """

    od_percents: dict[str, float] = Field(
        default_factory=dict, description="Fraction of OD flow per category"
    )
    average_weighted_directness: float = Field(
        ge=0.0, description="Trip-weighted average directness"
    )

    def to_dict(self) -> dict[str, dict[str, float] | float]:
        """Convert to dictionary."""
        return {
            "od_percents": dict(self.od_percents),
            "average_weighted_directness": self.average_weighted_directness,
        }
