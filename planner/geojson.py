"""Minimal GeoJSON encoding helpers."""

from collections.abc import Sequence
from typing import Any

from network.graph.road import Point


def line_feature(
    points: Sequence[Point], properties: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Build a LineString Feature from planar points."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [[x, y] for x, y in points],
        },
        "properties": dict(properties or {}),
    }


def feature_collection(features: list[dict[str, Any]], **foreign_members: Any) -> dict[str, Any]:
    """Wrap features in a FeatureCollection, with optional extra top-level members."""
    collection: dict[str, Any] = {"type": "FeatureCollection", "features": features}
    collection.update(foreign_members)
    return collection


def trim_coordinate(x: float) -> float:
    """Round to 6 decimal places (about 10cm in WGS84), plenty for GeoJSON output."""
    return round(x, 6)
