"""Funnel geometry: shape configuration, the Jonsson embedding and diagnostics."""

from .funnel import FunnelShape, ShapeParameters
from .jonsson import JonssonEmbedding

__all__ = [
    "FunnelShape",
    "ShapeParameters",
    "JonssonEmbedding",
]
