"""Time-indexed collision-risk ("danger") fields for UAV path planning."""
import logging

from .attenuation import exponential_decay, flat, linear_decay
from .field import RiskField
from .geometry import Heading, name_heading
from .grid import Grid
from .models import SENTINEL, Aircraft, Estimate, FieldParams, SpreadMode
from .projector import group_by_second, project_aircraft, project_leg

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Aircraft",
    "Estimate",
    "FieldParams",
    "Grid",
    "Heading",
    "RiskField",
    "SENTINEL",
    "SpreadMode",
    "exponential_decay",
    "flat",
    "group_by_second",
    "linear_decay",
    "name_heading",
    "project_aircraft",
    "project_leg",
]
