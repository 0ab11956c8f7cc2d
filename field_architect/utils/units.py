"""
Display formatting for area and distance measurements.
"""
from typing import Union

from field_architect.domain.models import UnitSystem

SQ_METERS_PER_HECTARE = 10_000
ACRES_PER_SQ_METER = 0.000247105
FEET_PER_METER = 3.28084
FEET_PER_MILE = 5280


def format_area(square_meters: float, system: Union[UnitSystem, str] = UnitSystem.METRIC) -> str:
    """
    Format an area for display.

    Args:
        square_meters: Area in m²
        system: Metric (hectares) or imperial (acres)

    Returns:
        Display string, e.g. "1.00 Ha" or "2.47 Acres"
    """
    if UnitSystem(system) is UnitSystem.METRIC:
        return f"{square_meters / SQ_METERS_PER_HECTARE:.2f} Ha"
    return f"{square_meters * ACRES_PER_SQ_METER:.2f} Acres"


def format_distance(meters: float, system: Union[UnitSystem, str] = UnitSystem.METRIC) -> str:
    """
    Format a distance for display.

    Short distances print as whole meters or feet; from 1 km / 1 mile
    upwards the larger unit with two decimals is used. The switch is
    decided on the rounded value, so 999.6 m prints as "1.00 km".

    Args:
        meters: Distance in meters
        system: Metric (m/km) or imperial (ft/mi)

    Returns:
        Display string, e.g. "500 m", "1.50 km", "1640 ft", "1.24 mi"
    """
    if UnitSystem(system) is UnitSystem.METRIC:
        if round(meters) < 1000:
            return f"{meters:.0f} m"
        return f"{meters / 1000:.2f} km"

    feet = meters * FEET_PER_METER
    if round(feet) < FEET_PER_MILE:
        return f"{feet:.0f} ft"
    return f"{feet / FEET_PER_MILE:.2f} mi"
