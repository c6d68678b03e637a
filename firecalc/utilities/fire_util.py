"""Various sets of constants and enumerations useful throughout the codebase

.. autoclass:: ContainStatus
    :members:

.. autoclass:: ContainDerivedStatus
    :members:

.. autoclass:: ContainTactic
    :members:

.. autoclass:: LifeCategory
    :members:

.. autoclass:: CrownFireType
    :members:

"""

# Smallest magnitude treated as non-zero by the degenerate-input guards
SMIDGEN = 1.0e-6

# Number of particle slots in a fuel bed description
MAX_PARTS = 8

# Particle slot indices used by the herbaceous load transfer
LIVE_HERB, DEAD_HERB = 3, 5

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


class ContainStatus:
    # Raw terminal states of the containment kernel
    UNREPORTED, REPORTED, ATTACKED, CONTAINED, OVERRUN, EXHAUSTED, OVERFLOW, SPREAD_LIMIT = range(8)

    names = {
        0: "Unreported",
        1: "Reported",
        2: "Attacked",
        3: "Contained",
        4: "Overrun",
        5: "Exhausted",
        6: "StepOverflow",
        7: "DistanceLimitExceeded",
    }


class ContainDerivedStatus:
    # Worksheet-level status reported in vContainStatus
    CONTAINED, WITHDRAWN, ESCAPED = 0, 1, 2

    names = {0: "Contained", 1: "Withdrawn", 2: "Escaped"}

    # Raw kernel state -> derived status, indexed by ContainStatus
    crosswalk = (2, 2, 2, 0, 1, 2, 2, 2)


class ContainTactic:
    HEAD, REAR = 0, 1


class ContainFlank:
    LEFT, RIGHT, BOTH, NEITHER = 0, 1, 2, 3


class LifeCategory:
    # Particle life categories; litter counts as dead
    DEAD, HERB, WOOD, LITTER = 0, 1, 2, 3


class CrownFireType:
    SURFACE, TORCHING, CONDITIONAL, CROWNING = 0, 1, 2, 3

    names = {
        0: "Surface",
        1: "Torching",
        2: "Conditional crown",
        3: "Crowning",
    }


class WindAdjMethod:
    SHELTERED, UNSHELTERED, INPUT = 0, 1, 2


class SpotSource:
    RIDGE_TOP, MIDSLOPE_WINDWARD, VALLEY_BOTTOM, MIDSLOPE_LEEWARD = 0, 1, 2, 3


def is_dead(life: int) -> bool:
    return life == LifeCategory.DEAD or life == LifeCategory.LITTER


def wrap_degrees(deg: float) -> float:
    """Wraps an azimuth into [0, 360).

    Args:
        deg (float): azimuth in degrees

    Returns:
        float: equivalent azimuth in [0, 360)
    """
    while deg >= 360.:
        deg -= 360.
    while deg < 0.:
        deg += 360.
    return deg
