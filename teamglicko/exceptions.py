"""errors raised by teamglicko

Every error is raised at the point of violation and propagated to the caller.
"""


class TeamGlickoError(Exception):
    """base class for all errors raised by this package"""


class ConfigurationError(TeamGlickoError, ValueError):
    """malformed construction input, e.g. parallel log sequences of different lengths"""


class EmptyGroupError(TeamGlickoError, ValueError):
    """a composite was requested for zero players"""


class IncompatibleGroupError(TeamGlickoError, ValueError):
    """players with different tau or default_rating were combined or opposed"""


class InvalidMatchError(TeamGlickoError, ValueError):
    """a match side is missing or has no players"""


class InvalidOutcomeError(TeamGlickoError, ValueError):
    """an outcome or score that cannot be reduced to a win, loss or tie"""


class ComputationError(TeamGlickoError, ArithmeticError):
    """the update hit a degenerate numeric case instead of producing nan or inf"""
