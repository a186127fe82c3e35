"""Exceptions raised by the VR combat simulator."""


class ConfigurationError(ValueError):
    """An encounter was requested with inputs the simulator can't honour.

    Raised before any round is played: unknown archetype, group size or
    level out of range, missing player fields, unknown strategy or penalty
    policy names.
    """
