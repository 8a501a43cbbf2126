"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the rules that span entities or need repositories:
    threading, ownership, rate windows and the moderation overlay.
    """

    pass
