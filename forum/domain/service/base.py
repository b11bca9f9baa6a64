"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business logic that spans entities, such as
    keeping a content counter in step with the vote ledger.
    """

    pass
