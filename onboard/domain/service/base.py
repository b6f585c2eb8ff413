"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold the business rules that span an entity and its repository,
    plus the ports to external providers.
    """

    pass
