"""Domain errors."""


class DomainError(Exception):
    """Base domain error."""


class ZoneResolutionError(DomainError):
    """Time zone identifier could not be resolved."""


class CatalogError(DomainError):
    """Metric query catalog is invalid."""


class BackendWriteError(DomainError):
    """Writing metric data to the backend failed."""


class BackendReadError(DomainError):
    """Reading metric data from the backend failed."""
