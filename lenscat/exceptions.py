class LensCatalogException(Exception):
    pass


class CatalogValidationError(LensCatalogException, ValueError):
    """A source dataset cannot be turned into a catalog."""


class DomainError(LensCatalogException, ArithmeticError):
    """An optical computation is undefined for the given inputs."""
