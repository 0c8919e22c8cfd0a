"""Exception types for Shop Insights."""


class ShopInsightsError(Exception):
    """Base class for errors raised by the list filtering core."""


class UnknownFieldError(ShopInsightsError, KeyError):
    """A filter or statistics configuration names a field the schema lacks."""

    def __init__(self, entity: str, field_name: str, expected: str = None):
        self.entity = entity
        self.field_name = field_name
        self.expected = expected
        message = f"'{field_name}' is not a field of {entity}"
        if expected:
            message = f"'{field_name}' is not a {expected} field of {entity}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message
        return self.args[0]


class UnknownEntityError(ShopInsightsError, KeyError):
    """No schema is registered for the requested entity type."""

    def __str__(self) -> str:
        return f"Unknown entity type: {self.args[0]}"


class DataSourceError(ShopInsightsError):
    """Fetching rows from the backing data service failed."""
