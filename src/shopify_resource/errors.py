"""Exceptions raised by shopify_resource"""

__all__ = [
    "ShopifyResourceError",
    "ConfigurationError",
    "RelationalAccessError",
    "TransportError",
    "UnsavedResourceError",
]


class ShopifyResourceError(Exception):
    """Base class for all errors raised by this package"""


class ConfigurationError(ShopifyResourceError):
    """No connection was set up, or the credentials given
    do not match the selected API mode"""


class RelationalAccessError(ShopifyResourceError, AttributeError):
    """A property was resolved as a relationship,
    but the resource does not declare it as one"""

    def __init__(self, resource, name):
        self.resource, self.name = resource, name
        super().__init__(
            "{!r} is not defined as relational on {}".format(
                name, resource.__name__
            )
        )


class TransportError(ShopifyResourceError):
    """The API responded with an error status.

    Parameters
    ----------
    status: int
        The HTTP status code
    body
        The decoded response body, if any
    request: ~shopify_resource.http.Request
        The request which failed
    """

    def __init__(self, status, body=None, request=None):
        self.status, self.body, self.request = status, body, request
        super().__init__(
            "{} {} failed with status {}".format(
                getattr(request, "method", "?"),
                getattr(request, "url", "?"),
                status,
            )
        )


class UnsavedResourceError(ShopifyResourceError, ValueError):
    """A request needs the primary key of a resource
    which has not been saved yet"""

    def __init__(self, resource):
        self.resource = resource
        super().__init__(
            "{!r} has no {} yet, save it first".format(resource, resource.pk)
        )
