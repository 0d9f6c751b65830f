"""Minimal HTTP values passed between the API client and HTTP clients"""
import json
from base64 import b64encode
from collections.abc import Mapping
from functools import partial
from itertools import chain
from operator import attrgetter, methodcaller

__all__ = [
    "Request",
    "Response",
    "header_adder",
    "basic_auth",
    "token_auth",
    "GET",
    "POST",
    "PUT",
    "DELETE",
]


class _FrozenDict(Mapping):
    __slots__ = "_inner"

    def __init__(self, inner=()):
        self._inner = dict(inner)

    __len__ = property(attrgetter("_inner.__len__"))
    __iter__ = property(attrgetter("_inner.__iter__"))
    __getitem__ = property(attrgetter("_inner.__getitem__"))
    __repr__ = property(attrgetter("_inner.__repr__"))


class _SlotsMixin(object):
    __slots__ = ()

    def _asdict(self):
        return {a: getattr(self, a) for a in self.__slots__}

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._asdict() == other._asdict()
        return NotImplemented

    def __ne__(self, other):
        if isinstance(other, self.__class__):
            return self._asdict() != other._asdict()
        return NotImplemented

    def replace(self, **kwargs):
        """Create a copy with replaced fields"""
        return type(self)(**_merge_maps(self._asdict(), kwargs))


def _merge_maps(m1, m2):
    """merge two Mapping objects, keeping the type of the first mapping"""
    return type(m1)(chain(m1.items(), m2.items()))


class Request(_SlotsMixin):
    """An HTTP request to the Shopify admin API.

    Parameters
    ----------
    method: str
        The http method
    url: str
        The absolute url
    content: bytes or None
        The encoded request body
    params: Mapping
        The query parameters.
    headers: Mapping
        Request headers.
    """

    __slots__ = "method", "url", "content", "params", "headers"
    __hash__ = None

    def __init__(
        self,
        method,
        url,
        content=None,
        params=_FrozenDict(),
        headers=_FrozenDict(),
    ):
        self.method = method
        self.url = url
        self.content = content
        self.params = params
        self.headers = headers

    def with_headers(self, headers):
        """Create a new request with added headers"""
        return self.replace(headers=_merge_maps(self.headers, headers))

    def with_params(self, params):
        """Create a new request with added query parameters"""
        return self.replace(params=_merge_maps(self.params, params))

    def with_json(self, data):
        """Create a new request with ``data`` encoded as a JSON body

        Parameters
        ----------
        data
            any JSON-serializable object
        """
        return self.replace(
            content=json.dumps(data).encode("utf-8"),
            headers=_merge_maps(
                self.headers, {"Content-Type": "application/json"}
            ),
        )

    def __repr__(self):
        return (
            "<Request: {0.method} {0.url}, params={0.params!r}>"
        ).format(self)


class Response(_SlotsMixin):
    """An HTTP response.

    Parameters
    ----------
    status_code: int
        The HTTP status code
    content: bytes or None
        The response content
    headers: Mapping
        The headers of the response.
    """

    __slots__ = "status_code", "content", "headers"
    __hash__ = None

    def __init__(self, status_code, content=None, headers=_FrozenDict()):
        self.status_code = status_code
        self.content = content
        self.headers = headers

    def json(self):
        """Decode the content as JSON, ``None`` if there is no content"""
        if not self.content:
            return None
        return json.loads(self.content.decode("utf-8"))

    def __repr__(self):
        return "<Response: {0.status_code}>".format(self)


def basic_auth(credentials):
    """Create an HTTP basic authentication callable

    Parameters
    ----------
    credentials: ~typing.Tuple[str, str]
        The (api key, password)-tuple of a private app

    Returns
    -------
    ~typing.Callable[[Request], Request]
        A callable which adds basic authentication to a :class:`Request`.
    """
    encoded = b64encode(":".join(credentials).encode("ascii")).decode()
    return header_adder({"Authorization": "Basic " + encoded})


def token_auth(token):
    """Create a callable authenticating requests with an access token
    obtained through the OAuth flow of a public app"""
    return header_adder({"X-Shopify-Access-Token": token})


header_adder = partial(methodcaller, "with_headers")
header_adder.__doc__ = """
Make a callable which adds headers to a request

Example
-------

>>> func = header_adder({'Accept': 'application/json'})
>>> func(GET('https://test.myshopify.com')).headers
{'Accept': 'application/json'}
"""
GET = partial(Request, "GET")
GET.__doc__ = "Shortcut for a GET request"
POST = partial(Request, "POST")
POST.__doc__ = "Shortcut for a POST request"
PUT = partial(Request, "PUT")
PUT.__doc__ = "Shortcut for a PUT request"
DELETE = partial(Request, "DELETE")
DELETE.__doc__ = "Shortcut for a DELETE request"
