"""The REST client which performs the actual API calls"""
import logging
import urllib.request

from .clients import send
from .errors import TransportError
from .http import DELETE, GET, POST, PUT, basic_auth, token_auth

__all__ = ["ShopifyAPI", "RestResponse"]

logger = logging.getLogger(__name__)

_METHODS = {"GET": GET, "POST": POST, "PUT": PUT, "DELETE": DELETE}
_BODY_METHODS = frozenset(["POST", "PUT"])


class RestResponse(object):
    """The decoded result of a REST call

    Parameters
    ----------
    status: int
        The HTTP status code
    body: dict or None
        The decoded JSON body
    headers: Mapping
        The response headers
    """

    __slots__ = "status", "body", "headers"

    def __init__(self, status, body, headers=None):
        self.status = status
        self.body = body
        self.headers = headers or {}

    def __repr__(self):
        return "<RestResponse: {0.status}>".format(self)


class ShopifyAPI(object):
    """Client for a single shop's admin REST API.

    Parameters
    ----------
    private: bool
        Whether to authenticate as a private app (key & password)
        or as a public app (access token).
    shop: str
        The shop domain, e.g. ``example.myshopify.com``
    client
        The HTTP client to use.
        Its type must have been registered
        with :func:`~shopify_resource.clients.send`.
        If not given, the built-in :mod:`urllib` module is used.
    api_version: str or None
        A versioned API to target, such as ``2019-04``.
    """

    def __init__(self, private, shop, client=None, api_version=None):
        self.private = private
        self.shop = shop
        self.client = (
            urllib.request.build_opener() if client is None else client
        )
        self.api_version = api_version
        self.api_key = None
        self.api_password = None
        self.api_secret = None
        self.access_token = None

    def set_api_key(self, key):
        self.api_key = key

    def set_api_password(self, password):
        self.api_password = password

    def set_api_secret(self, secret):
        self.api_secret = secret

    def set_access_token(self, token):
        self.access_token = token

    def set_client(self, client):
        self.client = client

    def url(self, path):
        """The absolute url for an ``/admin/...`` path"""
        if self.api_version and path.startswith("/admin/"):
            path = "/admin/api/{}/{}".format(
                self.api_version, path[len("/admin/"):]
            )
        return "https://{}{}".format(self.shop, path)

    def authenticate(self, request):
        """Add the credentials of the current mode to a request"""
        if self.private:
            auth = basic_auth((self.api_key, self.api_password))
        else:
            auth = token_auth(self.access_token)
        return auth(request)

    def rest(self, method, path, params=None):
        """Perform a REST call, returning the decoded response

        Parameters
        ----------
        method: str
            ``GET``, ``POST``, ``PUT`` or ``DELETE``
        path: str
            The admin path, e.g. ``/admin/products/1.json``
        params: Mapping or None
            Query parameters, or the JSON body for ``POST`` and ``PUT``

        Returns
        -------
        RestResponse
            The response, with its JSON body decoded

        Raises
        ------
        ~shopify_resource.errors.TransportError
            If the API responds with an error status
        ValueError
            If the method is not one of the above
        """
        params = params or {}
        try:
            make_request = _METHODS[method]
        except KeyError:
            raise ValueError("unsupported method {!r}".format(method)) from None
        request = make_request(
            self.url(path), headers={"Accept": "application/json"}
        )
        if method in _BODY_METHODS:
            request = request.with_json(params)
        else:
            request = request.with_params(params)

        logger.debug("%s %s", method, request.url)
        response = send(self.client, self.authenticate(request))
        if response.status_code >= 400:
            logger.warning(
                "%s %s returned %s", method, request.url, response.status_code
            )
            raise TransportError(
                response.status_code, _error_body(response), request
            )
        return RestResponse(
            response.status_code, response.json(), response.headers
        )

    def __repr__(self):
        return "<ShopifyAPI: {0.shop} ({1})>".format(
            self, "private" if self.private else "public"
        )


def _error_body(response):
    """error bodies are usually JSON, but proxies may answer with HTML"""
    try:
        return response.json()
    except ValueError:
        return response.content
