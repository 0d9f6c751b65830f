"""The process-wide API connection used by resources"""
import logging
import os

from dotenv import load_dotenv

from .api import ShopifyAPI
from .errors import ConfigurationError

__all__ = ["Connection"]

logger = logging.getLogger(__name__)

_TRUTHY = frozenset(["1", "true", "yes", "on"])


def _require(api_data, keys, message):
    if any(not api_data.get(k) for k in keys):
        raise ConfigurationError(message)


class Connection(object):
    """Holds the single active API connection of the process.

    Note
    ----
    The connection is shared, unguarded state.
    Do not change it from multiple threads without synchronization.
    """

    _connection = None

    @classmethod
    def set(cls, private, shop, api_data, client=None):
        """Create and store the connection

        Parameters
        ----------
        private: bool
            Private (key & password) or public (key, secret & token) API calls.
        shop: str
            The shop to target, e.g. ``example.myshopify.com``
        api_data: Mapping
            The API credentials required for the selected mode.
        client
            Optional HTTP client to send requests with,
            or a ready-made transport exposing ``rest(method, path, params)``.

        Returns
        -------
        ShopifyAPI
            the stored transport

        Raises
        ------
        ~shopify_resource.errors.ConfigurationError
            If the credentials do not match the mode.
            Every required credential must be a non-empty value;
            empty strings are rejected like absent keys.
            An existing connection is left untouched.
        """
        if private:
            _require(
                api_data,
                ("key", "password"),
                "API key and password required for private API calls",
            )
        else:
            _require(
                api_data,
                ("key", "secret", "token"),
                "API key, secret, and token required for public API calls",
            )

        if client is not None and callable(getattr(client, "rest", None)):
            api = client
        else:
            api = ShopifyAPI(
                private,
                shop,
                client=client,
                api_version=api_data.get("version"),
            )
            api.set_api_key(api_data["key"])
            if private:
                api.set_api_password(api_data["password"])
            else:
                api.set_api_secret(api_data["secret"])
                api.set_access_token(api_data["token"])

        logger.info(
            "connected to %s (%s)", shop, "private" if private else "public"
        )
        cls._connection = api
        return api

    @classmethod
    def from_env(cls, prefix="SHOPIFY_", client=None):
        """Set up the connection from environment variables
        (a ``.env`` file is loaded first, if present).

        Reads ``{prefix}SHOP``, ``{prefix}API_KEY``, ``{prefix}API_PASSWORD``,
        ``{prefix}API_SECRET``, ``{prefix}ACCESS_TOKEN``,
        ``{prefix}API_VERSION`` and ``{prefix}PRIVATE``.
        """
        load_dotenv()
        env = os.environ
        shop = env.get(prefix + "SHOP")
        if not shop:
            raise ConfigurationError(
                "{}SHOP must be set to connect".format(prefix)
            )
        api_data = {
            "key": env.get(prefix + "API_KEY"),
            "password": env.get(prefix + "API_PASSWORD"),
            "secret": env.get(prefix + "API_SECRET"),
            "token": env.get(prefix + "ACCESS_TOKEN"),
            "version": env.get(prefix + "API_VERSION"),
        }
        flag = env.get(prefix + "PRIVATE")
        if flag is None:
            private = bool(api_data["password"])
        else:
            private = flag.strip().lower() in _TRUTHY
        return cls.set(private, shop, api_data, client=client)

    @classmethod
    def get(cls):
        """Get the stored connection

        Raises
        ------
        ~shopify_resource.errors.ConfigurationError
            If no connection was set up
        """
        connection = cls._connection
        if connection is None:
            raise ConfigurationError("No connection was setup")
        return connection

    @classmethod
    def clear(cls):
        """Forget the stored connection"""
        if cls._connection is not None:
            logger.info("connection cleared")
        cls._connection = None
