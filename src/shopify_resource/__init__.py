"""
The entire public API is available at root level::

    from shopify_resource import Connection, Resource, HasOne, Product, ...
"""

from . import api, clients, http
from .api import *  # noqa
from .connection import *  # noqa
from .errors import *  # noqa
from .models import *  # noqa
from .properties import *  # noqa
from .relationships import *  # noqa
from .resource import *  # noqa

__version__ = __import__("importlib.metadata").metadata.version(__name__)
__all__ = ["api", "clients", "http"]
