"""The base class which all resources are built on"""
import copy
import logging
from types import MappingProxyType

from .connection import Connection
from .errors import RelationalAccessError, UnsavedResourceError
from .properties import MISSING, PropertyStore
from .relationships import Relationship

__all__ = ["Resource", "ResourceCollection"]

logger = logging.getLogger(__name__)

API_ROOT = "/admin"

_SINGLE_BODY_METHODS = frozenset(["POST", "PUT"])


class ResourceCollection(list):
    """An ordered list of resources, in the order the API returned them"""

    def first(self):
        """The first resource, or ``None`` if the collection is empty"""
        return self[0] if self else None

    def __repr__(self):
        return "<ResourceCollection: {}>".format(list.__repr__(self))


class ResourceMeta(type):
    def __repr__(self):
        return "<resource {0.__module__}.{0.__name__}>".format(self)


class Resource(metaclass=ResourceMeta):
    """Base class for API resources.

    Subclasses declare where the resource lives and how it relates
    to other resources:

    >>> class Theme(Resource):
    ...     path = "themes"
    ...     name = "theme"
    ...     name_plural = "themes"
    ...     assets = IncludesMany("Asset")

    Parameters
    ----------
    properties: Mapping or None
        Initial, unsaved, property values
    connection
        The transport to use for this instance.
        If not given, the global :class:`~shopify_resource.Connection`.
    """

    path = None
    name = None
    name_plural = None
    pk = "id"

    relationships = MappingProxyType({})  # Mapping[str, Relationship]
    registry = {}  # Mapping[str, Type[Resource]], by "module.QualName"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        # inherited relationships must be copied,
        # otherwise they stay linked to the superclass
        inherited = {}
        for name, relationship in cls.relationships.items():
            if name in cls.__dict__:
                continue
            relationship_copy = copy.copy(relationship)
            relationship_copy.__set_name__(cls, name)
            setattr(cls, name, relationship_copy)
            inherited[name] = relationship_copy

        declared = {
            name: obj
            for name, obj in cls.__dict__.items()
            if isinstance(obj, Relationship)
        }
        cls.relationships = MappingProxyType(dict(inherited, **declared))

        if cls.__dict__.get("name"):
            Resource.registry[_qualified_name(cls)] = cls

    def __init__(self, properties=None, connection=None):
        self._store = PropertyStore()
        self.connection = connection
        for name, value in (properties or {}).items():
            self.set(name, value)

    @staticmethod
    def _api(connection):
        return Connection.get() if connection is None else connection

    @classmethod
    def build_path(cls, resource_id=None, through=None):
        """Build the request path of this resource

        Parameters
        ----------
        resource_id: int or str or None
            The ID of the resource to target.
        through: Resource or str or None
            The resource to nest the path under:
            a resource instance, or a path like ``"products/1234"``.

        Returns
        -------
        str
            the path, such as ``/admin/products/1234/variants.json``

        Raises
        ------
        ~shopify_resource.errors.UnsavedResourceError
            If ``through`` is a resource without a primary key value
        """
        path = [API_ROOT]
        if through is not None:
            if isinstance(through, Resource):
                through_id = through.get(through.pk)
                if through_id is MISSING or through_id is None:
                    raise UnsavedResourceError(through)
                path.append(through.path)
                path.append(through_id)
            else:
                path.append(through)
        path.append(cls.path)

        if resource_id is not None:
            path.append(resource_id)

        return "/".join(map(str, path)) + ".json"

    @classmethod
    def request(
        cls,
        method,
        resource_id=None,
        params=None,
        through=None,
        connection=None,
    ):
        """Make an API call, building the resource(s) from the response

        Parameters
        ----------
        method: str
            The HTTP method
        resource_id: int or str or None
            The ID of the resource to target.
        params: Mapping or None
            Additional parameters to pass with the request.
        through: Resource or str or None
            To form this request through another resource.
        connection
            The transport to use, instead of the global connection.

        Returns
        -------
        Resource or ResourceCollection or None
            ``None`` for ``DELETE`` requests
        """
        api = cls._api(connection)
        path = cls.build_path(resource_id, through)
        logger.debug("%s %s", method, path)
        body = api.rest(method, path, params or {}).body

        if method == "DELETE":
            return None

        if resource_id is not None or method in _SINGLE_BODY_METHODS:
            return cls.build_resource(body[cls.name], connection=connection)
        return cls.build_resource_collection(
            body[cls.name_plural], connection=connection
        )

    @classmethod
    def build_resource(cls, data, instance=None, connection=None):
        """Create a resource from API data.
        Fields are copied as-is.

        Parameters
        ----------
        data: Mapping
            The data for the resource
        instance: Resource or None
            An existing instance to populate instead of a new one
        """
        if instance is None:
            instance = cls(connection=connection)
        for name, value in data.items():
            instance._store.bind(name, value)
        return instance

    @classmethod
    def build_resource_collection(cls, items, connection=None):
        """Create a collection of resources from API data"""
        return ResourceCollection(
            cls.build_resource(data, connection=connection) for data in items
        )

    @classmethod
    def all(cls, params=None, connection=None):
        """Find all records of the resource

        Parameters
        ----------
        params: Mapping or None
            Additional parameters to pass with the request.
        connection
            The transport to use, instead of the global connection.

        Returns
        -------
        ResourceCollection
        """
        return cls.request("GET", params=params, connection=connection)

    @classmethod
    def all_through(cls, through, params=None, connection=None):
        """Find all records of the resource through another resource

        Parameters
        ----------
        through: Resource or str
            The parent resource, or a path like ``"products/1234"``
        params: Mapping or None
            Additional parameters to pass with the request.
        connection
            The transport to use, instead of the global connection.

        Returns
        -------
        ResourceCollection
        """
        return cls.request(
            "GET", params=params, through=through, connection=connection
        )

    @classmethod
    def find(cls, resource_id, params=None, connection=None):
        """Find a single record by its ID"""
        return cls.request(
            "GET", resource_id, params=params, connection=connection
        )

    @classmethod
    def find_through(cls, resource_id, through, params=None, connection=None):
        """Find a single record by its ID, through another resource"""
        return cls.request(
            "GET",
            resource_id,
            params=params,
            through=through,
            connection=connection,
        )

    def get(self, name):
        """Get a property.
        Relationships are resolved; local edits take precedence
        over persisted values.

        Returns
        -------
        the value, or :data:`~shopify_resource.MISSING` if it is not set
        """
        if name in self.relationships:
            return self.get_relationship(name)
        return self._store.get(name)

    def set(self, name, value):
        """Set a property. The change is kept until :meth:`save`"""
        self._store.set(name, value)

    __getitem__ = get
    __setitem__ = set

    def __contains__(self, name):
        return self._store.has(name)

    def get_relationship(self, name):
        """Resolve a relationship, at most once per instance

        Raises
        ------
        ~shopify_resource.errors.RelationalAccessError
            If the property is not declared as a relationship
        """
        relationship = self.relationships.get(name)
        if relationship is None:
            raise RelationalAccessError(type(self), name)

        value = self._store.original(name)
        if isinstance(value, (Resource, ResourceCollection)):
            return value

        logger.debug("resolving %r for %r", relationship, self)
        resolved = relationship.resolve(self, value)
        self._store.bind(name, resolved)
        return resolved

    def original_property(self, name):
        """Get the persisted value of a property, even if it is changed.
        Relationships are never resolved."""
        return self._store.original(name)

    def save(self):
        """Create or update the record.
        Afterwards, the properties are those returned by the API."""
        if self.is_new():
            method, resource_id = "POST", None
        else:
            method, resource_id = "PUT", self.get(self.pk)
        params = {self.name: _to_data(self._store.changes())}

        record = type(self).request(
            method, resource_id, params, connection=self.connection
        )
        self._store.refresh(record._store.properties)
        self.reset_properties()

    def destroy(self):
        """Delete the record.
        The instance itself is left as it is."""
        type(self).request(
            "DELETE", self.get(self.pk), connection=self.connection
        )

    def is_new(self):
        return self._store.original(self.pk) in (MISSING, None)

    def is_existing(self):
        return not self.is_new()

    def reset_properties(self):
        """Discard all unsaved changes"""
        self._store.reset()

    @property
    def is_dirty(self):
        return self._store.is_dirty

    def to_dict(self):
        """The properties, with unsaved changes applied,
        as plain API data"""
        return _to_data(self._store.merged())

    def __repr__(self):
        pk = self._store.original(self.pk)
        return "<{0}: {1}>".format(
            type(self).__name__,
            "new" if pk in (MISSING, None) else "{}={!r}".format(self.pk, pk),
        )


def _to_data(value):
    """convert resources (nested in containers) back into plain data"""
    if isinstance(value, Resource):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _to_data(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_data(v) for v in value]
    return value


def _qualified_name(cls):
    return "{}.{}".format(cls.__module__, cls.__qualname__)
