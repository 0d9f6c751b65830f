"""Declarations of the relationships between resources"""
import logging

from .errors import ConfigurationError
from .properties import MISSING

__all__ = [
    "Relationship",
    "IncludesOne",
    "IncludesMany",
    "HasOne",
    "HasMany",
]

logger = logging.getLogger(__name__)


def _is_embedded(raw):
    return raw is not MISSING and raw is not None


class Relationship(object):
    """A lazily resolved association to another resource.
    Implements python's descriptor protocol:
    on a class, returns the relationship;
    on an instance, returns the resolved resource(s).

    Parameters
    ----------
    target: type or str
        The related resource class, or its class name.
        A name is looked up in the module declaring the relationship
        first, then as a fully qualified ``"module.ClassName"``.
    params: ~typing.Callable[[], Mapping] or Mapping or None
        Extra request parameters, evaluated when resolving
    key: str or None
        The property holding the related resource's ID
        (only used by :class:`IncludesOne`)
    """

    def __init__(self, target, params=None, key=None):
        self._target = target
        self._params = params
        self.key = key
        self.module = None

    def __set_name__(self, resource, name):
        self.resource, self.name = resource, name
        # copies made for subclasses keep the original declaring module
        if self.module is None:
            self.module = resource.__module__

    def __get__(self, instance, cls):
        return (
            self if instance is None else instance.get_relationship(self.name)
        )

    def __set__(self, instance, value):
        instance.set(self.name, value)

    @property
    def target(self):
        """The related resource class"""
        if not isinstance(self._target, str):
            return self._target
        registry = self.resource.registry
        for qualified in (
            "{}.{}".format(self.module, self._target),
            self._target,
        ):
            if qualified in registry:
                return registry[qualified]
        raise ConfigurationError(
            "no resource {!r} declared for {!r}".format(self._target, self)
        )

    def params(self):
        """The request parameters for this resolution"""
        if self._params is None:
            return {}
        if callable(self._params):
            return dict(self._params())
        return dict(self._params)

    def resolve(self, instance, raw):
        """Resolve the relationship for an instance

        Parameters
        ----------
        instance: ~shopify_resource.Resource
            The owning resource
        raw
            The unresolved persisted value, if any
        """
        raise NotImplementedError()

    def __repr__(self):
        try:
            return (
                '<{0.__class__.__name__} "{0.name}" of '
                "{0.resource.__name__} -> {0._target!r}>".format(self)
            )
        except AttributeError:
            return "<{0.__class__.__name__} [no name]>".format(self)


class IncludesMany(Relationship):
    """The resource includes many nested resources.
    Embedded data is used when present, otherwise the
    resources are fetched through the owning resource."""

    def resolve(self, instance, raw):
        target = self.target
        if _is_embedded(raw):
            logger.debug("binding embedded %r", self)
            return target.build_resource_collection(
                raw, connection=instance.connection
            )
        return target.all_through(
            instance, self.params(), connection=instance.connection
        )


class IncludesOne(Relationship):
    """The resource includes a single nested resource.
    Embedded data is used when present, otherwise the
    resource is fetched by the ID in the linking key."""

    def linking_key(self):
        return self.key or "{}_id".format(self.target.name)

    def resolve(self, instance, raw):
        target = self.target
        if _is_embedded(raw):
            logger.debug("binding embedded %r", self)
            return target.build_resource(raw, connection=instance.connection)
        resource_id = instance.get(self.linking_key())
        if not resource_id:
            return None
        return target.find(
            resource_id, self.params(), connection=instance.connection
        )


class HasMany(Relationship):
    """The resource has many resources, selected by the parameters"""

    def resolve(self, instance, raw):
        return self.target.all(self.params(), connection=instance.connection)


class HasOne(Relationship):
    """The resource has a single resource: the first one
    of the list selected by the parameters"""

    def resolve(self, instance, raw):
        return self.target.all(
            self.params(), connection=instance.connection
        ).first()
