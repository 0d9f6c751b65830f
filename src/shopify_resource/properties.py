"""Storage of a resource's persisted and locally changed properties"""

__all__ = ["PropertyStore", "MISSING"]


class _Missing(object):
    """Sentinel for a property without a value"""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"

    def __reduce__(self):
        return "MISSING"


MISSING = _Missing()


class PropertyStore(object):
    """The properties of a single resource.

    ``properties`` holds the last known persisted state,
    ``mutated`` the local edits on top of it.
    Reading a property prefers the local edit.

    Parameters
    ----------
    properties: Mapping or None
        The initial persisted properties
    """

    __slots__ = "properties", "mutated"

    def __init__(self, properties=None):
        self.properties = dict(properties or {})
        self.mutated = {}

    def get(self, name):
        if name in self.mutated:
            return self.mutated[name]
        return self.properties.get(name, MISSING)

    def set(self, name, value):
        self.mutated[name] = value

    def original(self, name):
        """The persisted value, ignoring local edits"""
        return self.properties.get(name, MISSING)

    def has(self, name):
        return name in self.mutated or name in self.properties

    def bind(self, name, value):
        """Store a value as persisted state"""
        self.properties[name] = value

    def refresh(self, properties):
        """Replace the persisted state wholesale"""
        self.properties = dict(properties)

    def reset(self):
        """Discard all local edits"""
        self.mutated = {}

    def changes(self):
        return dict(self.mutated)

    @property
    def is_dirty(self):
        return bool(self.mutated)

    def merged(self):
        """All properties, with local edits applied"""
        merged = dict(self.properties)
        merged.update(self.mutated)
        return merged

    def __repr__(self):
        return "<PropertyStore: {} persisted, {} mutated>".format(
            len(self.properties), len(self.mutated)
        )
