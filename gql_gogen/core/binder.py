"""Reverse index from object types to the unions containing them."""

from collections.abc import Iterable

from .schema import UnionSchema


class UnionBinder:
    """Collects union membership while unions are generated.

    Every object listed as a member of a union must declare that union's
    marker method, so the index has to be complete before the first object
    is generated. It is built from union members only; interfaces named in
    ``ObjectSchema.implements`` are not part of it.

    Example:
        binder = UnionBinder()
        binder.bind(UnionSchema(name="SearchResult", items={"User": "User"}))
        binder.unions_of("User")  # ["SearchResult"]
    """

    def __init__(self):
        self._memberships: dict[str, list[str]] = {}

    def bind(self, union: UnionSchema):
        """Register ``union`` for each of its members, once per member."""
        for item in union.members:
            names = self._memberships.setdefault(item, [])
            if union.name not in names:
                names.append(union.name)

    def unions_of(self, object_name: str) -> list[str]:
        """Names of the unions ``object_name`` belongs to, in binding order."""
        return list(self._memberships.get(object_name, ()))


def bind_unions(unions: Iterable[UnionSchema]) -> UnionBinder:
    """Build a complete binder from ``unions``."""
    binder = UnionBinder()
    for union in unions:
        binder.bind(union)
    return binder
