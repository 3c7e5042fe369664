"""
Relationship matchers decide which of the supplied related records belong to
an owner record.

Two strategies are provided:

* :py:class:`BelongsTo`: the owner carries a foreign key referring to the
  related record's ref value (e.g. ``article.authorId -> person.id``).
* :py:class:`HasMany`: the related record carries a foreign key referring to
  the owner's ref value (e.g. ``address.personId -> person.id``). The foreign
  key may also be a sequence of ref values, which models many-to-many
  relationships.

Both accept a single candidate record or a sequence of them. With a sequence,
every candidate is matched independently and the matches are merged: duplicates
(same type and ref value) are dropped, a single match is linked as a bare
resource identifier, and two or more as a sequence of resource identifiers.
"""

import abc
import typing

from .defaults import DefaultRecordAccessor
from .interfaces import MatcherKind, RecordAccessor, RelatedSchema, RelationshipMatcher
from .serde.models import LinkageRepr, Missing, ResourceIdRepr
from .utils import identity_key, is_collection, loosely_equal

_default_accessor = DefaultRecordAccessor()


def merge_linkages(
    linkages: typing.Iterable[typing.Optional[LinkageRepr]],
) -> typing.Optional[LinkageRepr]:
    identifiers: typing.List[ResourceIdRepr] = []
    seen: typing.Set[typing.Tuple[str, typing.Hashable]] = set()
    for linkage in linkages:
        if linkage is None:
            continue
        data = linkage.data
        if data is None:
            continue
        for identifier in (data,) if isinstance(data, ResourceIdRepr) else data:
            key = (identifier.type, identity_key(identifier.id))
            if key in seen:
                continue
            seen.add(key)
            identifiers.append(identifier)

    if not identifiers:
        return None
    elif len(identifiers) == 1:
        return LinkageRepr(data=identifiers[0])
    else:
        return LinkageRepr(data=tuple(identifiers))


class Matcher(RelationshipMatcher):
    @abc.abstractmethod
    def matches(
        self,
        related_schema: RelatedSchema,
        owner: typing.Any,
        candidate: typing.Any,
        accessor: RecordAccessor,
    ) -> bool:
        ...  # pragma: nocover

    def _match_one(
        self,
        related_schema: RelatedSchema,
        owner: typing.Any,
        candidate: typing.Any,
        accessor: RecordAccessor,
    ) -> typing.Optional[LinkageRepr]:
        ref_value = accessor.fetch(candidate, related_schema.ref)
        if ref_value is Missing or ref_value is None:
            return None
        if not self.matches(related_schema, owner, candidate, accessor):
            return None
        return LinkageRepr(
            data=ResourceIdRepr(type=related_schema.type, ref=related_schema.ref, id=ref_value)
        )

    def __call__(
        self,
        related_schema: RelatedSchema,
        owner: typing.Any,
        candidate: typing.Any,
        accessor: typing.Optional[RecordAccessor] = None,
    ) -> typing.Optional[LinkageRepr]:
        if accessor is None:
            accessor = _default_accessor
        if is_collection(candidate):
            return merge_linkages(
                self._match_one(related_schema, owner, c, accessor) for c in candidate
            )
        return self._match_one(related_schema, owner, candidate, accessor)


class BelongsTo(Matcher):
    """
    Matches candidates whose ref value equals the owner's ``owner_foreign_key`` value.
    The matcher expects the whole owner record.

    :param str owner_foreign_key: the attribute of the owner holding the foreign key.
    """

    owner_foreign_key: str

    @property
    def kind(self) -> MatcherKind:
        return MatcherKind.BELONGS_TO

    def matches(
        self,
        related_schema: RelatedSchema,
        owner: typing.Any,
        candidate: typing.Any,
        accessor: RecordAccessor,
    ) -> bool:
        return loosely_equal(
            accessor.fetch(owner, self.owner_foreign_key),
            accessor.fetch(candidate, related_schema.ref),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.owner_foreign_key!r})"

    def __init__(self, owner_foreign_key: str):
        self.owner_foreign_key = owner_foreign_key


class HasMany(Matcher):
    """
    Matches candidates whose ``related_foreign_key`` value equals, or contains,
    the owner's ref value. The matcher expects only the owner's ref value.

    :param str related_foreign_key: the attribute of the candidates holding the foreign key.
    """

    related_foreign_key: str

    @property
    def kind(self) -> MatcherKind:
        return MatcherKind.HAS_MANY

    def matches(
        self,
        related_schema: RelatedSchema,
        owner: typing.Any,
        candidate: typing.Any,
        accessor: RecordAccessor,
    ) -> bool:
        foreign_key = accessor.fetch(candidate, self.related_foreign_key)
        if is_collection(foreign_key):
            return any(loosely_equal(v, owner) for v in foreign_key)
        return loosely_equal(foreign_key, owner)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.related_foreign_key!r})"

    def __init__(self, related_foreign_key: str):
        self.related_foreign_key = related_foreign_key
