import collections.abc
import typing
from collections import OrderedDict

from .defaults import DEFAULT_REF
from .exceptions import InvalidSchemaError
from .interfaces import RelationshipMatcher
from .references import SerializerReference, to_serializer_reference

LinkFunction = typing.Callable[[typing.Any], typing.Optional[str]]

RESOURCE_LINK_NAMES = ("self", "related")


class Relationship:
    """
    Pairs a relationship name with the serializer of the related records and
    the matcher deciding which of them belong to an owner record.
    """

    name: str
    serializer: SerializerReference
    matcher: RelationshipMatcher

    @classmethod
    def from_declaration(cls, name: str, declaration: typing.Any) -> "Relationship":
        """
        Builds a :py:class:`Relationship` from a declaration of the form
        ``{"serializer": ..., "relationship_type": HasMany("personId")}``.
        ``relationshipType`` is accepted in place of ``relationship_type``.
        """
        if isinstance(declaration, Relationship):
            return declaration
        if not isinstance(declaration, collections.abc.Mapping):
            raise InvalidSchemaError(f"relationship ({name}) must be declared with a mapping")
        try:
            serializer = declaration["serializer"]
        except KeyError:
            raise InvalidSchemaError(f"relationship ({name}) does not specify its serializer")
        matcher = declaration.get("relationship_type", declaration.get("relationshipType"))
        if matcher is None:
            raise InvalidSchemaError(f"relationship ({name}) does not specify its relationship type")
        return cls(name, serializer, matcher)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.serializer!r}, {self.matcher!r})"

    def __init__(self, name: str, serializer: typing.Any, matcher: RelationshipMatcher):
        if not isinstance(matcher, RelationshipMatcher):
            raise InvalidSchemaError(
                f"relationship ({name}) has an unsupported relationship type: {matcher!r}"
            )
        self.name = name
        self.serializer = to_serializer_reference(serializer)
        self.matcher = matcher


class ResourceSchema:
    """
    Describes how records of one resource type are serialized.

    :param str type: the resource type name.
    :param str ref: the key of the records holding their identifier.
    :param Iterable[str] attributes: the keys projected into ``attributes``.
    :param relationships: a mapping of relationship names to declarations,
                          or an iterable of :py:class:`Relationship`.
    :param links: a mapping of link names (``self``, ``related``) to functions
                  generating the link from a record.
    """

    type: str
    ref: str
    attributes: typing.Tuple[str, ...]
    relationships: "OrderedDict[str, Relationship]"
    links: typing.Mapping[str, LinkFunction]

    @classmethod
    def from_mapping(
        cls, type: str, mapping: typing.Mapping[str, typing.Any], ref: str = DEFAULT_REF
    ) -> "ResourceSchema":
        return cls(
            type,
            ref=ref,
            attributes=mapping.get("attributes") or (),
            relationships=mapping.get("relationships") or (),
            links=mapping.get("links"),
        )

    @property
    def resource_links(self) -> typing.Sequence[typing.Tuple[str, LinkFunction]]:
        return [(name, self.links[name]) for name in RESOURCE_LINK_NAMES if name in self.links]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type!r}, ref={self.ref!r})"

    def __init__(
        self,
        type: str,
        ref: str = DEFAULT_REF,
        attributes: typing.Iterable[str] = (),
        relationships: typing.Union[
            typing.Mapping[str, typing.Any], typing.Iterable[Relationship]
        ] = (),
        links: typing.Optional[typing.Mapping[str, LinkFunction]] = None,
    ):
        if isinstance(attributes, str):
            raise InvalidSchemaError(f"attributes of {type} must be a sequence of names")
        attributes = tuple(attributes)
        for name in attributes:
            if not isinstance(name, str):
                raise InvalidSchemaError(f"attribute name of {type} must be a string: {name!r}")

        rels: "OrderedDict[str, Relationship]" = OrderedDict()
        if isinstance(relationships, collections.abc.Mapping):
            for name, declaration in relationships.items():
                rels[name] = Relationship.from_declaration(name, declaration)
        else:
            for rel in relationships:
                rels[rel.name] = rel

        self.type = type
        self.ref = ref
        self.attributes = attributes
        self.relationships = rels
        self.links = dict(links or {})
