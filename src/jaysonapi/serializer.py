"""
:py:mod:`jaysonapi.serializer` turns domain records into JSON:API documents.

Synopsis
--------

.. code-block:: python

   from jaysonapi import HasMany, Serializer

   person = Serializer(
       "person",
       {
           "attributes": ["name", "phone"],
           "relationships": {
               "address": {
                   "serializer": {"type": "address", "attributes": ["street", "city"]},
                   "relationship_type": HasMany("personId"),
               },
           },
       },
   )

   person.serialize(
       data={"id": 1, "name": "Joe", "phone": "9008881234"},
       included={
           "address": [
               {"id": 2, "street": "123 Street Ave.", "city": "Lansing", "personId": 1},
           ],
       },
   )

"""

import logging
import typing

from .defaults import DEFAULT_REF, DefaultRecordAccessor
from .exceptions import DataReferenceError, InvalidSchemaError
from .interfaces import MatcherKind, RecordAccessor, SerializerRegistry
from .models import LinkFunction, Relationship, ResourceSchema
from .registry import default_registry
from .serde.builders import DocumentBuilder, ResourceReprBuilder
from .serde.models import (
    DocumentRepr,
    ErrorRepr,
    Included,
    LinkageRepr,
    LinksRepr,
    Missing,
    PrimaryData,
    ResourceRepr,
)
from .serde.renderer import ReprRenderer
from .serde.types import MutableJSONObject, RefValue
from .utils import identity_key, is_collection, is_meta

logger = logging.getLogger(__name__)

TOP_LEVEL_LINK_NAMES = ("self", "related", "pagination")

RelatedRecords = typing.Mapping[str, typing.Any]
Errors = typing.Sequence[typing.Union[ErrorRepr, typing.Mapping[str, typing.Any]]]


def iter_resources(data: PrimaryData) -> typing.Iterator[ResourceRepr]:
    if data is Missing or data is None:
        return
    if isinstance(data, ResourceRepr):
        yield data
        return
    for item in typing.cast(typing.Iterable[typing.Any], data):
        yield from iter_resources(item)


class Serializer:
    """
    Serializes the records of one resource type.

    :param str type: the resource type name.
    :param schema: a mapping with the ``attributes``, ``relationships`` and
                   ``links`` members, or a :py:class:`ResourceSchema`.
    :param str ref: the key of the records holding their identifier.
    :param Optional[SerializerRegistry] registry: the registry in which serializers
                   referred to by name are looked up; :py:data:`default_registry` if omitted.
    :param Optional[RecordAccessor] accessor: reads values off the records.
    :param Optional[ReprRenderer] renderer: renders documents into JSON-compatible objects.
    """

    schema: ResourceSchema
    registry: SerializerRegistry
    accessor: RecordAccessor
    renderer: ReprRenderer

    @property
    def type(self) -> str:
        return self.schema.type

    @property
    def ref(self) -> str:
        return self.schema.ref

    @property
    def attributes(self) -> typing.Tuple[str, ...]:
        return self.schema.attributes

    @property
    def relationships(self) -> typing.Mapping[str, Relationship]:
        return self.schema.relationships

    @property
    def links(self) -> typing.Mapping[str, LinkFunction]:
        return self.schema.links

    def _link_related(
        self, record: typing.Any, ref_value: RefValue, related: RelatedRecords
    ) -> typing.Iterator[typing.Tuple[str, LinkageRepr]]:
        for name, rel in self.relationships.items():
            if name not in related:
                continue
            serializer = rel.serializer.resolve(self)
            owner = ref_value if rel.matcher.kind is MatcherKind.HAS_MANY else record
            linkage = rel.matcher(serializer, owner, related[name], self.accessor)
            if linkage is None:
                continue
            yield name, linkage

    def _build_resource(
        self, record: typing.Any, related: typing.Optional[RelatedRecords]
    ) -> ResourceRepr:
        ref_value = self.accessor.fetch(record, self.ref)
        if not ref_value:
            raise DataReferenceError(self.ref, record)

        builder = ResourceReprBuilder()
        builder.set_type(self.type)
        builder.set_identifier(self.ref, ref_value)
        for name in self.attributes:
            value = self.accessor.fetch(record, name)
            if value is not Missing:
                builder.add_attribute(name, value)
        if self.relationships and related:
            for name, linkage in self._link_related(record, ref_value, related):
                builder.add_relationship(name, linkage)
        for name, link in self.schema.resource_links:
            builder.set_link(name, link(record))
        return builder()

    def serialize_resource(
        self, record: typing.Any, related: typing.Optional[RelatedRecords] = None
    ) -> PrimaryData:
        """
        Serializes the primary data.

        :param record: a record, a sequence of records, or :py:data:`Missing`.
        :param related: candidate related records keyed by relationship name.
        :return: :py:data:`Missing` for :py:data:`Missing`, a tuple for a sequence,
                 ``None`` for an empty record, and a :py:class:`ResourceRepr` otherwise.
        :raises DataReferenceError: if a record lacks its ref value.
        """
        if record is Missing:
            return Missing
        if is_collection(record):
            return tuple(self.serialize_resource(r, related) for r in record)
        if self.accessor.is_empty(record):
            return None
        return self._build_resource(record, related)

    def resolve_included(self, related: typing.Optional[RelatedRecords]) -> Included:
        """
        Serializes the related records of every declared relationship into a flat
        sequence of resources in which no two share the same type and ref value.

        :param related: candidate related records keyed by relationship name.
        :return: a tuple of :py:class:`ResourceRepr`, or :py:data:`Missing` if there is
                 nothing to include.
        """
        if not self.relationships or not related:
            return Missing

        names = [name for name in self.relationships if name in related]
        if not names:
            return Missing

        included: typing.List[ResourceRepr] = []
        seen: typing.Set[typing.Tuple[str, typing.Hashable]] = set()
        for name in names:
            serializer = self.relationships[name].serializer.resolve(self)
            data = serializer.build_document(data=related[name]).data
            for resource in iter_resources(data):
                key = (resource.type, identity_key(resource.id))
                if key in seen:
                    logger.debug("skipping duplicate %s %r in included", resource.type, resource.id)
                    continue
                seen.add(key)
                included.append(resource)

        if not included:
            return Missing
        return tuple(included)

    def build_document(
        self,
        data: typing.Any = Missing,
        included: typing.Optional[RelatedRecords] = None,
        meta: typing.Any = None,
        links: typing.Union[typing.Mapping[str, typing.Any], LinksRepr, None] = None,
        errors: typing.Optional[Errors] = None,
    ) -> DocumentRepr:
        """
        Builds the internal representation of a top level document.

        :param data: the primary record(s); leave it :py:data:`Missing` to omit ``data``.
        :param included: candidate related records keyed by relationship name.
        :param meta: a mapping; any other value is ignored.
        :param links: top level links (``self``, ``related``, ``pagination``).
        :param errors: error objects.
        :raises DataReferenceError: if a record lacks its ref value.
        :raises SerializerNotRegisteredError: if a relationship refers to an unknown serializer.
        :raises TopLevelDocumentError: if none of data, errors and meta are present.
        """
        builder = DocumentBuilder()
        builder.data = self.serialize_resource(data, included)
        builder.included = self.resolve_included(included)

        if meta is not None:
            if is_meta(meta):
                builder.meta = meta
            else:
                logger.debug("ignoring meta of type %s", type(meta).__name__)

        if isinstance(links, LinksRepr):
            builder.links = links
        elif links is not None:
            for name in TOP_LEVEL_LINK_NAMES:
                if name in links:
                    builder.set_link(name, links[name])

        if errors is not None:
            builder.set_errors(errors)

        return builder()

    def serialize(
        self,
        data: typing.Any = Missing,
        included: typing.Optional[RelatedRecords] = None,
        meta: typing.Any = None,
        links: typing.Union[typing.Mapping[str, typing.Any], LinksRepr, None] = None,
        errors: typing.Optional[Errors] = None,
    ) -> MutableJSONObject:
        """
        Serializes a top level document into a JSON-compatible dictionary.
        Takes the same arguments as :py:meth:`build_document`.
        """
        return self.renderer(
            self.build_document(data=data, included=included, meta=meta, links=links, errors=errors)
        )

    async def serialize_async(
        self,
        data: typing.Any = Missing,
        included: typing.Optional[RelatedRecords] = None,
        meta: typing.Any = None,
        links: typing.Union[typing.Mapping[str, typing.Any], LinksRepr, None] = None,
        errors: typing.Optional[Errors] = None,
    ) -> MutableJSONObject:
        return self.serialize(data=data, included=included, meta=meta, links=links, errors=errors)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type!r}, ref={self.ref!r})"

    def __init__(
        self,
        type: str,
        schema: typing.Union[typing.Mapping[str, typing.Any], ResourceSchema, None] = None,
        *,
        ref: str = DEFAULT_REF,
        registry: typing.Optional[SerializerRegistry] = None,
        accessor: typing.Optional[RecordAccessor] = None,
        renderer: typing.Optional[ReprRenderer] = None,
    ):
        if isinstance(schema, ResourceSchema):
            if schema.type != type:
                raise InvalidSchemaError(f"schema describes {schema.type}, not {type}")
            self.schema = schema
        else:
            self.schema = ResourceSchema.from_mapping(type, schema or {}, ref=ref)
        self.registry = registry if registry is not None else default_registry
        self.accessor = accessor if accessor is not None else DefaultRecordAccessor()
        self.renderer = renderer if renderer is not None else ReprRenderer()
