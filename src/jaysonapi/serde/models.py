"""
Classes in :py:mod:`jaysonapi.serde.models` are abstract representation of JSON:API document elements.

Unlike plain JSON:API, the member holding a resource's identifier is not
necessarily ``id``; every identifier-carrying representation remembers the
name of its ref key in ``ref`` and the identifier itself in ``id``.
"""

import collections.abc
import dataclasses
import datetime
import decimal
import logging
import typing
from collections import OrderedDict

from ..exceptions import TopLevelDocumentError
from .types import RefValue

logger = logging.getLogger(__name__)


class MissingType:
    """
    The type of :py:data:`Missing`, which marks a member that was not supplied
    at all, as opposed to one explicitly set to ``None``.
    """

    def __bool__(self):
        return False

    def __repr__(self):
        return "Missing"

    def __init__(self):
        raise TypeError("Not directly instantiable")


Missing = object.__new__(MissingType)


@dataclasses.dataclass
class Repr:
    """
    The base class for any model objects.
    """


@dataclasses.dataclass
class LinksRepr(Repr):
    """
    :py:class:`LinksRepr` class represents a ``links`` node of JSON:API.

    Ref.

    * `Document Links <https://jsonapi.org/format/#document-links>`_
    * `Related Resource Links <https://jsonapi.org/format/#document-resource-object-related-resource-links>`_
    """

    self_: typing.Optional[str] = None
    related: typing.Optional[str] = None
    pagination: typing.Any = None

    def is_empty(self) -> bool:
        return self.self_ is None and self.related is None and self.pagination is None


@dataclasses.dataclass
class ResourceIdRepr(Repr):
    """
    Instances of :py:class:`ResourceIdRepr` represent `Resource Identifier Objects <https://jsonapi.org/format/#document-resource-identifier-objects>`_

    :param str type: a value for ``type`` property.
    :param str ref: the name of the member carrying the identifier.
    :param Any id: the identifier.
    """

    type: str
    ref: str
    id: RefValue


LinkageData = typing.Union[None, ResourceIdRepr, typing.Sequence[ResourceIdRepr]]


@dataclasses.dataclass
class LinkageRepr(Repr):
    """
    :py:class:`LinkageRepr` represents a `Resource Linkage <https://jsonapi.org/format/#document-resource-object-linkage>`_

    A to-many linkage with a single member collapses to a bare identifier,
    so ``data`` holds a sequence only when two or more identifiers are linked.
    """

    data: LinkageData = None


AttributeScalar = typing.Union[
    datetime.datetime, datetime.date, decimal.Decimal, str, int, float, bytes, None
]
AttributeValue = typing.Union[
    typing.Sequence[AttributeScalar],
    typing.Mapping[str, AttributeScalar],
    AttributeScalar,
]


@dataclasses.dataclass(init=False)
class ResourceRepr(Repr):
    """
    :py:class:`ResourceRepr` class represents a `Resource Object <https://jsonapi.org/format/#document-resource-objects>`_.
    """

    type: str
    ref: str
    id: RefValue
    attributes: typing.Mapping[str, AttributeValue] = dataclasses.field(default_factory=OrderedDict)
    relationships: typing.Mapping[str, LinkageRepr] = dataclasses.field(default_factory=OrderedDict)
    links: typing.Optional[LinksRepr] = None

    def __init__(
        self,
        *,
        type: str,
        ref: str,
        id: RefValue,
        attributes: typing.Iterable[typing.Tuple[str, AttributeValue]] = (),
        relationships: typing.Iterable[typing.Tuple[str, LinkageRepr]] = (),
        links: typing.Optional[LinksRepr] = None,
    ):
        """
        :param str type: a value for ``type`` property.
        :param str ref: the name of the member carrying the identifier.
        :param Any id: the identifier.
        :param Iterable[Tuple[str, AttributeValue]] attributes: a sequence of tuples each of which represents a key-value pair of an attribute.
        :param Iterable[Tuple[str, LinkageRepr]] relationships: a sequence of tuples each of which represent a key-value pair of a relationship.
        :param Optional[LinksRepr] links: a value for ``links`` property.
        """
        self.type = type
        self.ref = ref
        self.id = id
        self.attributes = OrderedDict(attributes)
        self.relationships = OrderedDict(relationships)
        self.links = links


@dataclasses.dataclass
class SourceRepr(Repr):
    """
    :py:class:`SourceRepr` represents a value for the ``source`` property of an `Error Object <https://jsonapi.org/format/#error-objects>`_.
    """

    pointer: typing.Optional[str] = None
    parameter: typing.Optional[str] = None


@dataclasses.dataclass
class ErrorRepr(Repr):
    id: typing.Optional[str] = None
    status: typing.Optional[str] = None
    code: typing.Optional[str] = None
    title: typing.Optional[str] = None
    detail: typing.Optional[str] = None
    source: typing.Optional[SourceRepr] = None
    links: typing.Optional[LinksRepr] = None
    meta: typing.Optional[typing.Mapping[str, typing.Any]] = None


PrimaryData = typing.Union[ResourceRepr, typing.Sequence[ResourceRepr], None, MissingType]
Included = typing.Union[typing.Sequence[ResourceRepr], MissingType]


def is_empty_data(data: PrimaryData) -> bool:
    if data is Missing or data is None:
        return True
    return isinstance(data, collections.abc.Sequence) and len(data) == 0


@dataclasses.dataclass(init=False)
class DocumentRepr(Repr):
    """
    :py:class:`DocumentRepr` represents a `Top Level <https://jsonapi.org/format/#document-top-level>`_ document.

    The constructor enforces the structural rules of a top level document:

    * at least one of ``data``, ``errors`` or ``meta`` must be present,
      otherwise :py:class:`jaysonapi.exceptions.TopLevelDocumentError` is raised.
    * ``included`` is discarded unless ``data`` is present and non-empty.
    """

    data: PrimaryData = Missing
    included: Included = Missing
    meta: typing.Optional[typing.Mapping[str, typing.Any]] = None
    links: typing.Optional[LinksRepr] = None
    errors: typing.Optional[
        typing.Sequence[typing.Union[ErrorRepr, typing.Mapping[str, typing.Any]]]
    ] = None

    def __init__(
        self,
        *,
        data: PrimaryData = Missing,
        included: Included = Missing,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        links: typing.Optional[LinksRepr] = None,
        errors: typing.Optional[
            typing.Sequence[typing.Union[ErrorRepr, typing.Mapping[str, typing.Any]]]
        ] = None,
    ):
        """
        Either errors, meta, or data must take a non-empty value.

        :param data: a :py:class:`ResourceRepr`, a sequence of them, ``None`` or :py:data:`Missing`.
        :param included: a sequence of :py:class:`ResourceRepr` or :py:data:`Missing`.
        :param Optional[Mapping[str, Any]] meta: a dictionary containing user-defined information.
        :param Optional[LinksRepr] links: a value for ``links`` property.
        :param errors: a sequence of :py:class:`ErrorRepr` or plain error objects; an empty
                       sequence is kept as supplied.
        """
        if data is Missing and not errors and not meta:
            raise TopLevelDocumentError(("data", "errors", "meta"))
        if is_empty_data(data) and included:
            logger.debug("dropping included resources as the document carries no primary data")
            included = Missing
        self.data = data
        self.included = included
        self.meta = meta
        self.links = links
        self.errors = None if errors is None else tuple(errors)
