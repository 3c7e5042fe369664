"""
This module contains a series of interface definitions for the collaborators
the serializer relies on: the way records are read, the way related records
are matched against their owners, and the registry in which serializers are
looked up by name.

"""
import abc
import enum
import typing

from .serde.models import LinkageRepr, MissingType


class MatcherKind(enum.Enum):
    """
    Tells which value of the owner record a :py:class:`RelationshipMatcher` is handed.
    """

    #: the matcher receives the whole owner record.
    BELONGS_TO = "BelongsTo"
    #: the matcher receives only the owner's ref value.
    HAS_MANY = "HasMany"


class RelatedSchema(typing.Protocol):
    type: str
    ref: str


class RecordAccessor(metaclass=abc.ABCMeta):
    """
    A :py:class:`RecordAccessor` knows how to read values off domain records.
    """

    @abc.abstractmethod
    def fetch(self, record: typing.Any, key: str) -> typing.Union[typing.Any, MissingType]:
        """
        Fetches the value stored under ``key`` in the record.

        :param Any record: a domain record.
        :param str key: the name of the value.
        :return: the value, or :py:data:`jaysonapi.serde.models.Missing` if the record doesn't have it.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def is_empty(self, record: typing.Any) -> bool:
        """
        Tells if the record holds nothing at all, in which case it is serialized as ``null``.
        """
        ...  # pragma: nocover


class RelationshipMatcher(metaclass=abc.ABCMeta):
    """
    A :py:class:`RelationshipMatcher` decides which candidate records are related
    to an owner record and builds the linkage for them.
    """

    @property
    @abc.abstractmethod
    def kind(self) -> MatcherKind:
        ...  # pragma: nocover

    @abc.abstractmethod
    def __call__(
        self,
        related_schema: RelatedSchema,
        owner: typing.Any,
        candidate: typing.Any,
        accessor: typing.Optional[RecordAccessor] = None,
    ) -> typing.Optional[LinkageRepr]:
        """
        Matches the candidate(s) against the owner.

        :param RelatedSchema related_schema: describes the type and ref key of the candidates.
        :param Any owner: either the owner record or its ref value, depending on :py:attr:`kind`.
        :param Any candidate: a candidate record, or a sequence of them.
        :param Optional[RecordAccessor] accessor: reads values off the records.
        :return: a :py:class:`LinkageRepr`, or ``None`` if nothing matches.
        """
        ...  # pragma: nocover


class SerializerRegistry(metaclass=abc.ABCMeta):
    """
    A :py:class:`SerializerRegistry` stores serializers under case-insensitive names.
    """

    @abc.abstractmethod
    def register(self, name: str, serializer: typing.Any) -> None:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get(self, name: str) -> typing.Optional[typing.Any]:
        ...  # pragma: nocover

    @abc.abstractmethod
    def has(self, name: str) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def remove(self, name: str) -> None:
        ...  # pragma: nocover

    @abc.abstractmethod
    def all(self) -> typing.Dict[str, typing.Any]:
        ...  # pragma: nocover

    @abc.abstractmethod
    def empty(self) -> None:
        ...  # pragma: nocover
