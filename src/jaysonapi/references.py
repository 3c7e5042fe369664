"""
A relationship names the serializer of its related records in one of three
ways, each modelled as a :py:class:`SerializerReference` variant:

* :py:class:`InstanceSerializerReference`: a serializer object, or a
  :py:class:`jaysonapi.deferred.Deferred` yielding one.
* :py:class:`NamedSerializerReference`: a name looked up in the owner's registry.
* :py:class:`InlineSerializerReference`: a schema literal from which a
  serializer is built on demand.

References are resolved only when a document is being serialized, so names
registered after the owning serializer was declared are found as well.
"""

import abc
import collections.abc
import logging
import typing

from .deferred import Deferred, resolve
from .exceptions import InvalidSchemaError, SerializerNotRegisteredError

logger = logging.getLogger(__name__)


class SerializerReference(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def resolve(self, owner: "Serializer") -> "Serializer":
        """
        Returns the serializer this reference designates.

        :param Serializer owner: the serializer declaring the relationship.
        """
        ...  # pragma: nocover


class InstanceSerializerReference(SerializerReference):
    serializer: typing.Union["Serializer", Deferred["Serializer"]]

    def resolve(self, owner: "Serializer") -> "Serializer":
        return resolve(self.serializer)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.serializer!r})"

    def __init__(self, serializer: typing.Union["Serializer", Deferred["Serializer"]]):
        self.serializer = serializer


class NamedSerializerReference(SerializerReference):
    name: str

    def resolve(self, owner: "Serializer") -> "Serializer":
        serializer = owner.registry.get(self.name)
        if serializer is None:
            logger.debug("no serializer registered as %r", self.name)
            raise SerializerNotRegisteredError(self.name)
        return serializer

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def __init__(self, name: str):
        self.name = name


class InlineSerializerReference(SerializerReference):
    """
    Builds a serializer from a schema literal such as

    .. code-block:: python

       {
           "type": "phone",
           "attributes": ["number"],
           "config": {"ref": "uuid"},
       }

    Unless ``config`` says otherwise, the built serializer shares the registry,
    the record accessor and the renderer of the serializer owning the relationship.
    """

    schema: typing.Mapping[str, typing.Any]
    _serializer: typing.Optional["Serializer"] = None

    def resolve(self, owner: "Serializer") -> "Serializer":
        if self._serializer is None:
            from .serializer import Serializer

            config = dict(self.schema.get("config") or {})
            config.setdefault("registry", owner.registry)
            config.setdefault("accessor", owner.accessor)
            config.setdefault("renderer", owner.renderer)
            logger.debug("building inline serializer for %r", self.schema["type"])
            self._serializer = Serializer(self.schema["type"], self.schema, **config)
        return self._serializer

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.schema.get('type')!r})"

    def __init__(self, schema: typing.Mapping[str, typing.Any]):
        if "type" not in schema:
            raise InvalidSchemaError("an inline serializer schema must specify its type")
        self.schema = schema


def to_serializer_reference(value: typing.Any) -> SerializerReference:
    from .serializer import Serializer

    if isinstance(value, SerializerReference):
        return value
    elif isinstance(value, (Serializer, Deferred)):
        return InstanceSerializerReference(value)
    elif isinstance(value, str):
        return NamedSerializerReference(value)
    elif isinstance(value, collections.abc.Mapping):
        return InlineSerializerReference(value)
    else:
        raise InvalidSchemaError(f"cannot refer to a serializer by {value!r}")


if typing.TYPE_CHECKING:
    from .serializer import Serializer  # noqa: E402
