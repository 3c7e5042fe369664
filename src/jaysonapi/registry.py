import logging
import typing

from .interfaces import SerializerRegistry

logger = logging.getLogger(__name__)


class Registry(SerializerRegistry):
    """
    An in-memory :py:class:`SerializerRegistry`. Names are lower-cased before
    they are stored or looked up.
    """

    _serializers: typing.Dict[str, typing.Any]

    def register(self, name: str, serializer: typing.Any) -> None:
        key = name.lower()
        if key in self._serializers:
            logger.debug("replacing serializer registered as %r", key)
        self._serializers[key] = serializer

    def get(self, name: str) -> typing.Optional[typing.Any]:
        return self._serializers.get(name.lower())

    def has(self, name: str) -> bool:
        return name.lower() in self._serializers

    def remove(self, name: str) -> None:
        self._serializers.pop(name.lower(), None)

    def all(self) -> typing.Dict[str, typing.Any]:
        return dict(self._serializers)

    def empty(self) -> None:
        logger.debug("emptying registry of %d serializer(s)", len(self._serializers))
        self._serializers.clear()

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __init__(self, serializers: typing.Optional[typing.Mapping[str, typing.Any]] = None):
        self._serializers = {}
        if serializers is not None:
            for name, serializer in serializers.items():
                self.register(name, serializer)


#: the registry serializers consult unless they are given their own.
default_registry = Registry()
