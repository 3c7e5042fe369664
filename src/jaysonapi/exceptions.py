import abc
import typing

from .serde.utils import english_enumerate


class JaysonAPIException(Exception, metaclass=abc.ABCMeta):
    message: str

    def __str__(self):
        return self.message


class InvalidSchemaError(JaysonAPIException):
    message: str

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DataReferenceError(JaysonAPIException):
    """
    Raised when a record lacks a usable value for its serializer's ref key.
    """

    ref: str
    record: typing.Any

    @property
    def message(self):
        return f"{self.ref} property must be defined within data"

    def __init__(self, ref: str, record: typing.Any = None):
        super().__init__(ref)
        self.ref = ref
        self.record = record


class SerializerNotRegisteredError(JaysonAPIException):
    """
    Raised when a serializer referred to by name cannot be found in the registry.
    """

    name: str

    @property
    def message(self):
        return f"{self.name} is not a registered serializer."

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


class TopLevelDocumentError(JaysonAPIException):
    """
    Raised when a document would carry none of the mandatory top level members.
    """

    members: typing.Sequence[str]

    @property
    def message(self):
        return f"One of the following must be included: {english_enumerate(self.members, conj=', or ')}"

    def __init__(self, members: typing.Sequence[str]):
        super().__init__(members)
        self.members = tuple(members)
