import collections.abc
import typing

from .interfaces import RecordAccessor
from .serde.models import Missing, MissingType

DEFAULT_REF = "id"


class DefaultRecordAccessor(RecordAccessor):
    """
    Reads mappings by key and any other object by attribute.
    """

    def fetch(self, record: typing.Any, key: str) -> typing.Union[typing.Any, MissingType]:
        if record is None:
            return Missing
        if isinstance(record, collections.abc.Mapping):
            return record.get(key, Missing)
        return getattr(record, key, Missing)

    def is_empty(self, record: typing.Any) -> bool:
        if record is None:
            return True
        if isinstance(record, collections.abc.Mapping):
            return len(record) == 0
        return False
