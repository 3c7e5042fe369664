import typing

import sqlalchemy as sa  # type: ignore
from sqlalchemy.orm.base import NO_VALUE  # type: ignore

from ...defaults import DefaultRecordAccessor
from ...serde.models import Missing, MissingType


class SQLARecordAccessor(DefaultRecordAccessor):
    """
    A :py:class:`jaysonapi.interfaces.RecordAccessor` for instances of SQLAlchemy mapped classes.

    Mapped attributes are read from the loaded state of the instance, so an
    attribute that has not been loaded (deferred columns, lazy relationships,
    expired attributes) is treated as absent and never triggers a query.
    Values that are not mapped instances are read like any other record.
    """

    def fetch(self, record: typing.Any, key: str) -> typing.Union[typing.Any, MissingType]:
        state = sa.inspect(record, raiseerr=False) if record is not None else None
        if state is None or not hasattr(state, "attrs"):
            return super().fetch(record, key)
        attr = state.attrs.get(key)
        if attr is None:
            # not a mapped attribute; plain properties are fine to read
            return getattr(record, key, Missing)
        value = attr.loaded_value
        if value is NO_VALUE:
            return Missing
        return value

    def is_empty(self, record: typing.Any) -> bool:
        state = sa.inspect(record, raiseerr=False) if record is not None else None
        if state is None or not hasattr(state, "attrs"):
            return super().is_empty(record)
        return False
