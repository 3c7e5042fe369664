from .core import SQLARecordAccessor  # noqa
