from .formatting import english_enumerate  # noqa
