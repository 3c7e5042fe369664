from .identity import identity_key, is_collection, is_meta, loosely_equal  # noqa
