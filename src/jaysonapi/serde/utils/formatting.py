import typing


def english_enumerate(items: typing.Iterable[str], conj: str = ", and ") -> str:
    """
    Joins ``items`` the way an English sentence lists things. ``conj`` is the
    joint before the last item; its serial comma is dropped for two items.

    >>> english_enumerate(["data", "errors", "meta"], conj=", or ")
    'data, errors, or meta'
    >>> english_enumerate(["data", "meta"])
    'data and meta'
    """
    buf = list(items)
    if not buf:
        return ""
    if len(buf) == 1:
        return buf[0]
    if len(buf) == 2:
        return buf[0] + conj.lstrip(",") + buf[1]
    return ", ".join(buf[:-1]) + conj + buf[-1]
