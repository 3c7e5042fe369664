"""
:py:mod:`jaysonapi.serde.renderer` module contains a set of classes in charge of rendering internal representation of JSON-API document to JSON.

Synopsis
--------

.. code-block:: python

   import json

   from jaysonapi.serde.renderer import ReprRenderer

   renderer = ReprRenderer()

   internal_repr = DocumentRepr(
       links=LinksRepr(
           self_="/people/1",
       ),
       data=ResourceRepr(
           type="person",
           ref="id",
           id=1,
           attributes=[
               ("name", "Joe"),
           ],
           relationships=[
               (
                   "address",
                   LinkageRepr(
                       data=[
                           ResourceIdRepr(type="address", ref="id", id=2),
                           ResourceIdRepr(type="address", ref="id", id=3),
                       ],
                   ),
               ),
           ],
       ),
   )

   print(json.dumps(renderer(internal_repr)))

"""

import base64
import collections.abc
import datetime
import decimal
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    DocumentRepr,
    ErrorRepr,
    LinkageRepr,
    LinksRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SourceRepr,
)
from .types import JSONScalar, MutableJSONObject

ERROR_MEMBER_NAMES = ("id", "status", "code", "title", "detail")


class TZLocalizer(typing.Protocol):
    def localize(self, dt: datetime.datetime) -> datetime.datetime:
        ...  # pragma: nocover


class ReprRenderer:
    _render_decimal_as_str: bool = True
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None

    def _dict_factory(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]):
        return OrderedDict(items)

    def _render_datetime(self: "ReprRenderer", repr_: AttributeValue) -> JSONScalar:
        _repr = typing.cast(datetime.datetime, repr_)
        if _repr.tzinfo is None:
            if self._assume_naive_timezone_as is None:
                return _repr.isoformat()
            if hasattr(self._assume_naive_timezone_as, "localize"):
                _repr = typing.cast(TZLocalizer, self._assume_naive_timezone_as).localize(_repr)
            else:
                _repr = _repr.replace(tzinfo=self._assume_naive_timezone_as)
        return _repr.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(self: "ReprRenderer", repr_: AttributeValue) -> JSONScalar:
        return typing.cast(datetime.date, repr_).isoformat()

    def _render_decimal(self: "ReprRenderer", repr_: AttributeValue) -> JSONScalar:
        _repr = typing.cast(decimal.Decimal, repr_)
        return str(_repr) if self._render_decimal_as_str else float(_repr)

    def _render_bytes(self: "ReprRenderer", repr_: AttributeValue) -> JSONScalar:
        return base64.b64encode(typing.cast(bytes, repr_)).decode("ascii")

    _supported_types: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        datetime.datetime: _render_datetime,
        datetime.date: _render_date,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
    }

    def _render_value(self, repr_: typing.Any) -> typing.Any:
        # fast pass
        r = self._supported_types.get(type(repr_))
        if r is not None:
            return r(self, repr_)

        for type_, r in self._supported_types.items():
            if isinstance(repr_, type_):
                return r(self, repr_)

        if isinstance(repr_, collections.abc.Mapping):
            return self._dict_factory((k, self._render_value(v)) for k, v in repr_.items())
        if isinstance(repr_, (list, tuple)):
            return [self._render_value(v) for v in repr_]
        # anything else is the caller's business
        return repr_

    def _render_resource_link(self, repr_: ResourceIdRepr) -> MutableJSONObject:
        return {
            "type": repr_.type,
            repr_.ref: repr_.id,
        }

    def _render_relationship(self, repr_: LinkageRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.data is None:
            retval["data"] = None
        elif isinstance(repr_.data, ResourceIdRepr):
            retval["data"] = self._render_resource_link(repr_.data)
        else:
            retval["data"] = [self._render_resource_link(item) for item in repr_.data]
        return retval

    def _render_resource(self, repr_: ResourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {
            "type": repr_.type,
            repr_.ref: repr_.id,
        }
        if repr_.attributes:
            retval["attributes"] = self._dict_factory(
                (k, self._render_value(v)) for k, v in repr_.attributes.items()
            )
        if repr_.relationships:
            retval["relationships"] = self._dict_factory(
                (k, self._render_relationship(v)) for k, v in repr_.relationships.items()
            )
        if repr_.links is not None and not repr_.links.is_empty():
            retval["links"] = self._render_links(repr_.links)
        return retval

    def _render_links(self, repr_: LinksRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.self_ is not None:
            retval["self"] = repr_.self_
        if repr_.related is not None:
            retval["related"] = repr_.related
        if repr_.pagination is not None:
            retval["pagination"] = repr_.pagination
        return retval

    def _render_source(self, repr_: SourceRepr) -> MutableJSONObject:
        return {
            name: getattr(repr_, name)
            for name in ("pointer", "parameter")
            if getattr(repr_, name) is not None
        }

    def _render_error(
        self, repr_: typing.Union[ErrorRepr, typing.Mapping[str, typing.Any]]
    ) -> typing.Any:
        # plain error objects are emitted untouched
        if not isinstance(repr_, ErrorRepr):
            return repr_
        retval: MutableJSONObject = {
            name: getattr(repr_, name)
            for name in ERROR_MEMBER_NAMES
            if getattr(repr_, name) is not None
        }
        if repr_.source is not None:
            retval["source"] = self._render_source(repr_.source)
        if repr_.links is not None and not repr_.links.is_empty():
            retval["links"] = self._render_links(repr_.links)
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_data(self, repr_: typing.Any) -> typing.Any:
        if repr_ is None:
            return None
        if isinstance(repr_, ResourceRepr):
            return self._render_resource(repr_)
        return [self._render_data(item) for item in repr_]

    def __call__(self, repr_: DocumentRepr) -> MutableJSONObject:
        if not isinstance(repr_, DocumentRepr):
            raise TypeError(f"cannot render {repr_!r}")
        retval: MutableJSONObject = {}
        if repr_.data is not Missing:
            retval["data"] = self._render_data(repr_.data)
        if repr_.included is not Missing:
            retval["included"] = [self._render_resource(r) for r in repr_.included]
        if repr_.meta is not None:
            retval["meta"] = repr_.meta
        if repr_.links is not None and not repr_.links.is_empty():
            retval["links"] = self._render_links(repr_.links)
        if repr_.errors is not None:
            retval["errors"] = [self._render_error(e) for e in repr_.errors]
        return retval

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
