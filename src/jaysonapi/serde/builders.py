import abc
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    DocumentRepr,
    ErrorRepr,
    Included,
    LinkageRepr,
    LinksRepr,
    Missing,
    PrimaryData,
    Repr,
    ResourceRepr,
)
from .types import RefValue


class ReprBuilder(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def __call__(self) -> Repr:
        ...  # pragma: nocover


class NodeReprBuilder(ReprBuilder):
    links: LinksRepr

    def set_link(self, name: str, value: typing.Any) -> None:
        if name == "self":
            self.links.self_ = value
        elif name == "related":
            self.links.related = value
        elif name == "pagination":
            self.links.pagination = value
        else:
            raise KeyError(name)

    def _build_links(self) -> typing.Optional[LinksRepr]:
        return None if self.links.is_empty() else self.links

    def __init__(self):
        self.links = LinksRepr()


class ResourceReprBuilder(NodeReprBuilder):
    type: typing.Optional[str] = None
    ref: typing.Optional[str] = None
    id: RefValue = None
    attributes: "OrderedDict[str, AttributeValue]"
    relationships: "OrderedDict[str, LinkageRepr]"

    def set_type(self, type: str):
        self.type = type

    def set_identifier(self, ref: str, id: RefValue):
        self.ref = ref
        self.id = id

    def add_attribute(self, name: str, value: AttributeValue):
        self.attributes[name] = value

    def add_relationship(self, name: str, linkage: LinkageRepr):
        self.relationships[name] = linkage

    def __call__(self) -> ResourceRepr:
        assert self.type is not None
        assert self.ref is not None
        return ResourceRepr(
            type=self.type,
            ref=self.ref,
            id=self.id,
            attributes=tuple(self.attributes.items()),
            relationships=tuple(self.relationships.items()),
            links=self._build_links(),
        )

    def __init__(self):
        super().__init__()
        self.attributes = OrderedDict()
        self.relationships = OrderedDict()


class DocumentBuilder(NodeReprBuilder):
    data: PrimaryData
    included: Included
    meta: typing.Optional[typing.Mapping[str, typing.Any]]
    #: ``None`` until errors are supplied, which may be none at all.
    errors: typing.Optional[typing.List[typing.Union[ErrorRepr, typing.Mapping[str, typing.Any]]]]

    def set_errors(
        self, errors: typing.Iterable[typing.Union[ErrorRepr, typing.Mapping[str, typing.Any]]]
    ) -> None:
        self.errors = list(errors)

    def add_error(self, error: typing.Union[ErrorRepr, typing.Mapping[str, typing.Any]]) -> None:
        if self.errors is None:
            self.errors = []
        self.errors.append(error)

    def __call__(self) -> DocumentRepr:
        return DocumentRepr(
            data=self.data,
            included=self.included,
            meta=self.meta,
            links=self._build_links(),
            errors=None if self.errors is None else tuple(self.errors),
        )

    def __init__(self):
        super().__init__()
        self.data = Missing
        self.included = Missing
        self.meta = None
        self.errors = None
