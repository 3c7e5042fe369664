import pytest


class TestResourceReprBuilder:
    @pytest.fixture
    def target(self):
        from ..builders import ResourceReprBuilder

        return ResourceReprBuilder

    def test_basic(self, target):
        from ..models import LinkageRepr, LinksRepr, ResourceIdRepr, ResourceRepr

        b = target()
        b.set_type("foos")
        b.set_identifier("uuid", "1")
        b.add_attribute("a", 1)
        b.add_attribute("b", 2)
        b.add_relationship("bar", LinkageRepr(data=ResourceIdRepr(type="bars", ref="id", id=2)))
        b.set_link("self", "/foos/1")
        assert b() == ResourceRepr(
            type="foos",
            ref="uuid",
            id="1",
            attributes=(
                ("a", 1),
                ("b", 2),
            ),
            relationships=(("bar", LinkageRepr(data=ResourceIdRepr(type="bars", ref="id", id=2))),),
            links=LinksRepr(self_="/foos/1"),
        )

    def test_no_links(self, target):
        b = target()
        b.set_type("foos")
        b.set_identifier("id", 1)
        assert b().links is None

    def test_unknown_link(self, target):
        with pytest.raises(KeyError):
            target().set_link("first", "/foos?page=1")


class TestDocumentBuilder:
    @pytest.fixture
    def target(self):
        from ..builders import DocumentBuilder

        return DocumentBuilder

    def test_basic(self, target):
        from ..models import DocumentRepr, LinksRepr, ResourceRepr

        b = target()
        b.set_link("self", "/foos/1")
        b.data = ResourceRepr(type="foos", ref="id", id="1", attributes=(("a", 1),))
        b.meta = {"count": 1}
        assert b() == DocumentRepr(
            links=LinksRepr(self_="/foos/1"),
            data=ResourceRepr(type="foos", ref="id", id="1", attributes=(("a", 1),)),
            meta={"count": 1},
        )

    def test_errors(self, target):
        from ..models import ErrorRepr

        b = target()
        b.add_error(ErrorRepr(status="404"))
        b.add_error({"status": "500"})
        assert b().errors == (ErrorRepr(status="404"), {"status": "500"})

    def test_nothing(self, target):
        from ...exceptions import TopLevelDocumentError

        with pytest.raises(TopLevelDocumentError):
            target()()


class TestDocumentRepr:
    @pytest.fixture
    def target(self):
        from ..models import DocumentRepr

        return DocumentRepr

    @pytest.fixture
    def resource(self):
        from ..models import ResourceRepr

        return ResourceRepr(type="foos", ref="id", id=1)

    def test_requires_data_errors_or_meta(self, target):
        from ...exceptions import TopLevelDocumentError
        from ..models import LinksRepr

        with pytest.raises(TopLevelDocumentError) as e:
            target()
        assert e.value.members == ("data", "errors", "meta")
        assert str(e.value) == "One of the following must be included: data, errors, or meta"
        with pytest.raises(TopLevelDocumentError):
            target(meta={})
        with pytest.raises(TopLevelDocumentError):
            target(errors=[])
        with pytest.raises(TopLevelDocumentError):
            target(links=LinksRepr(self_="/foos"))

        assert target(data=None).data is None
        assert target(meta={"a": 1}).meta == {"a": 1}
        assert target(errors=[{"status": "500"}]).errors == ({"status": "500"},)

    def test_included_requires_data(self, target, resource):
        from ..models import Missing

        assert target(data=resource, included=(resource,)).included == (resource,)
        assert target(data=[resource], included=(resource,)).included == (resource,)
        assert target(data=None, included=(resource,)).included is Missing
        assert target(data=(), included=(resource,)).included is Missing
        assert target(meta={"a": 1}, included=(resource,)).included is Missing


def test_missing():
    from ..models import Missing, MissingType

    assert not Missing
    assert repr(Missing) == "Missing"
    assert Missing is not None
    with pytest.raises(TypeError):
        MissingType()


def test_empty_errors_are_kept():
    from ..builders import DocumentBuilder
    from ..models import DocumentRepr, ResourceRepr

    resource = ResourceRepr(type="foos", ref="id", id=1)
    assert DocumentRepr(data=resource).errors is None
    assert DocumentRepr(data=resource, errors=[]).errors == ()

    b = DocumentBuilder()
    b.data = resource
    assert b().errors is None
    b.set_errors([])
    assert b().errors == ()


@pytest.mark.parametrize(
    "items, conj, expected",
    [
        ([], ", and ", ""),
        (["data"], ", and ", "data"),
        (["data", "meta"], ", and ", "data and meta"),
        (["data", "meta"], ", or ", "data or meta"),
        (["data", "errors", "meta"], ", or ", "data, errors, or meta"),
    ],
)
def test_english_enumerate(items, conj, expected):
    from ..utils import english_enumerate

    assert english_enumerate(items, conj=conj) == expected
