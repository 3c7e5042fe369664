import pytest

from ..interfaces import MatcherKind
from ..models import ResourceSchema
from ..serde.models import LinkageRepr, ResourceIdRepr


@pytest.fixture
def person_schema():
    return ResourceSchema("person")


@pytest.fixture
def address_schema():
    return ResourceSchema("address")


class TestBelongsTo:
    @pytest.fixture
    def target(self):
        from ..relationships import BelongsTo

        return BelongsTo

    def test_kind(self, target):
        assert target("personId").kind is MatcherKind.BELONGS_TO

    def test_single(self, target, person_schema):
        result = target("personId")(person_schema, {"id": 1, "personId": 3}, {"id": 3})
        assert result == LinkageRepr(data=ResourceIdRepr(type="person", ref="id", id=3))

    def test_no_match(self, target, person_schema):
        assert target("personId")(person_schema, {"id": 1, "personId": 3}, {"id": 4}) is None

    def test_empty_candidates(self, target, person_schema):
        assert target("personId")(person_schema, {"id": 1, "personId": 3}, []) is None

    def test_array_with_single_match_is_collapsed(self, target, person_schema):
        result = target("personId")(
            person_schema,
            {"id": 1, "personId": 3},
            [{"id": 2}, {"id": 3}, {"id": 4}],
        )
        assert result == LinkageRepr(data=ResourceIdRepr(type="person", ref="id", id=3))

    def test_loose_equality(self, target, person_schema):
        result = target("personId")(person_schema, {"id": 1, "personId": "3"}, {"id": 3})
        assert result == LinkageRepr(data=ResourceIdRepr(type="person", ref="id", id=3))

    def test_missing_foreign_key(self, target, person_schema):
        assert target("personId")(person_schema, {"id": 1}, {"id": 3}) is None
        assert target("personId")(person_schema, {"id": 1, "personId": None}, {"name": "x"}) is None

    def test_distinct_strings(self, target, person_schema):
        assert target("personId")(person_schema, {"id": 1, "personId": "007"}, {"id": "7"}) is None
        assert target("personId")(person_schema, {"id": 1, "personId": "1.0"}, {"id": "1"}) is None
        result = target("personId")(person_schema, {"id": 1, "personId": "007"}, {"id": 7})
        assert result == LinkageRepr(data=ResourceIdRepr(type="person", ref="id", id=7))

    def test_booleans(self, target, person_schema):
        assert target("personId")(person_schema, {"id": 1, "personId": True}, {"id": 1}) is None

    def test_custom_ref(self, target):
        schema = ResourceSchema("person", ref="uuid")
        result = target("personUuid")(
            schema, {"id": 1, "personUuid": "abc"}, [{"uuid": "abc"}, {"uuid": "def"}]
        )
        assert result == LinkageRepr(data=ResourceIdRepr(type="person", ref="uuid", id="abc"))


class TestHasMany:
    @pytest.fixture
    def target(self):
        from ..relationships import HasMany

        return HasMany

    def test_kind(self, target):
        assert target("personId").kind is MatcherKind.HAS_MANY

    def test_single(self, target, address_schema):
        result = target("personId")(address_schema, 1, {"personId": 1, "id": 1})
        assert result == LinkageRepr(data=ResourceIdRepr(type="address", ref="id", id=1))

    def test_array(self, target, address_schema):
        result = target("personId")(
            address_schema,
            1,
            [
                {"personId": 1, "id": 2},
                {"personId": 1, "id": 3},
                {"personId": 2, "id": 4},
            ],
        )
        assert result == LinkageRepr(
            data=(
                ResourceIdRepr(type="address", ref="id", id=2),
                ResourceIdRepr(type="address", ref="id", id=3),
            )
        )

    def test_array_with_custom_ref(self, target):
        result = target("personId")(
            ResourceSchema("address", ref="uuid"),
            1,
            [
                {"personId": 1, "uuid": 2},
                {"personId": 1, "uuid": 3},
                {"personId": 1, "uuid": 4},
                {"personId": 2, "uuid": 5},
            ],
        )
        assert result is not None
        assert [i.id for i in result.data] == [2, 3, 4]
        assert all(i.ref == "uuid" for i in result.data)

    def test_duplicates_are_dropped(self, target, address_schema):
        result = target("personId")(
            address_schema,
            1,
            [
                {"personId": 1, "id": 2},
                {"personId": 1, "id": 2},
                {"personId": 1, "id": "2"},
            ],
        )
        assert result == LinkageRepr(data=ResourceIdRepr(type="address", ref="id", id=2))

    def test_distinct_strings_are_kept(self, target, address_schema):
        result = target("personId")(
            address_schema,
            1,
            [
                {"personId": 1, "id": "007"},
                {"personId": 1, "id": "7"},
                {"personId": 1, "id": "9007199254740993"},
                {"personId": 1, "id": "9007199254740992"},
            ],
        )
        assert result is not None
        assert [i.id for i in result.data] == ["007", "7", "9007199254740993", "9007199254740992"]

    def test_empty_candidates(self, target, address_schema):
        assert target("personId")(address_schema, 1, []) is None

    def test_no_match(self, target, address_schema):
        assert target("personId")(address_schema, 1, [{"personId": 2, "id": 4}]) is None

    def test_missing_foreign_key(self, target, address_schema):
        assert target("personId")(address_schema, 1, {"id": 4}) is None

    def test_many_to_many(self, target):
        tags = ResourceSchema("tag")
        result = target("articleIds")(
            tags,
            "7",
            [
                {"id": 1, "articleIds": [7, 8]},
                {"id": 2, "articleIds": [8]},
                {"id": 3, "articleIds": (9, 7)},
            ],
        )
        assert result == LinkageRepr(
            data=(
                ResourceIdRepr(type="tag", ref="id", id=1),
                ResourceIdRepr(type="tag", ref="id", id=3),
            )
        )

    def test_candidate_without_ref(self, target, address_schema):
        assert target("personId")(address_schema, 1, {"personId": 1}) is None

    def test_objects(self, target, address_schema):
        class Address:
            def __init__(self, id, personId):
                self.id = id
                self.personId = personId

        result = target("personId")(address_schema, 1, [Address(2, 1), Address(3, 5)])
        assert result == LinkageRepr(data=ResourceIdRepr(type="address", ref="id", id=2))


def test_merge_linkages():
    from ..relationships import merge_linkages

    a = ResourceIdRepr(type="a", ref="id", id=1)
    b = ResourceIdRepr(type="b", ref="id", id=1)
    assert merge_linkages([]) is None
    assert merge_linkages([None, LinkageRepr(data=None)]) is None
    assert merge_linkages([LinkageRepr(data=a), None, LinkageRepr(data=a)]) == LinkageRepr(data=a)
    assert merge_linkages([LinkageRepr(data=a), LinkageRepr(data=(b, a))]) == LinkageRepr(
        data=(a, b)
    )
