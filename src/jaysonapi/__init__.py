from .deferred import Deferred  # noqa
from .exceptions import (  # noqa
    DataReferenceError,
    InvalidSchemaError,
    JaysonAPIException,
    SerializerNotRegisteredError,
    TopLevelDocumentError,
)
from .interfaces import MatcherKind, RecordAccessor, RelationshipMatcher  # noqa
from .models import Relationship, ResourceSchema  # noqa
from .registry import Registry, default_registry  # noqa
from .relationships import BelongsTo, HasMany  # noqa
from .serde.models import Missing  # noqa
from .serializer import Serializer  # noqa
