import typing

JSONScalar = typing.Union[bool, int, float, str, None]
JSONArray = typing.Sequence[typing.Any]
MutableJSONArray = typing.MutableSequence[typing.Any]
JSONObject = typing.Mapping[str, typing.Any]
MutableJSONObject = typing.MutableMapping[str, typing.Any]
JSONValue = typing.Union[JSONScalar, JSONArray, JSONObject]

# identifiers are emitted exactly as found on the record
RefValue = typing.Any
