from types import MappingProxyType
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Frozen model that serialises with camelCase keys when ``by_alias=True``.

    ``frozen`` only blocks attribute assignment, so collection fields use
    tuples or the read-only maps below.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Validated as a dict, stored as a read-only view, dumped as a plain dict.
ScoreMap = Annotated[
    dict[str, int],
    AfterValidator(MappingProxyType),
    PlainSerializer(dict, return_type=dict[str, int]),
]
TextMap = Annotated[
    dict[str, str],
    AfterValidator(MappingProxyType),
    PlainSerializer(dict, return_type=dict[str, str]),
]
