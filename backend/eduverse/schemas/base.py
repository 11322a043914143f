from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordResponse(BaseModel):
    """Stored record as exposed on the wire: ``id`` plus camelCase fields"""
    id: int
    created_at: str

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
