from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for all backend payloads.

    The backend speaks camelCase JSON with numeric ids; models expose
    snake_case attributes and string ids. Unknown fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """Dump as the camelCase JSON object the backend expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
