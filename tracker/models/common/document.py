from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """
    Base class for documents stored in MongoDB.

    Subclasses declare the collection they live in through `collection_name`.
    The document key is exposed as `id` and persisted as `_id`.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    collection_name: ClassVar[str]

    id: Optional[str] = Field(default=None, alias="_id")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
