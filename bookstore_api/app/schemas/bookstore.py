"""
Pydantic schemas for bookstore records.

A record has three fields, stored and exposed under the capitalised
names ``Author``, ``Title`` and ``Pages``, plus the store-assigned
``_id``.  The lowercase attribute names are accepted on input as
well.

``BookstoreWrite`` is the request body for both add and update.  All
of its fields are optional at the parsing layer: the add operation
enforces presence itself, while the update operation writes whatever
the body supplies, so a field left out of an update body is removed
from the stored record.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Attribute name -> stored/wire name, in the order errors are reported.
FIELD_ALIASES = {"author": "Author", "title": "Title", "pages": "Pages"}


class BookstoreWrite(BaseModel):
    """Schema for adding or updating a bookstore record.

    Numbers given for ``Author`` or ``Title`` are stored as strings.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    author: Optional[str] = Field(None, alias="Author", description="Author of the book")
    title: Optional[str] = Field(None, alias="Title", description="Title of the book")
    pages: Optional[int] = Field(None, alias="Pages", description="Number of pages")

    def missing_fields(self) -> List[str]:
        """Return the stored names of fields that are absent or null."""
        return [alias for name, alias in FIELD_ALIASES.items() if getattr(self, name) is None]

    def to_document(self) -> Dict[str, Any]:
        """Return the MongoDB document body, leaving out absent fields."""
        return {
            alias: getattr(self, name)
            for name, alias in FIELD_ALIASES.items()
            if getattr(self, name) is not None
        }


class BookstoreRead(BaseModel):
    """Schema for reading a bookstore record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    author: Optional[str] = Field(None, alias="Author")
    title: Optional[str] = Field(None, alias="Title")
    # Documents written by other clients may carry non-integral page counts.
    pages: Optional[Union[int, float]] = Field(None, alias="Pages")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "BookstoreRead":
        return cls(
            _id=str(document["_id"]),
            Author=document.get("Author"),
            Title=document.get("Title"),
            Pages=document.get("Pages"),
        )
