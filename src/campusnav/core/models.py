"""
campusnav.core.models - Core Data Models
==========================================

The pydantic models that flow between the stores, the directory and the
HTTP layer.

Model Overview:
    ImageRecord        → one campus image (name → encoded payload)
    ClassroomRecord    → one classroom and the names of its route images
    ResolvedClassroom  → a classroom with image names replaced by payloads

Wire Format:
    The startup payloads and the HTTP responses use the historical field
    names, which differ from the attribute names used in Python:

        ImageRecord.name             ↔ "image_name"
        ImageRecord.payload          ↔ "image"
        ClassroomRecord.name         ↔ "classroom"
        ClassroomRecord.image_refs   ↔ "images"
        ResolvedClassroom.name       ↔ "classroom"

    Models accept either spelling on input and always dump the wire names.

Records are frozen: once parsed they are never mutated, only replaced
wholesale by a reload.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


# =============================================================================
# Image Record
# =============================================================================
class ImageRecord(BaseModel):
    """A campus image, keyed by name.

    The payload is opaque to campusnav (base64 in practice); it is stored
    and returned byte-for-byte.

    Example:
        >>> ImageRecord.model_validate({"image_name": "UK3-left.png", "image": "iVBOR..."})
        ImageRecord(name='UK3-left.png', payload='iVBOR...')
    """

    model_config = _RECORD_CONFIG

    name: str = Field(
        alias="image_name",
        description="Unique image name, referenced from ClassroomRecord.image_refs",
    )
    payload: str = Field(
        alias="image",
        description="Encoded image bytes (e.g. base64), returned as-is",
    )


# =============================================================================
# Classroom Record
# =============================================================================
class ClassroomRecord(BaseModel):
    """A classroom and the ordered names of the images that lead to it.

    ``image_refs`` keeps order and duplicates: the images are shown in this
    sequence, and the same picture may legitimately appear twice on a route.
    """

    model_config = _RECORD_CONFIG

    name: str = Field(
        alias="classroom",
        description="Unique classroom name (case-sensitive)",
    )
    description: str = Field(
        description="Human-readable directions or description",
    )
    image_refs: tuple[str, ...] = Field(
        alias="images",
        description="Ordered image names, resolved against the image store at read time",
    )


# =============================================================================
# Resolved Classroom (view type, never persisted)
# =============================================================================
class ResolvedClassroom(BaseModel):
    """A classroom whose image references have been replaced by payloads.

    Attributes:
        name: Classroom name.
        description: Classroom description.
        images: Payloads of the referenced images that resolved, in
            ``image_refs`` order.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="classroom")
    description: str
    images: list[str] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize to the wire JSON: ``{"classroom", "description", "images"}``."""
        return self.model_dump_json(by_alias=True)


_NAME_LIST = TypeAdapter(list[str])


def serialize_classroom_list(names: list[str]) -> str:
    """Serialize a list of classroom names to a JSON array string."""
    return _NAME_LIST.dump_json(names).decode("utf-8")
