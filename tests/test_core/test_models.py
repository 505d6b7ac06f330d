"""
Tests for campusnav.core.models
=================================

    - Wire names and Python names are both accepted on input
    - Dumps always use the wire names
    - Records are immutable
    - ResolvedClassroom / name list serialization
"""

import pytest
from pydantic import ValidationError

from campusnav.core.models import (
    ClassroomRecord,
    ImageRecord,
    ResolvedClassroom,
    serialize_classroom_list,
)


class TestImageRecord:

    def test_from_wire_names(self) -> None:
        record = ImageRecord.model_validate({"image_name": "a.png", "image": "enc"})
        assert record.name == "a.png"
        assert record.payload == "enc"

    def test_from_field_names(self) -> None:
        record = ImageRecord(name="a.png", payload="enc")
        assert record.model_dump(by_alias=True) == {"image_name": "a.png", "image": "enc"}

    def test_missing_payload_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ImageRecord.model_validate({"image_name": "a.png"})

    def test_non_string_payload_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ImageRecord.model_validate({"image_name": "a.png", "image": 42})

    def test_is_frozen(self) -> None:
        record = ImageRecord(name="a.png", payload="enc")
        with pytest.raises(ValidationError):
            record.payload = "other"  # type: ignore[misc]


class TestClassroomRecord:

    def test_image_refs_keep_order_and_duplicates(self) -> None:
        record = ClassroomRecord.model_validate(
            {"classroom": "A", "description": "d", "images": ["x", "y", "x"]}
        )
        assert record.image_refs == ("x", "y", "x")

    def test_missing_images_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClassroomRecord.model_validate({"classroom": "A", "description": "d"})

    def test_empty_images_allowed(self) -> None:
        record = ClassroomRecord.model_validate({"classroom": "A", "description": "d", "images": []})
        assert record.image_refs == ()

    def test_json_dump_uses_wire_names(self) -> None:
        record = ClassroomRecord(name="A", description="d", image_refs=("x",))
        assert record.model_dump(by_alias=True, mode="json") == {
            "classroom": "A",
            "description": "d",
            "images": ["x"],
        }

    def test_missing_description_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClassroomRecord.model_validate({"classroom": "A", "images": []})

    def test_unknown_fields_ignored(self) -> None:
        """Stored documents may carry backend fields such as ``_id``."""
        record = ClassroomRecord.model_validate(
            {"_id": "65f0", "classroom": "A", "description": "d", "images": []}
        )
        assert record.name == "A"


class TestSerialization:

    def test_resolved_classroom_to_json(self) -> None:
        resolved = ResolvedClassroom(name="R1", description="d", images=["enc"])
        assert resolved.to_json() == '{"classroom":"R1","description":"d","images":["enc"]}'

    def test_resolved_classroom_keeps_non_ascii(self) -> None:
        resolved = ResolvedClassroom(name="УК3 104", description="Крутая", images=[])
        assert "УК3 104" in resolved.to_json()

    def test_serialize_classroom_list(self) -> None:
        assert serialize_classroom_list(["A", "B"]) == '["A","B"]'

    def test_serialize_empty_list(self) -> None:
        assert serialize_classroom_list([]) == "[]"
