"""
Content validation pipeline.

A document is checked against the ordered fields of its content type before it
is written. Checking stops at the first failing field in schema order, so a
client always receives a single error naming one field. Keys that are not
declared fields are dropped from the output rather than reported.
"""

from typing import Any, Dict, List, Optional, Protocol

from headless_api.modules.content_types.field_types import matches
from headless_api.modules.content_types.schemas import FieldResponse


class ContentValidationError(Exception):
    def __init__(self, message: str, display_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.display_id = display_id


class TypeMismatch(ContentValidationError):
    def __init__(self, display_id: str, field_type: str):
        super().__init__(f"Field '{display_id}' must be of type {field_type}", display_id)
        self.field_type = field_type


class MissingRequiredField(ContentValidationError):
    def __init__(self, display_id: str):
        super().__init__(f"Missing required field '{display_id}'", display_id)


class EmptyDocument(ContentValidationError):
    def __init__(self):
        super().__init__("Content item data must not be empty")


class SchemaResolver(Protocol):
    def fields_for(self, content_type_id: int) -> List[FieldResponse]: ...


class ContentValidator:
    def __init__(self, resolver: SchemaResolver):
        self.resolver = resolver

    def validate(self, content_type_id: int, document: Dict[str, Any]) -> Dict[str, Any]:
        """Return the schema-filtered copy of `document` or raise ContentValidationError.

        SchemaResolutionError from the resolver propagates unchanged.
        """
        fields = self.resolver.fields_for(content_type_id)
        return filter_document(fields, document)

    def validate_update(self, content_type_id: int, document: Dict[str, Any]) -> Dict[str, Any]:
        """Same as validate, but an empty document is rejected outright."""
        if not document:
            raise EmptyDocument()
        return self.validate(content_type_id, document)


def filter_document(fields: List[FieldResponse], document: Dict[str, Any]) -> Dict[str, Any]:
    filtered: Dict[str, Any] = {}
    for field in fields:
        if field.display_id in document:
            value = document[field.display_id]
            if not matches(field.field_type, value):
                raise TypeMismatch(field.display_id, field.field_type)
            filtered[field.display_id] = value
        elif field.required:
            raise MissingRequiredField(field.display_id)
    return filtered
