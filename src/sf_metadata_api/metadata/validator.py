import logging
import re
from collections.abc import Mapping
from typing import Any

from sf_metadata_api.errors import DefinitionValidationError
from sf_metadata_api.metadata.models import FieldDefinition, ObjectDefinition

logger = logging.getLogger(__name__)

BODY_NOT_OBJECT = "Request body must be a JSON object"
NAME_AND_FIELDS_REQUIRED = "Object name and fields array are required"
FIELDS_EMPTY = "fields array must not be empty"
ORG_ALIAS_REQUIRED = "orgAlias is required"
FIELD_SHAPE_INVALID = "Each field must have name, label, and type properties"
OBJECT_NAME_INVALID = "objectName must start with a letter and contain only letters, digits, and underscores"
FIELD_NAME_INVALID = "Field names must start with a letter and contain only letters, digits, and underscores"

# API names become file names under the staging directory.
API_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


def _present(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_api_name(value: str) -> bool:
    return API_NAME_PATTERN.fullmatch(value) is not None


def validate_definition(payload: Any) -> ObjectDefinition:
    """Check a decoded request body and build the object definition from it.

    Checks run in a fixed order and the first failure is raised as
    ``DefinitionValidationError``. Beyond presence only the shape of object
    and field API names is checked; uniqueness and reserved words are left to
    the deployment target.
    """
    if not isinstance(payload, Mapping):
        raise DefinitionValidationError(BODY_NOT_OBJECT)

    object_name = payload.get("objectName")
    fields = payload.get("fields")
    if not _present(object_name) or not isinstance(fields, list):
        raise DefinitionValidationError(NAME_AND_FIELDS_REQUIRED)
    if not fields:
        raise DefinitionValidationError(FIELDS_EMPTY)

    org_alias = payload.get("orgAlias")
    if not _present(org_alias):
        raise DefinitionValidationError(ORG_ALIAS_REQUIRED)
    if not _is_api_name(object_name):
        raise DefinitionValidationError(OBJECT_NAME_INVALID)

    definitions: list[FieldDefinition] = []
    for index, field in enumerate(fields):
        if not isinstance(field, Mapping) or not all(
            _present(field.get(key)) for key in ("name", "label", "type")
        ):
            logger.info("validation.field_invalid object=%s index=%d", object_name, index)
            raise DefinitionValidationError(FIELD_SHAPE_INVALID)
        if not _is_api_name(field["name"]):
            logger.info("validation.field_name_invalid object=%s index=%d", object_name, index)
            raise DefinitionValidationError(FIELD_NAME_INVALID)
        definitions.append(FieldDefinition(name=field["name"], label=field["label"], type=field["type"]))

    return ObjectDefinition(name=object_name, fields=definitions, org_alias=org_alias)
