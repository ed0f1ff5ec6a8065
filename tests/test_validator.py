import pytest

from sf_metadata_api.errors import DefinitionValidationError
from sf_metadata_api.metadata.validator import (
    BODY_NOT_OBJECT,
    FIELD_NAME_INVALID,
    FIELD_SHAPE_INVALID,
    FIELDS_EMPTY,
    NAME_AND_FIELDS_REQUIRED,
    OBJECT_NAME_INVALID,
    ORG_ALIAS_REQUIRED,
    validate_definition,
)


def _payload(**overrides: object) -> dict:
    payload: dict = {
        "objectName": "Beat_Plan",
        "orgAlias": "dev",
        "fields": [{"name": "Location", "label": "Location", "type": "Text"}],
    }
    payload.update(overrides)
    return payload


def test_valid_payload_builds_definition() -> None:
    definition = validate_definition(_payload())
    assert definition.name == "Beat_Plan"
    assert definition.org_alias == "dev"
    assert definition.api_name == "Beat_Plan__c"
    assert [field.as_payload() for field in definition.fields] == [
        {"name": "Location", "label": "Location", "type": "Text"}
    ]


def test_unknown_field_type_is_accepted() -> None:
    definition = validate_definition(_payload(fields=[{"name": "A", "label": "A", "type": "Hologram"}]))
    assert definition.fields[0].type == "Hologram"


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        (["not", "an", "object"], BODY_NOT_OBJECT),
        (None, BODY_NOT_OBJECT),
        (_payload(objectName=""), NAME_AND_FIELDS_REQUIRED),
        ({"orgAlias": "dev", "fields": []}, NAME_AND_FIELDS_REQUIRED),
        (_payload(fields="Location"), NAME_AND_FIELDS_REQUIRED),
        ({"objectName": "Beat_Plan", "orgAlias": "dev"}, NAME_AND_FIELDS_REQUIRED),
        (_payload(fields=[]), FIELDS_EMPTY),
        (_payload(orgAlias=""), ORG_ALIAS_REQUIRED),
        (_payload(fields=[{"name": "A", "label": "A"}]), FIELD_SHAPE_INVALID),
        (_payload(fields=[{"name": "A", "label": "", "type": "Text"}]), FIELD_SHAPE_INVALID),
        (_payload(fields=["Location"]), FIELD_SHAPE_INVALID),
    ],
)
def test_invalid_payload_reports_first_failure(payload: object, message: str) -> None:
    with pytest.raises(DefinitionValidationError) as excinfo:
        validate_definition(payload)
    assert excinfo.value.message == message
    assert excinfo.value.http_status == 400
    assert excinfo.value.to_dict() == {"error": "Bad Request", "message": message}


def test_missing_fields_is_reported_before_missing_org_alias() -> None:
    with pytest.raises(DefinitionValidationError) as excinfo:
        validate_definition({"objectName": "Beat_Plan"})
    assert excinfo.value.message == NAME_AND_FIELDS_REQUIRED


def test_missing_org_alias_is_reported_before_field_shape() -> None:
    payload = {"objectName": "Beat_Plan", "fields": [{"name": "A"}]}
    with pytest.raises(DefinitionValidationError) as excinfo:
        validate_definition(payload)
    assert excinfo.value.message == ORG_ALIAS_REQUIRED


@pytest.mark.parametrize("object_name", ["../../../escaped", "Beat/Plan", "Beat Plan", "1Plan", "_Plan", "Plan.xml"])
def test_object_name_must_be_api_name(object_name: str) -> None:
    with pytest.raises(DefinitionValidationError) as excinfo:
        validate_definition(_payload(objectName=object_name))
    assert excinfo.value.message == OBJECT_NAME_INVALID


@pytest.mark.parametrize("field_name", ["../Location", "Location Name", "9Lives", "Loc-ation"])
def test_field_name_must_be_api_name(field_name: str) -> None:
    payload = _payload(fields=[{"name": field_name, "label": "Location", "type": "Text"}])
    with pytest.raises(DefinitionValidationError) as excinfo:
        validate_definition(payload)
    assert excinfo.value.message == FIELD_NAME_INVALID


def test_labels_are_not_restricted_to_api_names() -> None:
    payload = _payload(fields=[{"name": "Is_Active", "label": "Is Active?", "type": "Checkbox"}])
    assert validate_definition(payload).fields[0].label == "Is Active?"
