"""Metadata API descriptor documents for a custom object definition.

Every document is produced from fixed templates so the same definition always
renders to byte-identical XML.
"""

from dataclasses import dataclass
from xml.sax.saxutils import escape

from sf_metadata_api.metadata.models import FieldDefinition, ObjectDefinition

METADATA_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
DEFAULT_API_VERSION = "58.0"
DEFAULT_FIELD_TYPE = "Text"
PICKLIST_PLACEHOLDERS = ("Option 1", "Option 2")
INDENT = "    "

FIELD_TYPE_MAP: dict[str, str] = {
    "Text": "Text",
    "TextArea": "TextArea",
    "Date": "Date",
    "DateTime": "DateTime",
    "Number": "Number",
    "Checkbox": "Checkbox",
    "Picklist": "Picklist",
    "Email": "Email",
    "Phone": "Phone",
    "URL": "Url",
}


def _picklist_value(label: str) -> tuple[str, ...]:
    value = escape(label)
    return (
        "<value>",
        f"    <fullName>{value}</fullName>",
        "    <default>false</default>",
        f"    <label>{value}</label>",
        "</value>",
    )


def _picklist_template() -> tuple[str, ...]:
    values = [f"{INDENT * 2}{line}" for label in PICKLIST_PLACEHOLDERS for line in _picklist_value(label)]
    return (
        "<valueSet>",
        "    <restricted>true</restricted>",
        "    <valueSetDefinition>",
        "        <sorted>false</sorted>",
        *values,
        "    </valueSetDefinition>",
        "</valueSet>",
        "<required>false</required>",
    )


SHORT_TEXT_TEMPLATE: tuple[str, ...] = ("<length>255</length>", "<required>false</required>")

# Lines emitted after <type>, relative to the field body indentation.
FIELD_TEMPLATES: dict[str, tuple[str, ...]] = {
    "Text": SHORT_TEXT_TEMPLATE,
    "TextArea": ("<length>32768</length>", "<visibleLines>3</visibleLines>", "<required>false</required>"),
    "Date": ("<required>false</required>",),
    "DateTime": ("<required>false</required>",),
    "Number": ("<precision>18</precision>", "<scale>0</scale>", "<required>false</required>"),
    "Checkbox": ("<defaultValue>false</defaultValue>",),
    "Picklist": _picklist_template(),
}


@dataclass(frozen=True)
class DescriptorBundle:
    api_name: str
    object_xml: str
    fields_xml: str
    package_xml: str

    @property
    def object_filename(self) -> str:
        return f"{self.api_name}.object-meta.xml"

    @property
    def fields_filename(self) -> str:
        return f"{self.api_name}.fields-meta.xml"


def resolve_field_type(declared_type: str) -> str:
    return FIELD_TYPE_MAP.get(declared_type, DEFAULT_FIELD_TYPE)


def field_template(resolved_type: str) -> tuple[str, ...]:
    # Email, Phone and Url have no dedicated template and share the short-text attributes.
    return FIELD_TEMPLATES.get(resolved_type, SHORT_TEXT_TEMPLATE)


def render_field(field: FieldDefinition) -> str:
    resolved = resolve_field_type(field.type)
    body = [
        f"<fullName>{escape(field.name)}__c</fullName>",
        f"<label>{escape(field.label)}</label>",
        f"<type>{resolved}</type>",
        *field_template(resolved),
    ]
    lines = [f"{INDENT}<fields>", *(f"{INDENT * 2}{line}" for line in body), f"{INDENT}</fields>"]
    return "\n".join(lines)


def generate_object_descriptor(definition: ObjectDefinition) -> str:
    name = escape(definition.name)
    elements = [
        f"<fullName>{name}__c</fullName>",
        f"<label>{name}</label>",
        f"<pluralLabel>{name}s</pluralLabel>",
        "<nameField>",
        "    <type>AutoNumber</type>",
        f"    <label>{name} Number</label>",
        f"    <displayFormat>{name}-{{0000}}</displayFormat>",
        "</nameField>",
        "<sharingModel>ReadWrite</sharingModel>",
        "<enableSharing>true</enableSharing>",
        "<enableBulkApi>true</enableBulkApi>",
        "<enableStreamingApi>true</enableStreamingApi>",
        "<enableReports>true</enableReports>",
        "<enableSearch>true</enableSearch>",
        "<enableHistory>false</enableHistory>",
        "<enableActivities>true</enableActivities>",
        "<deploymentStatus>Deployed</deploymentStatus>",
    ]
    return _document("CustomObject", [f"{INDENT}{line}" for line in elements])


def generate_fields_descriptor(fields: list[FieldDefinition]) -> str:
    return _document("CustomObject", [render_field(field) for field in fields])


def generate_package_manifest(api_name: str, api_version: str = DEFAULT_API_VERSION) -> str:
    lines = [
        f"{INDENT}<types>",
        f"{INDENT * 2}<members>{escape(api_name)}</members>",
        f"{INDENT * 2}<name>CustomObject</name>",
        f"{INDENT}</types>",
        f"{INDENT}<version>{escape(api_version)}</version>",
    ]
    return _document("Package", lines)


def build_descriptors(definition: ObjectDefinition, api_version: str = DEFAULT_API_VERSION) -> DescriptorBundle:
    return DescriptorBundle(
        api_name=definition.api_name,
        object_xml=generate_object_descriptor(definition),
        fields_xml=generate_fields_descriptor(definition.fields),
        package_xml=generate_package_manifest(definition.api_name, api_version),
    )


def _document(root: str, body: list[str]) -> str:
    return "\n".join([XML_DECLARATION, f'<{root} xmlns="{METADATA_NAMESPACE}">', *body, f"</{root}>"])
