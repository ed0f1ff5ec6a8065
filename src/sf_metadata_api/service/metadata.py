import logging
from typing import Any

from sf_metadata_api.config import Settings, get_settings
from sf_metadata_api.deploy.invoker import DeploymentInvoker
from sf_metadata_api.metadata.descriptors import build_descriptors
from sf_metadata_api.metadata.validator import validate_definition

logger = logging.getLogger(__name__)
SUCCESS_MESSAGE = "Metadata created and deployed successfully"


class MetadataService:
    def __init__(self, settings: Settings | None = None, invoker: DeploymentInvoker | None = None) -> None:
        self.settings = settings or get_settings()
        self.invoker = invoker or DeploymentInvoker(self.settings)

    async def create_metadata(self, payload: Any) -> dict[str, Any]:
        definition = validate_definition(payload)
        logger.info(
            "metadata.create object=%s fields=%d org=%s",
            definition.name,
            len(definition.fields),
            definition.org_alias,
        )
        bundle = build_descriptors(definition, api_version=self.settings.metadata_api_version)
        result = await self.invoker.deploy(bundle, definition.org_alias)
        logger.info("metadata.deployed object=%s member=%s", definition.name, bundle.api_name)

        response: dict[str, Any] = {
            "message": SUCCESS_MESSAGE,
            "objectName": definition.name,
            "fields": [field.as_payload() for field in definition.fields],
            "output": result.stdout,
        }
        if result.stderr.strip():
            response["warnings"] = result.stderr
        return response
