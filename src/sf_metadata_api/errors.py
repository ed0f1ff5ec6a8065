from typing import Any


class MetadataError(Exception):
    """Base error rendered as a JSON body of ``{error, message, details?}``."""

    error = "Internal Server Error"
    http_status = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class DefinitionValidationError(MetadataError):
    """The submitted object definition is missing a required part."""

    error = "Bad Request"
    http_status = 400


class DeploymentError(MetadataError):
    """The deployment tool failed or could not be started."""

    error = "Deployment Failed"
    http_status = 500

    def __init__(self, message: str, details: str | None = None, returncode: int | None = None) -> None:
        super().__init__(message, details=details)
        self.returncode = returncode
