import asyncio
import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from sf_metadata_api.config import Settings, get_settings
from sf_metadata_api.errors import DeploymentError
from sf_metadata_api.metadata.descriptors import DescriptorBundle

logger = logging.getLogger(__name__)
OUTPUT_LOG_LIMIT = 2000
PACKAGE_DIR = "unpackaged"
OBJECTS_DIR = "objects"
MANIFEST_FILE = "package.xml"


@dataclass(frozen=True)
class DeploymentResult:
    returncode: int
    stdout: str
    stderr: str
    staging_dir: Path


def stage_descriptors(bundle: DescriptorBundle, staging_dir: Path) -> Path:
    """Write the bundle under ``staging_dir`` and return the package directory.

    Layout::

        <staging_dir>/unpackaged/package.xml
        <staging_dir>/unpackaged/objects/<Name>__c.object-meta.xml
        <staging_dir>/unpackaged/objects/<Name>__c.fields-meta.xml
    """
    package_dir = staging_dir / PACKAGE_DIR
    objects_dir = package_dir / OBJECTS_DIR
    objects_dir.mkdir(parents=True, exist_ok=True)
    (objects_dir / bundle.object_filename).write_text(bundle.object_xml, encoding="utf-8")
    (objects_dir / bundle.fields_filename).write_text(bundle.fields_xml, encoding="utf-8")
    (package_dir / MANIFEST_FILE).write_text(bundle.package_xml, encoding="utf-8")
    return package_dir


class DeploymentInvoker:
    """Stage descriptor files in a private directory and push them with the deploy CLI."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def build_deploy_args(self, package_dir: Path, org_alias: str) -> list[str]:
        args = [
            *self.settings.deploy_command_args(),
            "force:mdapi:deploy",
            "-d",
            str(package_dir),
            "-u",
            org_alias,
            "--wait",
            str(self.settings.deploy_wait_minutes),
        ]
        if self.settings.deploy_verbose:
            args.append("--verbose")
        return args

    async def deploy(self, bundle: DescriptorBundle, org_alias: str) -> DeploymentResult:
        staging_dir = await asyncio.to_thread(self._make_staging_dir)
        try:
            package_dir = await asyncio.to_thread(stage_descriptors, bundle, staging_dir)
            logger.info("deploy.staged member=%s dir=%s", bundle.api_name, package_dir)
            return await self._run(self.build_deploy_args(package_dir, org_alias), staging_dir)
        finally:
            if self.settings.staging_keep:
                logger.info("deploy.staging_kept dir=%s", staging_dir)
            else:
                await asyncio.to_thread(shutil.rmtree, staging_dir, ignore_errors=True)

    async def _run(self, args: list[str], staging_dir: Path) -> DeploymentResult:
        logger.info("deploy.request args=%s", " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            raw_stdout, raw_stderr = await process.communicate()
        except OSError as exc:
            logger.error("deploy.launch_failed command=%s detail=%s", args[0], exc)
            raise DeploymentError(str(exc)) from exc

        stdout = raw_stdout.decode("utf-8", errors="replace")
        stderr = raw_stderr.decode("utf-8", errors="replace")
        returncode = process.returncode if process.returncode is not None else -1
        if returncode != 0:
            logger.error(
                "deploy.failed returncode=%d stderr=%s",
                returncode,
                self._clip(stderr, OUTPUT_LOG_LIMIT),
            )
            raise DeploymentError(
                stderr.strip() or f"Deployment command exited with code {returncode}",
                details=stdout,
                returncode=returncode,
            )
        if stderr.strip():
            logger.warning("deploy.stderr_on_success stderr=%s", self._clip(stderr, OUTPUT_LOG_LIMIT))
        logger.info("deploy.succeeded stdout=%s", self._clip(stdout, OUTPUT_LOG_LIMIT))
        return DeploymentResult(returncode=returncode, stdout=stdout, stderr=stderr, staging_dir=staging_dir)

    def _make_staging_dir(self) -> Path:
        root = self.settings.staging_root
        if root is not None:
            root.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix="mdapi-", dir=root))

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"
