import json
import shlex
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from sf_metadata_api.config import Settings

STUB_TEMPLATE = """\
import json
import os
import pathlib
import sys

args = sys.argv[1:]
package_dir = pathlib.Path(args[args.index("-d") + 1])
files = {{
    path.relative_to(package_dir).as_posix(): path.read_text(encoding="utf-8")
    for path in sorted(package_dir.rglob("*"))
    if path.is_file()
}}
record_dir = pathlib.Path({record!r})
record_dir.mkdir(parents=True, exist_ok=True)
run = {{"args": args, "package_dir": str(package_dir), "files": files}}
(record_dir / f"{{os.getpid()}}.json").write_text(json.dumps(run), encoding="utf-8")
sys.stdout.write({stdout!r})
sys.stderr.write({stderr!r})
sys.exit({exit_code})
"""


class DeployStub:
    def __init__(self, command: str, record: Path) -> None:
        self.command = command
        self.record = record

    def runs(self) -> list[dict]:
        if not self.record.exists():
            return []
        return [json.loads(path.read_text(encoding="utf-8")) for path in sorted(self.record.glob("*.json"))]


@pytest.fixture
def deploy_stub(tmp_path: Path) -> Callable[..., DeployStub]:
    """Build a fake deploy CLI that records its arguments and staged files."""

    def _make(exit_code: int = 0, stdout: str = "Deploy Succeeded.\n", stderr: str = "") -> DeployStub:
        script = tmp_path / f"deploy_stub_{exit_code}.py"
        record = tmp_path / f"deploy_stub_{exit_code}_runs"
        script.write_text(
            STUB_TEMPLATE.format(record=str(record), stdout=stdout, stderr=stderr, exit_code=exit_code),
            encoding="utf-8",
        )
        command = f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"
        return DeployStub(command=command, record=record)

    return _make


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    def _make(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "STAGING_ROOT": tmp_path / "staging",
            "STATIC_DIR": Path(__file__).resolve().parents[1] / "public",
        }
        values.update(overrides)
        return Settings(**values)

    return _make
