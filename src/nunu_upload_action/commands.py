"""CLI invocation for the upload."""
import asyncio
import re
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from nunu_upload_action.errors import UploadError
from nunu_upload_action.logging import get_logger
from nunu_upload_action.types import ActionInputs

logger = get_logger(__name__)

BUILD_ID_PATTERN = re.compile(r"Build ID: ([a-f0-9-]+)", re.IGNORECASE)
REDACTED = "***"


def build_args(inputs: ActionInputs) -> List[str]:
    """Argument list for ``nunu-cli upload``."""
    args = [
        "upload",
        inputs.file,
        "--token",
        inputs.api_token,
        "--project-id",
        inputs.project_id,
    ]

    if inputs.name:
        args += ["--name", inputs.name]
    if inputs.platform:
        args += ["--platform", inputs.platform]
    if inputs.description:
        args += ["--description", inputs.description]
    if inputs.auto_delete:
        args.append("--auto-delete")
    if inputs.deletion_policy:
        args += ["--deletion-policy", inputs.deletion_policy]
    if inputs.upload_timeout:
        args += ["--upload-timeout", inputs.upload_timeout]

    return args


def redact_args(args: List[str]) -> List[str]:
    """Copy of ``args`` with the API token hidden."""
    redacted = list(args)
    for i, arg in enumerate(redacted[:-1]):
        if arg == "--token":
            redacted[i + 1] = REDACTED
    return redacted


def parse_build_id(output: str) -> Optional[str]:
    match = BUILD_ID_PATTERN.search(output)
    return match.group(1) if match else None


async def _pump(stream: asyncio.StreamReader, sink: List[str], echo: TextIO) -> None:
    while line := await stream.readline():
        text = line.decode(errors="replace")
        sink.append(text)
        echo.write(text)
        echo.flush()


async def run_cli(binary: Path, args: List[str]) -> tuple[int, str, str]:
    """Run the CLI, echoing its streams live, and return (returncode, stdout, stderr)."""
    logger.debug("cli_exec", binary=str(binary), args=redact_args(args))

    process = await asyncio.create_subprocess_exec(
        str(binary),
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    stdout: List[str] = []
    stderr: List[str] = []
    await asyncio.gather(
        _pump(process.stdout, stdout, sys.stdout),
        _pump(process.stderr, stderr, sys.stderr),
    )
    returncode = await process.wait()

    logger.debug("cli_complete", binary=str(binary), returncode=returncode)
    return returncode, "".join(stdout), "".join(stderr)


async def upload(binary: Path, inputs: ActionInputs) -> Optional[str]:
    """Upload ``inputs.file`` and return the build id the CLI printed, if any."""
    logger.info("starting_upload", file=inputs.file, name=inputs.name)

    returncode, stdout, stderr = await run_cli(binary, build_args(inputs))
    if returncode != 0:
        raise UploadError(returncode, stderr)

    return parse_build_id(stdout)
