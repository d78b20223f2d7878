"""Action entry point."""
import asyncio
import os
import sys
from typing import Optional

from nunu_upload_action.commands import upload
from nunu_upload_action.errors import log_error
from nunu_upload_action.inputs import get_inputs, validate_inputs
from nunu_upload_action.installer import ToolCache, get_cli_path
from nunu_upload_action.logging import configure_logging, get_logger
from nunu_upload_action.types import DEFAULT_TOOL, ToolConfig
from nunu_upload_action.workflow import mask, set_failed, set_output

logger = get_logger("main")


async def run(
    tool: ToolConfig = DEFAULT_TOOL,
    cache: Optional[ToolCache] = None,
) -> int:
    """Install the CLI, upload the build and publish its id. Returns the exit code."""
    try:
        inputs = get_inputs()
        validate_inputs(inputs)
        mask(inputs.api_token)

        cli_path = await get_cli_path(inputs.cli_version, tool, cache)
        logger.info("using_cli", path=str(cli_path))

        build_id = await upload(cli_path, inputs)
        if build_id:
            set_output("build-id", build_id)
            logger.info("build_uploaded", build_id=build_id)

        logger.info("upload_complete", file=inputs.file)
        return 0

    except Exception as e:
        log_error(e)
        set_failed(str(e) or e.__class__.__name__)
        return 1


def main() -> None:
    """Run the upload step."""
    configure_logging()
    tool = ToolConfig(api_token=os.environ.get("GITHUB_TOKEN") or None)
    sys.exit(asyncio.run(run(tool)))


if __name__ == "__main__":
    main()
