"""GitHub Actions workflow commands."""
import os
import sys
import uuid

from nunu_upload_action.logging import get_logger

logger = get_logger(__name__)

OUTPUT_FILE_ENV = "GITHUB_OUTPUT"


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def issue_command(command: str, message: str = "", **properties: str) -> None:
    """Write a ``::command key=value::message`` line to stdout."""
    props = ",".join(f"{k}={escape_property(v)}" for k, v in properties.items())
    head = f"{command} {props}" if props else command
    sys.stdout.write(f"::{head}::{escape_data(message)}{os.linesep}")
    sys.stdout.flush()


def set_output(name: str, value: str) -> None:
    """Expose a step output to later steps."""
    output_file = os.environ.get(OUTPUT_FILE_ENV)
    if not output_file:
        issue_command("set-output", value, name=name)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Output value for {name} contains the delimiter")

    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}{os.linesep}{value}{os.linesep}{delimiter}{os.linesep}")

    logger.debug("output_set", name=name)


def mask(value: str) -> None:
    """Have the runner redact ``value`` from all log output."""
    if value:
        issue_command("add-mask", value)


def set_failed(message: str) -> None:
    """Report the step as failed; the caller exits non-zero."""
    issue_command("error", message)
