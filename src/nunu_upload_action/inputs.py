"""Step input parsing and validation."""
import os
from typing import Mapping, Optional

from nunu_upload_action.errors import InputError
from nunu_upload_action.types import ActionInputs

DELETION_POLICIES = ("least_recent", "oldest")
UPLOAD_TIMEOUT_RANGE = (1, 1440)


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for an input, "cli-version" -> "INPUT_CLI-VERSION"."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(
    name: str,
    required: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Read one step input, stripped, "" when unset."""
    environ = os.environ if environ is None else environ
    value = environ.get(input_env_name(name), "").strip()
    if required and not value:
        raise InputError(f"Input required and not supplied: {name}", name)
    return value


def get_inputs(environ: Optional[Mapping[str, str]] = None) -> ActionInputs:
    def optional(name: str) -> Optional[str]:
        return get_input(name, environ=environ) or None

    return ActionInputs(
        api_token=get_input("api-token", required=True, environ=environ),
        project_id=get_input("project-id", required=True, environ=environ),
        file=get_input("file", required=True, environ=environ),
        name=optional("name"),
        platform=optional("platform"),
        description=optional("description"),
        auto_delete=get_input("auto-delete", environ=environ).lower() == "true",
        deletion_policy=optional("deletion-policy"),
        upload_timeout=optional("upload-timeout"),
        cli_version=get_input("cli-version", environ=environ) or "latest",
    )


def validate_inputs(inputs: ActionInputs) -> None:
    """Reject values the CLI would refuse."""
    if inputs.deletion_policy and inputs.deletion_policy not in DELETION_POLICIES:
        raise InputError(
            f"Invalid deletion-policy: {inputs.deletion_policy}. "
            'Must be "least_recent" or "oldest".',
            "deletion-policy",
        )

    if inputs.upload_timeout:
        low, high = UPLOAD_TIMEOUT_RANGE
        value = inputs.upload_timeout
        # Plain ASCII digits only; the raw string is forwarded to the CLI
        timeout = int(value) if value.isascii() and value.isdigit() else None
        if timeout is None or not low <= timeout <= high:
            raise InputError(
                f"Invalid upload-timeout: {inputs.upload_timeout}. "
                f"Must be between {low} and {high}.",
                "upload-timeout",
            )
