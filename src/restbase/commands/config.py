"""Config commands -- view and modify the global configuration.

Provides the ``restbase config`` sub-command group.  Settings are persisted
in the restbase config directory and control the transport timeout, SSL
verification and the response cache (enabled flag, default TTL, backend).
"""

from __future__ import annotations

import typer
from pydantic import ValidationError

from restbase.commands._common import cli_errors
from restbase.exceptions import InvalidUsageError
from restbase.output import format_response, info, success

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration, environment overrides included.

    Example::

        restbase config show --json
    """
    from restbase.config import get_config_dir, resolve_config

    with cli_errors():
        config = resolve_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key in dot notation, e.g. 'cache.ttl_seconds'."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is validated against :class:`~restbase.models.GlobalConfig`
    before saving, so ``"600"`` becomes an integer and ``"false"`` a boolean
    where the field requires it.

    Example::

        restbase config set cache.ttl_seconds 600
        restbase config set cache.backend memory
        restbase config set request.verify_ssl false
    """
    from restbase.config import load_global_config, save_global_config
    from restbase.models import GlobalConfig

    with cli_errors():
        data = load_global_config().model_dump(mode="json")
        target = data
        for k in key.split(".")[:-1]:
            if k not in target or not isinstance(target[k], dict):
                raise InvalidUsageError(f"Invalid config key: {key}")
            target = target[k]

        final_key = key.split(".")[-1]
        if final_key not in target or isinstance(target[final_key], dict):
            raise InvalidUsageError(f"Unknown config key: {key}")

        target[final_key] = value

        try:
            new_config = GlobalConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidUsageError(
                f"Invalid value for {key}: {exc.errors()[0]['msg']}"
            ) from None

        save_global_config(new_config)
    success(f"Set {key} = {value}")
