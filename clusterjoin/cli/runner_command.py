import asyncio

import click
import uvloop

from clusterjoin import __version__
from clusterjoin.config import ConfigError, RunConfig
from clusterjoin.discovery import DiscoveryError, DiscoveryService
from clusterjoin.env import Env, load_env
from clusterjoin.locality import LocalityError, from_metadata
from clusterjoin.logging import Logger
from clusterjoin.logging.clusterjoin_logging_models import (
    LocalityInfo,
    RunnerDebug,
    RunnerFatal,
    RunnerInfo,
)
from clusterjoin.runner import render_runner, write_runner


@click.command(help="Generate the node startup script from a YAML config.")
@click.option("--config", "config_path", required=True, type=str, help="Path to config file.")
@click.option(
    "--output",
    default="/tmp/crdb-start.sh",
    show_default=True,
    type=str,
    help="Path to startup script to be generated.",
)
@click.option("--env-file", default=None, type=str, help="Path to .env file with CLUSTERJOIN_* settings.")
@click.option("--debug", is_flag=True, default=False, help="Debug mode.")
@click.option(
    "--auto-locality",
    is_flag=True,
    default=False,
    help="Enables resolving locality from instance metadata.",
)
@click.option(
    "--service-discovery",
    is_flag=True,
    default=False,
    help="Enables service discovery based on SRV records.",
)
def generate(
    config_path: str,
    output: str,
    env_file: str | None,
    debug: bool,
    auto_locality: bool,
    service_discovery: bool,
):
    try:
        env = load_env(Env, env_file=env_file)

    except ValueError as err:
        raise click.UsageError(str(err)) from err

    exit_code = uvloop.run(
        generate_runner(
            config_path,
            output,
            env,
            debug=debug,
            auto_locality=auto_locality,
            service_discovery=service_discovery,
        )
    )

    if exit_code != 0:
        raise click.exceptions.Exit(exit_code)


async def generate_runner(
    config_path: str,
    output: str,
    env: Env,
    debug: bool = False,
    auto_locality: bool = False,
    service_discovery: bool = False,
) -> int:
    logging_config = env.to_logging_config(debug=debug)
    log_level = logging_config.level.value.lower()
    logger = Logger(logging_config)

    try:
        await logger.log(
            RunnerDebug(
                message=f"Version: {__version__}",
                output=output,
            ),
            name="runner",
        )

        config = RunConfig.read(config_path)

        if auto_locality:
            locality = await from_metadata(logger=logger)
            await logger.log(
                LocalityInfo(
                    message="Resolved node locality",
                    locality=str(locality),
                ),
                name="runner",
            )
            config.set_locality(str(locality))

        if service_discovery:
            service = DiscoveryService(
                env.to_discovery_config(
                    srv_names=config.srv,
                    max_nodes=config.join_max,
                    log_level=log_level,
                ),
                logger=logger,
            )

            # An empty join list is logged by the service and left unset
            if join := await service.find_nodes():
                config.set_join(join)

        script = render_runner(config)

        await logger.log(
            RunnerDebug(
                message=f"Generated runner:\n{script}",
                output=output,
            ),
            name="runner",
        )

        await asyncio.get_running_loop().run_in_executor(
            None,
            write_runner,
            output,
            script,
        )

        await logger.log(
            RunnerInfo(
                message="Wrote startup script",
                output=output,
            ),
            name="runner",
        )

        return 0

    except (
        ConfigError,
        DiscoveryError,
        LocalityError,
        OSError,
        ValueError,
    ) as err:
        await logger.log(
            RunnerFatal(
                message=str(err),
                output=output,
            ),
            name="runner",
        )

        return 1

    finally:
        await logger.close()
