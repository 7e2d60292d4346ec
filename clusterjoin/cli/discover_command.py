import click
import uvloop

from clusterjoin.discovery import (
    DiscoveryConfig,
    DiscoveryError,
    DiscoveryService,
)
from clusterjoin.env import Env, load_env
from clusterjoin.logging import Logger, LoggingConfig


@click.command(help="Print a comma-separated join list resolved from SRV records.")
@click.argument("srv_names", nargs=-1, required=True)
@click.option("--max-nodes", default=None, type=int, help="Maximum number of endpoints to return.")
@click.option("--env-file", default=None, type=str, help="Path to .env file with CLUSTERJOIN_* settings.")
@click.option("--debug", is_flag=True, default=False, help="Debug mode.")
def discover(
    srv_names: tuple[str, ...],
    max_nodes: int | None,
    env_file: str | None,
    debug: bool,
):
    try:
        env = load_env(Env, env_file=env_file)

    except ValueError as err:
        raise click.UsageError(str(err)) from err

    logging_config = env.to_logging_config(debug=debug)
    log_level = logging_config.level.value.lower()

    try:
        config = env.to_discovery_config(
            srv_names=list(srv_names),
            max_nodes=max_nodes,
            log_level=log_level,
        )

    except ValueError as err:
        raise click.BadParameter(str(err)) from err

    join = uvloop.run(find_join_list(config, logging_config))

    if join is None:
        raise click.exceptions.Exit(1)

    click.echo(join)


async def find_join_list(
    config: DiscoveryConfig,
    logging_config: LoggingConfig,
) -> str | None:
    logger = Logger(logging_config)

    try:
        return await DiscoveryService(config, logger=logger).find_nodes()

    except DiscoveryError as err:
        click.echo(str(err), err=True)
        return None

    finally:
        await logger.close()
