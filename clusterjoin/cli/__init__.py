import click

from .discover_command import discover
from .runner_command import generate


@click.group(help="Bootstrap clustered nodes from DNS SRV records.")
def run():
    pass


run.add_command(generate)
run.add_command(discover)
