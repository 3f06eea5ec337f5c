"""Main entrypoint for the `ecsdeploy` command."""
import sys
from typing import Any, Dict, Optional

import click
import toml
from attrs import define
from cattrs import transform_error
from cattrs.errors import ClassValidationError
from rich.table import Table

from ecsdeploy.core.config import Overrides, load_config
from ecsdeploy.core.context import Context, load_context
from ecsdeploy.core.errors import DeployError
from ecsdeploy.utils import OUTPUT, log, print_exception, print_info, print_waiting


@define(frozen=True, kw_only=True)
class CliOptions:
    """Options given to the `ecsdeploy` group.

    The configuration is loaded by each command, so `--help` works without
    a configuration file.

    Arguments:
        config_path: path to the configuration file.
        overrides: configuration values given on the command line.
    """

    config_path: str
    overrides: Overrides


@click.group()
@click.option("-c", "--config", "config_path", default="./ecsdeploy.toml")
@click.option("--cluster", default=None, help="Overrides service.cluster.")
@click.option("--service", default=None, help="Overrides service.name.")
@click.option("--region", default=None, help="Overrides aws.region.")
@click.option("--profile", default=None, help="Overrides aws.profile.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str,
    cluster: Optional[str],
    service: Optional[str],
    region: Optional[str],
    profile: Optional[str],
):
    """Entrypoint for the ecsdeploy command."""
    ctx.obj = CliOptions(
        config_path=config_path,
        overrides={
            "service": {"cluster": cluster, "name": service},
            "aws": {"region": region, "profile": profile},
        },
    )


def _load_context(options: CliOptions) -> Context:
    """Loads the configuration and prepares the context for a command.

    Arguments:
        options: the options given to the `ecsdeploy` group.

    Raises:
        click.UsageError: the configuration file can't be parsed or it
            misses a required value.
    """
    try:
        config = load_config(path=options.config_path, overrides=options.overrides)
    except toml.TomlDecodeError as exc:
        raise click.UsageError(f"invalid configuration file {options.config_path}: {exc}") from exc
    except ClassValidationError as exc:
        raise click.UsageError(
            "invalid configuration: " + "; ".join(transform_error(exc, path="config"))
        ) from exc

    return load_context(config=config)


def _task_definition_table(task_definition: Dict[str, Any]) -> Table:
    table = Table(title="Task definition", show_header=False)
    table.add_column("Key", justify="right")
    table.add_column("Value", overflow="fold")

    table.add_row("ARN", task_definition.get("taskDefinitionArn", ""))
    table.add_row("Family", task_definition.get("family", ""))
    table.add_row("Revision", str(task_definition.get("revision", "")))
    table.add_row("Status", task_definition.get("status", ""))

    for container in task_definition.get("containerDefinitions", []):
        table.add_row(f"[cyan]{container['name']}", container.get("image", ""))

    return table


@cli.command()
@click.option(
    "-o",
    "--output",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
@click.pass_obj
def describe(options: CliOptions, output: str):
    """Shows the task definition currently used by the service."""
    ctx = _load_context(options)

    try:
        with print_waiting("fetching task definition", console=ctx.deployer.logger):
            task_definition = ctx.deployer.get_service_task_definition()

    except DeployError as exc:
        print_exception(str(exc), console=ctx.deployer.logger)
        sys.exit(1)

    if output == "json":
        OUTPUT.print_json(data=task_definition, default=str)

    else:
        OUTPUT.print(_task_definition_table(task_definition))


@cli.command()
@click.argument("task_definition")
@click.pass_obj
def update(options: CliOptions, task_definition: str):
    """Updates the service to run TASK_DEFINITION.

    ECS rolls out the new tasks in the background, this command doesn't
    wait for the deployment to complete.
    """
    ctx = _load_context(options)

    try:
        with print_waiting("updating service", console=ctx.deployer.logger):
            service = ctx.deployer.update_service(task_definition)

    except DeployError as exc:
        print_exception(str(exc), console=ctx.deployer.logger)
        sys.exit(1)

    log("update accepted", ctx.deployer.logger)
    print_info(f"task definition: {service.get('taskDefinition', '')}", console=OUTPUT)

    for deployment in service.get("deployments", []):
        if deployment.get("status") != "PRIMARY":
            continue

        print_info(
            f"deployment {deployment.get('id', '')}: "
            f"{deployment.get('rolloutState', 'UNKNOWN')} "
            f"({deployment.get('runningCount', 0)}/{deployment.get('desiredCount', 0)} running)",
            console=OUTPUT,
        )


if __name__ == "__main__":
    cli()  # pylint: disable=no-value-for-parameter
