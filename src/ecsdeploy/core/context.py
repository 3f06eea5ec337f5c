"""Definition of the context capturing all the data needed to run ecsdeploy."""
from attrs import define
from rich.console import Console

from ecsdeploy.core.config import Config
from ecsdeploy.core.deployer import ClusterServiceDeployer
from ecsdeploy.core.session import create_ecs_client, create_session
from ecsdeploy.utils import CONSOLE


@define(frozen=True, kw_only=True)
class Context:
    """Contains all the data needed to run any ecsdeploy command.

    Arguments:
        config: ecsdeploy's configuration.
        deployer: the deployer bound to the configured service.
    """

    config: Config
    deployer: ClusterServiceDeployer


def load_context(config: Config, console: Console = CONSOLE) -> Context:
    """Prepares the context to be used in ecsdeploy.

    Arguments:
        config: ecsdeploy's configuration.
        console: console used by the deployer for logging.

    Returns:
        The context.
    """
    session = create_session(config.aws)

    deployer = ClusterServiceDeployer(
        cluster=config.service.cluster,
        service=config.service.name,
        ecs_client=create_ecs_client(session),
        logger=console,
    )

    return Context(
        config=config,
        deployer=deployer,
    )
