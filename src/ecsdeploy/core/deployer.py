"""Reads and updates the task definition run by an ECS service."""
from typing import Any, Dict

from attrs import define
from rich.console import Console

from ecsdeploy.core.errors import (
    ServiceLookupError,
    ServiceNotFoundError,
    ServiceUpdateError,
    TaskDefinitionResolutionError,
)
from ecsdeploy.utils import CONSOLE, log


@define(frozen=True, kw_only=True)
class ClusterServiceDeployer:
    """Deploys task definitions to a single ECS service.

    Every call goes straight to the ECS API: nothing is cached and nothing
    is retried. Rolling out the new tasks is left to ECS.

    Arguments:
        cluster: name or ARN of the cluster running the service.
        service: name or ARN of the service.
        ecs_client: a boto3 ECS client, or any object exposing
            `describe_services`, `describe_task_definition` and
            `update_service`.
        logger: console used to log the API calls.
    """

    cluster: str
    service: str
    ecs_client: Any
    logger: Console = CONSOLE

    def get_service_task_definition(self) -> Dict[str, Any]:
        """Fetches the task definition currently used by the service.

        Raises:
            ServiceLookupError: describing the service failed.
            ServiceNotFoundError: no service matched the cluster and name.
            TaskDefinitionResolutionError: describing the task definition failed.

        Returns:
            The task definition as returned by `DescribeTaskDefinition`.
        """
        log(f"describing service {self.service} in cluster {self.cluster}", self.logger)

        try:
            res = self.ecs_client.describe_services(
                cluster=self.cluster,
                services=[self.service],
            )
        except Exception as exc:  # pylint: disable=broad-except
            raise ServiceLookupError(
                f"unable to describe service {self.service} in cluster {self.cluster}: {exc}",
                cluster=self.cluster,
                service=self.service,
            ) from exc

        services = res.get("services", [])
        if not services:
            reasons = ", ".join(failure.get("reason", "") for failure in res.get("failures", []))
            message = f"service {self.service} not found in cluster {self.cluster}"
            if reasons:
                message += f" ({reasons})"

            raise ServiceNotFoundError(message, cluster=self.cluster, service=self.service)

        task_definition_arn = services[0]["taskDefinition"]
        log(f"resolving task definition {task_definition_arn}", self.logger)

        try:
            res = self.ecs_client.describe_task_definition(taskDefinition=task_definition_arn)
        except Exception as exc:  # pylint: disable=broad-except
            raise TaskDefinitionResolutionError(
                f"unable to describe task definition {task_definition_arn}: {exc}",
                cluster=self.cluster,
                service=self.service,
                task_definition=task_definition_arn,
            ) from exc

        return res["taskDefinition"]

    def update_service(self, task_definition: str) -> Dict[str, Any]:
        """Asks ECS to run a new task definition for the service.

        The call returns as soon as ECS accepts the request, the deployment
        itself goes on in the background.

        Arguments:
            task_definition: the ARN, or `family:revision`, of the task
                definition to run. It is sent as is.

        Raises:
            ServiceUpdateError: the update request failed.

        Returns:
            The service as returned by `UpdateService`.
        """
        log(
            f"updating service {self.service} in cluster {self.cluster} "
            f"to task definition {task_definition}",
            self.logger,
        )

        try:
            res = self.ecs_client.update_service(
                cluster=self.cluster,
                service=self.service,
                taskDefinition=task_definition,
            )
        except Exception as exc:  # pylint: disable=broad-except
            raise ServiceUpdateError(
                f"unable to update service {self.service} in cluster {self.cluster}: {exc}",
                cluster=self.cluster,
                service=self.service,
                task_definition=task_definition,
            ) from exc

        return res["service"]
