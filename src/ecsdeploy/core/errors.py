"""Errors raised when talking to the ECS API."""


class DeployError(Exception):
    """Base class for all the errors raised by the deployer.

    Arguments:
        message: description of the failure.
        cluster: the cluster the deployer was working on.
        service: the service the deployer was working on.
    """

    def __init__(self, message: str, *, cluster: str, service: str):
        super().__init__(message)

        self.cluster = cluster
        self.service = service


class ServiceLookupError(DeployError):
    """The request describing the service failed."""


class ServiceNotFoundError(DeployError):
    """The service lookup succeeded but no service matched."""


class TaskDefinitionResolutionError(DeployError):
    """The request describing the service's task definition failed.

    Arguments:
        task_definition: the task definition reference that couldn't be
            resolved.
    """

    def __init__(self, message: str, *, cluster: str, service: str, task_definition: str):
        super().__init__(message, cluster=cluster, service=service)

        self.task_definition = task_definition


class ServiceUpdateError(DeployError):
    """The request updating the service failed.

    Arguments:
        task_definition: the task definition the service was asked to run.
    """

    def __init__(self, message: str, *, cluster: str, service: str, task_definition: str):
        super().__init__(message, cluster=cluster, service=service)

        self.task_definition = task_definition
