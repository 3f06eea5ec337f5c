from unittest import mock

import pytest
from botocore.exceptions import ClientError
from click.testing import CliRunner
from testfixtures import compare

from ecsdeploy.__main__ import cli

TASK_DEFINITION = {
    "taskDefinitionArn": "web:3",
    "family": "web",
    "revision": 3,
    "status": "ACTIVE",
    "containerDefinitions": [{"name": "app", "image": "nginx"}],
}

SERVICE = {
    "serviceName": "myservice",
    "taskDefinition": "web:4",
    "deployments": [
        {
            "id": "ecs-svc/1",
            "status": "PRIMARY",
            "rolloutState": "IN_PROGRESS",
            "desiredCount": 2,
            "runningCount": 0,
        },
        {"id": "ecs-svc/0", "status": "ACTIVE", "desiredCount": 2, "runningCount": 2},
    ],
}

ARGS = ["-c", "missing.toml", "--cluster", "mycluster", "--service", "myservice"]


@pytest.fixture
def ecs_client():
    client = mock.Mock(spec=["describe_services", "describe_task_definition", "update_service"])
    client.describe_services.return_value = {"services": [{"taskDefinition": "web:3"}]}
    client.describe_task_definition.return_value = {"taskDefinition": TASK_DEFINITION}
    client.update_service.return_value = {"service": SERVICE}

    with mock.patch("ecsdeploy.core.context.create_session"), mock.patch(
        "ecsdeploy.core.context.create_ecs_client", return_value=client
    ):
        yield client


@pytest.fixture
def runner():
    runner = CliRunner()

    with runner.isolated_filesystem():
        yield runner


def test_describe__prints_task_definition_table(runner, ecs_client):
    res = runner.invoke(cli, ARGS + ["describe"])

    compare(res.exit_code, 0)
    assert "web:3" in res.output
    assert "nginx" in res.output
    ecs_client.describe_task_definition.assert_called_once_with(taskDefinition="web:3")


def test_describe__prints_json(runner, ecs_client):
    res = runner.invoke(cli, ARGS + ["describe", "--output", "json"])

    compare(res.exit_code, 0)
    assert '"family": "web"' in res.output


def test_describe__exits_with_error_when_service_is_missing(runner, ecs_client):
    ecs_client.describe_services.return_value = {"services": []}

    res = runner.invoke(cli, ARGS + ["describe"])

    compare(res.exit_code, 1)
    ecs_client.describe_task_definition.assert_not_called()


def test_update__sends_task_definition(runner, ecs_client):
    res = runner.invoke(cli, ARGS + ["update", "web:4"])

    compare(res.exit_code, 0)
    assert "web:4" in res.output
    assert "IN_PROGRESS" in res.output
    ecs_client.update_service.assert_called_once_with(
        cluster="mycluster",
        service="myservice",
        taskDefinition="web:4",
    )


def test_update__exits_with_error_when_update_fails(runner, ecs_client):
    ecs_client.update_service.side_effect = ClientError(
        {"Error": {"Code": "ServiceNotActiveException", "Message": "inactive"}},
        "UpdateService",
    )

    res = runner.invoke(cli, ARGS + ["update", "web:4"])

    compare(res.exit_code, 1)


def test_cli__reads_service_from_config_file(runner, ecs_client):
    with open("ecsdeploy.toml", "w", encoding="utf-8") as fp:
        fp.write('[service]\ncluster = "fromfile"\nname = "myservice"\n')

    res = runner.invoke(cli, ["update", "web:4"])

    compare(res.exit_code, 0)
    ecs_client.update_service.assert_called_once_with(
        cluster="fromfile",
        service="myservice",
        taskDefinition="web:4",
    )


def test_cli__reports_missing_configuration(runner, ecs_client):
    res = runner.invoke(cli, ["-c", "missing.toml", "describe"])

    compare(res.exit_code, 2)
    assert "invalid configuration" in res.output


def test_cli__reports_malformed_configuration_file(runner, ecs_client):
    with open("ecsdeploy.toml", "w", encoding="utf-8") as fp:
        fp.write('[service\ncluster = "mycluster"\n')

    res = runner.invoke(cli, ["describe"])

    compare(res.exit_code, 2)
    assert "invalid configuration file" in res.output
    ecs_client.describe_services.assert_not_called()


@pytest.mark.parametrize("command", ["describe", "update"])
def test_cli__shows_command_help_without_configuration(runner, command):
    res = runner.invoke(cli, ["-c", "missing.toml", command, "--help"])

    compare(res.exit_code, 0)
    assert "Usage:" in res.output
