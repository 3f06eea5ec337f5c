"""AWS session helpers."""
from typing import Any

import boto3

from ecsdeploy.core.config import AwsConfig


def create_session(config: AwsConfig) -> boto3.session.Session:
    """Creates a boto3 session.

    Arguments:
        config: region and profile to use, boto3 falls back to its own
            resolution chain for the missing ones.
    """
    if config.profile:
        return boto3.session.Session(
            profile_name=config.profile,
            region_name=config.region,
        )

    return boto3.session.Session(region_name=config.region)


def create_ecs_client(session: boto3.session.Session) -> Any:
    """Creates the ECS client used by the deployer."""
    return session.client("ecs")
