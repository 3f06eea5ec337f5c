"""Functions and data structures used to represent and load ecsdeploy
configuration."""
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import toml
from attrs import define, field
from cattrs import structure

Overrides = Mapping[str, Mapping[str, Optional[Any]]]


@define(frozen=True, kw_only=True)
class ServiceConfig:
    """The ECS service to deploy.

    Arguments:
        cluster: name or ARN of the cluster running the service.
        name: name or ARN of the service.
    """

    cluster: str
    name: str


@define(frozen=True, kw_only=True)
class AwsConfig:
    """Configuration for the AWS session.

    Arguments:
        region: AWS region, boto3 defaults are used when missing.
        profile: named profile from the AWS shared configuration.
    """

    region: Optional[str] = None
    profile: Optional[str] = None


@define(frozen=True, kw_only=True)
class Config:
    """ecsdeploy's configuration.

    Arguments:
        service: the service to deploy.
        aws: configuration for the AWS session.
    """

    service: ServiceConfig
    aws: AwsConfig = field(factory=AwsConfig)


def merge_overrides(config: Dict[str, Any], overrides: Overrides) -> Dict[str, Any]:
    """Applies the overrides on top of a raw configuration.

    Values set to `None` are ignored so that options missing from the
    command line don't hide the ones from the configuration file.

    Arguments:
        config: raw configuration loaded from the file.
        overrides: values to apply, grouped by section.

    Returns:
        A new raw configuration.
    """
    merged = {section: dict(values) for section, values in config.items()}

    for section, values in overrides.items():
        for key, value in values.items():
            if value is None:
                continue

            merged.setdefault(section, {})[key] = value

    return merged


def load_config(path: Path | str, overrides: Optional[Overrides] = None) -> Config:
    """Loads the configuration from a file.

    A missing file is treated as an empty one, so the whole configuration
    can come from the overrides.

    Arguments:
        path: configuration file's path.
        overrides: values taking precedence over the file's ones.
    """
    config = toml.load(path) if os.path.exists(path) else {}

    return structure(merge_overrides(config, overrides or {}), Config)
