"""
Stack settings resolved from CDK context.

Defaults ship in cdk.json and any key can be overridden on the command line
(``cdk deploy -c dbUser=admin``). Values given with ``-c`` always arrive as
strings, so numeric settings are coerced here.
"""

import ipaddress
from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

from constructs import Node


class ConfigError(ValueError):
    """Raised when a context value is missing or invalid."""


@dataclass(frozen=True)
class StackSettings:
    db_user: str
    project_name: str = "salamat-a3"
    environment: str = "dev"
    region: str = "us-west-2"
    availability_zone: str = "us-west-2a"
    vpc_cidr: str = "10.0.0.0/16"
    public_subnet_cidr: str = "10.0.1.0/24"
    private_subnet_cidr: str = "10.0.2.0/24"
    ssh_cidr: str = "0.0.0.0/0"
    db_name: str = "a3database"
    db_instance_class: str = "t2.micro"
    db_allocated_storage: int = 8
    instance_type: str = "t2.micro"
    ami_id: Optional[str] = None
    container_image: str = "salamat4/a3-csci3124:a3-webapp"
    container_port: int = 5000
    host_port: int = 80
    db_wait_seconds: int = 60

    def __post_init__(self) -> None:
        self.validate()

    @property
    def vpc_name(self) -> str:
        return f"{self.project_name}-vpc"

    def validate(self) -> None:
        if not self.db_user:
            raise ConfigError("dbUser must be set (cdk deploy -c dbUser=<name>)")

        vpc = _network("vpcCidr", self.vpc_cidr)
        public = _network("publicSubnetCidr", self.public_subnet_cidr)
        private = _network("privateSubnetCidr", self.private_subnet_cidr)
        _network("sshCidr", self.ssh_cidr)

        for key, subnet in (("publicSubnetCidr", public), ("privateSubnetCidr", private)):
            if not subnet.subnet_of(vpc):
                raise ConfigError(f"{key} {subnet} is not inside vpcCidr {vpc}")
        if public.overlaps(private):
            raise ConfigError(f"publicSubnetCidr {public} overlaps privateSubnetCidr {private}")

        if not self.availability_zone.startswith(self.region):
            raise ConfigError(
                f"availabilityZone {self.availability_zone} is not in region {self.region}"
            )

        for key, port in (("containerPort", self.container_port), ("hostPort", self.host_port)):
            if not 1 <= port <= 65535:
                raise ConfigError(f"{key} must be between 1 and 65535, got {port}")
        if self.db_allocated_storage < 1:
            raise ConfigError("dbAllocatedStorage must be a positive number of GiB")
        if self.db_wait_seconds < 0:
            raise ConfigError("dbWaitSeconds cannot be negative")

    @classmethod
    def from_context(cls, node: Node) -> "StackSettings":
        """Build settings from the context visible at ``node``."""

        def get(key: str, default: Any = None, convert: Callable[[Any], Any] = str) -> Any:
            value = node.try_get_context(key)
            if value is None or value == "":
                return default
            try:
                return convert(value)
            except (TypeError, ValueError) as e:
                raise ConfigError(
                    f"context value {key}={value!r} is not a valid {convert.__name__}"
                ) from e

        defaults = {f.name: f.default for f in fields(cls)}
        kwargs = {
            "db_user": get("dbUser", ""),
            "ami_id": get("amiId"),
        }
        for attr, key, convert in _CONTEXT_KEYS:
            kwargs[attr] = get(key, defaults[attr], convert)
        return cls(**kwargs)


def _network(key: str, cidr: str) -> ipaddress.IPv4Network:
    try:
        return ipaddress.IPv4Network(cidr)
    except ValueError as e:
        raise ConfigError(f"{key} is not a valid IPv4 CIDR: {e}") from e


_CONTEXT_KEYS = (
    ("project_name", "projectName", str),
    ("environment", "environment", str),
    ("region", "region", str),
    ("availability_zone", "availabilityZone", str),
    ("vpc_cidr", "vpcCidr", str),
    ("public_subnet_cidr", "publicSubnetCidr", str),
    ("private_subnet_cidr", "privateSubnetCidr", str),
    ("ssh_cidr", "sshCidr", str),
    ("db_name", "dbName", str),
    ("db_instance_class", "dbInstanceClass", str),
    ("db_allocated_storage", "dbAllocatedStorage", int),
    ("instance_type", "instanceType", str),
    ("container_image", "containerImage", str),
    ("container_port", "containerPort", int),
    ("host_port", "hostPort", int),
    ("db_wait_seconds", "dbWaitSeconds", int),
)
