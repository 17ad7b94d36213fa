"""
Database tier - MySQL on RDS inside the private subnet.
"""

from aws_cdk import Annotations, CfnParameter, RemovalPolicy, SecretValue, Tags
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_rds as rds
from constructs import Construct

from webapp_infra.network import MYSQL_PORT, Network
from webapp_infra.settings import StackSettings


class Database(Construct):
    """
    RDS MySQL instance reachable only from the web security group.

    The master password is never part of the context: it comes from a
    NoEcho stack parameter that must be passed at deploy time
    (``cdk deploy --parameters DbPassword=...``).
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: StackSettings,
        network: Network,
        password: CfnParameter,
    ) -> None:
        super().__init__(scope, construct_id)

        self.password = SecretValue.cfn_parameter(password)

        self.subnet_group = rds.SubnetGroup(
            self,
            "SubnetGroup",
            description=f"Private subnets for {settings.project_name} database",
            vpc=network.vpc,
            vpc_subnets=network.private_subnets,
            removal_policy=RemovalPolicy.DESTROY,
        )
        Tags.of(self.subnet_group).add("Name", "db-subnet-group")

        self.instance = rds.DatabaseInstance(
            self,
            "Instance",
            # db.t2 classes are not offered for MySQL 8.0
            engine=rds.DatabaseInstanceEngine.mysql(version=rds.MysqlEngineVersion.VER_5_7),
            instance_type=ec2.InstanceType(settings.db_instance_class),
            allocated_storage=settings.db_allocated_storage,
            vpc=network.vpc,
            subnet_group=self.subnet_group,
            security_groups=[network.db_security_group],
            port=MYSQL_PORT,
            credentials=rds.Credentials.from_password(settings.db_user, self.password),
            database_name=settings.db_name,
            publicly_accessible=False,
            # skip the final snapshot on delete
            removal_policy=RemovalPolicy.DESTROY,
            delete_automated_backups=True,
        )
        Annotations.of(self.instance).add_warning(
            "Database is deleted without a final snapshot when the stack is destroyed"
        )

    @property
    def endpoint(self) -> str:
        """``address:port`` of the instance."""
        return self.instance.instance_endpoint.socket_address

    @property
    def host(self) -> str:
        return self.instance.db_instance_endpoint_address
