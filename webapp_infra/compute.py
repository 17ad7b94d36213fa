"""
Web tier - a single EC2 instance that runs the application container.
"""

from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from webapp_infra.database import Database
from webapp_infra.network import Network
from webapp_infra.settings import StackSettings
from webapp_infra.user_data import build_user_data

# Non-kernel-5.10 AL2 series, i.e. images named amzn2-ami-hvm-*-x86_64-gp2
AMAZON_LINUX_2_PARAMETER = "/aws/service/ami-amazon-linux-latest/amzn2-ami-hvm-x86_64-gp2"


def machine_image(settings: StackSettings) -> ec2.IMachineImage:
    """
    Pinned AMI when ``amiId`` is set, otherwise the latest Amazon Linux 2
    (HVM, x86_64, gp2) resolved from Amazon's public SSM parameter at deploy time.
    """
    if settings.ami_id:
        return ec2.MachineImage.generic_linux({settings.region: settings.ami_id})
    return ec2.MachineImage.from_ssm_parameter(
        AMAZON_LINUX_2_PARAMETER, os=ec2.OperatingSystemType.LINUX
    )


class WebServer(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: StackSettings,
        network: Network,
        database: Database,
    ) -> None:
        super().__init__(scope, construct_id)

        self.user_data = build_user_data(
            settings,
            db_host=database.host,
            db_password=database.password.unsafe_unwrap(),
        )

        self.instance = ec2.Instance(
            self,
            "Instance",
            instance_type=ec2.InstanceType(settings.instance_type),
            machine_image=machine_image(settings),
            vpc=network.vpc,
            vpc_subnets=network.public_subnets,
            security_group=network.web_security_group,
            user_data=self.user_data,
            associate_public_ip_address=True,
        )

    @property
    def public_ip(self) -> str:
        return self.instance.instance_public_ip
