"""
Network tier - VPC, one public and one private subnet, and the two
security groups that separate the web tier from the database tier.
"""

import ipaddress

from aws_cdk import Annotations, Tags
from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from webapp_infra.settings import StackSettings

MYSQL_PORT = 3306
ANYWHERE = "0.0.0.0/0"


class Network(Construct):
    """VPC plus security groups for a two-tier web application."""

    def __init__(self, scope: Construct, construct_id: str, *, settings: StackSettings) -> None:
        super().__init__(scope, construct_id)

        public_mask = ipaddress.IPv4Network(settings.public_subnet_cidr).prefixlen
        private_mask = ipaddress.IPv4Network(settings.private_subnet_cidr).prefixlen

        # Single AZ, no NAT: the private subnet has no route out
        self.vpc = ec2.Vpc(
            self,
            "Vpc",
            vpc_name=settings.vpc_name,
            ip_addresses=ec2.IpAddresses.cidr(settings.vpc_cidr),
            enable_dns_hostnames=True,
            enable_dns_support=True,
            availability_zones=[settings.availability_zone],
            nat_gateways=0,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=public_mask,
                ),
                ec2.SubnetConfiguration(
                    name="Private",
                    subnet_type=ec2.SubnetType.PRIVATE_ISOLATED,
                    cidr_mask=private_mask,
                ),
            ],
        )

        self.public_subnet = self.vpc.public_subnets[0]
        self.private_subnet = self.vpc.isolated_subnets[0]

        # Pin the exact subnet ranges instead of the allocator's picks
        self.public_subnet.node.default_child.cidr_block = settings.public_subnet_cidr
        self.private_subnet.node.default_child.cidr_block = settings.private_subnet_cidr
        Tags.of(self.public_subnet).add("Name", "public-subnet")
        Tags.of(self.private_subnet).add("Name", "private-subnet")

        self.web_security_group = ec2.SecurityGroup(
            self,
            "WebSecurityGroup",
            vpc=self.vpc,
            description="Allow HTTP, HTTPS, and SSH access",
            allow_all_outbound=True,
        )
        self.web_security_group.add_ingress_rule(
            ec2.Peer.any_ipv4(), ec2.Port.tcp(settings.host_port), "HTTP"
        )
        self.web_security_group.add_ingress_rule(ec2.Peer.any_ipv4(), ec2.Port.tcp(443), "HTTPS")
        self.web_security_group.add_ingress_rule(ec2.Peer.ipv4(settings.ssh_cidr), ec2.Port.tcp(22), "SSH")
        if settings.ssh_cidr == ANYWHERE:
            Annotations.of(self.web_security_group).add_warning(
                "SSH (22) is open to 0.0.0.0/0; set -c sshCidr=<your-ip>/32 to restrict it"
            )

        self.db_security_group = ec2.SecurityGroup(
            self,
            "DbSecurityGroup",
            vpc=self.vpc,
            description="Allow MySQL access from EC2 only",
            allow_all_outbound=True,
        )
        self.db_security_group.add_ingress_rule(
            self.web_security_group, ec2.Port.tcp(MYSQL_PORT), "MySQL from the web tier"
        )

    @property
    def public_subnets(self) -> ec2.SubnetSelection:
        return ec2.SubnetSelection(subnets=[self.public_subnet])

    @property
    def private_subnets(self) -> ec2.SubnetSelection:
        return ec2.SubnetSelection(subnets=[self.private_subnet])
