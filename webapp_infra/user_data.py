"""Boot script for the web instance: install Docker and run the app container."""

from typing import List

from aws_cdk import aws_ec2 as ec2

from webapp_infra.settings import StackSettings


def boot_commands(settings: StackSettings, db_host: str, db_password: str) -> List[str]:
    """
    Shell lines run by cloud-init on first boot.

    ``db_host`` and ``db_password`` are usually CDK tokens and are only
    resolved by CloudFormation at deploy time.

    The container gets the bare hostname in ``DB_HOST``, without the
    ``:port`` suffix of the RDS endpoint; MySQL is always on 3306 here, so
    the application must not expect to parse a port out of ``DB_HOST``.
    """
    docker_run = " \\\n    ".join(
        [
            f"docker run -d -p {settings.host_port}:{settings.container_port}",
            f"-e DB_HOST={db_host}",
            f"-e DB_USER={settings.db_user}",
            f"-e DB_PASSWORD={db_password}",
            f"-e DB_NAME={settings.db_name}",
            settings.container_image,
        ]
    )
    return [
        "sudo yum update -y",
        "sudo amazon-linux-extras install docker -y",
        "sudo systemctl enable --now docker",
        "sudo usermod -a -G docker ec2-user",
        "## Pause to let RDS become available",
        f"sleep {settings.db_wait_seconds}",
        docker_run,
    ]


def build_user_data(settings: StackSettings, db_host: str, db_password: str) -> ec2.UserData:
    user_data = ec2.UserData.for_linux(shebang="#!/bin/bash")
    user_data.add_commands(*boot_commands(settings, db_host, db_password))
    return user_data
