from typing import Optional

from aws_cdk import CfnOutput, CfnParameter, Stack
from constructs import Construct

from webapp_infra.compute import WebServer
from webapp_infra.database import Database
from webapp_infra.network import Network
from webapp_infra.settings import StackSettings


class WebAppStack(Stack):
    """Two-tier web application: one web instance in front of one MySQL database."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Optional[StackSettings] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.settings = settings or StackSettings.from_context(self.node)

        db_password = CfnParameter(
            self,
            "DbPassword",
            type="String",
            no_echo=True,
            min_length=8,
            description="Master password of the MySQL database",
        )

        self.network = Network(self, "Network", settings=self.settings)
        self.database = Database(
            self, "Database", settings=self.settings, network=self.network, password=db_password
        )
        self.web_server = WebServer(
            self, "WebServer", settings=self.settings, network=self.network, database=self.database
        )

        CfnOutput(
            self,
            "publicIp",
            value=self.web_server.public_ip,
            description="Public IP of the web instance",
        )
        CfnOutput(
            self,
            "dbEndpoint",
            value=self.database.endpoint,
            description="MySQL endpoint (address:port)",
        )
