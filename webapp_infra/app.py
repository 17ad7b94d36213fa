#!/usr/bin/env python3
import logging
import os

import aws_cdk as cdk

from webapp_infra.settings import StackSettings
from webapp_infra.webapp_stack import WebAppStack

logger = logging.getLogger(__name__)


def build_app(app: cdk.App) -> WebAppStack:
    settings = StackSettings.from_context(app.node)
    stack_name = app.node.try_get_context("stackName") or "WebAppStack"

    stack = WebAppStack(
        app,
        stack_name,
        settings=settings,
        env=cdk.Environment(
            account=app.node.try_get_context("account") or os.getenv("CDK_DEFAULT_ACCOUNT"),
            region=settings.region,
        ),
        description=f"{settings.project_name} two-tier web application (EC2 + RDS MySQL)",
    )
    cdk.Tags.of(app).add("Project", settings.project_name)
    cdk.Tags.of(app).add("Environment", settings.environment)

    logger.info(
        "Synthesizing %s for %s in %s", stack_name, settings.environment, settings.region
    )
    return stack


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    app = cdk.App()
    build_app(app)
    app.synth()
