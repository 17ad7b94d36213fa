"""
Pytest fixtures for the webapp_infra stack tests.
"""

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from webapp_infra.settings import StackSettings
from webapp_infra.webapp_stack import WebAppStack

# Region only: AZs stay tokens and no context lookups are triggered
TEST_ENV = cdk.Environment(region="us-west-2")


@pytest.fixture
def settings():
    return StackSettings(db_user="admin")


@pytest.fixture
def make_stack():
    """Factory building a WebAppStack from context or explicit settings."""

    def _make(context=None, settings=None):
        app = cdk.App(context={"dbUser": "admin"} if context is None else context)
        return WebAppStack(app, "TestStack", settings=settings, env=TEST_ENV)

    return _make


@pytest.fixture
def stack(make_stack):
    return make_stack()


@pytest.fixture
def template(stack):
    return Template.from_stack(stack)
