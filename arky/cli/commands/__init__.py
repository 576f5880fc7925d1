"""
CLI Commands.

One Typer group per platform resource.
"""

from arky.cli.commands.account import app as account_app
from arky.cli.commands.agent import app as agent_app
from arky.cli.commands.audience import app as audience_app
from arky.cli.commands.auth import app as auth_app
from arky.cli.commands.booking import app as booking_app
from arky.cli.commands.business import app as business_app
from arky.cli.commands.config import app as config_app
from arky.cli.commands.db import app as db_app
from arky.cli.commands.event import app as event_app
from arky.cli.commands.media import app as media_app
from arky.cli.commands.network import app as network_app
from arky.cli.commands.node import app as node_app
from arky.cli.commands.notification import app as notification_app
from arky.cli.commands.order import app as order_app
from arky.cli.commands.platform import app as platform_app
from arky.cli.commands.product import app as product_app
from arky.cli.commands.promo_code import app as promo_code_app
from arky.cli.commands.provider import app as provider_app
from arky.cli.commands.service import app as service_app
from arky.cli.commands.shipping import app as shipping_app
from arky.cli.commands.workflow import app as workflow_app

__all__ = [
    "account_app",
    "agent_app",
    "audience_app",
    "auth_app",
    "booking_app",
    "business_app",
    "config_app",
    "db_app",
    "event_app",
    "media_app",
    "network_app",
    "node_app",
    "notification_app",
    "order_app",
    "platform_app",
    "product_app",
    "promo_code_app",
    "provider_app",
    "service_app",
    "shipping_app",
    "workflow_app",
]
