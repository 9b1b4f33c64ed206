"""
Behave environment configuration for Vercel DDNS integration tests.
"""

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.domain = None
    context.subdomains = ()
    context.ttl = 3600
    context.families = ["ipv4"]
    context.oracle_answers = {"ipv4": [], "ipv6": []}
    context.existing_records = []
    context.provider = None
    context.report = None

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    logger.info(f"Completed scenario: {scenario.name}")
