"""
Module related to relevant environment variables
"""

import os

from MSIConfig.config.logger_config import get_logger, log_parameter, log_section_title

logger = get_logger(__name__)

# Define constants for environment variable names

# Adducts
MSICONFIG_ADDUCTS_POSITIVE = "MSICONFIG_ADDUCTS_POSITIVE"
MSICONFIG_ADDUCTS_NEGATIVE = "MSICONFIG_ADDUCTS_NEGATIVE"

# Logging
MSICONFIG_LOG_LEVEL = "MSICONFIG_LOG_LEVEL"

# Slack
SLACK_WEBHOOK_URL = "SLACK_WEBHOOK_URL"
SLACK_CHANNEL = "SLACK_CHANNEL"

# Database
MSICONFIG_DB_HOST = "MSICONFIG_DB_HOST"
MSICONFIG_DB_PORT = "MSICONFIG_DB_PORT"
MSICONFIG_DB_DATABASE = "MSICONFIG_DB_DATABASE"
MSICONFIG_DB_USER = "MSICONFIG_DB_USER"
MSICONFIG_DB_PASSWORD = "MSICONFIG_DB_PASSWORD"

# List of environment variables
env_vars = [
    MSICONFIG_ADDUCTS_POSITIVE,
    MSICONFIG_ADDUCTS_NEGATIVE,
    MSICONFIG_LOG_LEVEL,
    SLACK_WEBHOOK_URL,
    SLACK_CHANNEL,
    MSICONFIG_DB_HOST,
    MSICONFIG_DB_PORT,
    MSICONFIG_DB_DATABASE,
    MSICONFIG_DB_USER,
    MSICONFIG_DB_PASSWORD,
]

# never written to the log in clear text
secret_env_vars = {SLACK_WEBHOOK_URL, MSICONFIG_DB_PASSWORD}


def log_environment_variables():
    """
    Helper function to log environment variables.
    :return:
    """
    log_section_title(logger=logger, title="[ ENVIRONMENT VARIABLES ]")
    for var in env_vars:
        value = os.environ.get(var)
        if value is None:
            value = "Not Set"
        elif var in secret_env_vars:
            value = "****"
        log_parameter(
            logger=logger,
            parameter_name=var,
            parameter_value=value,
        )
