from typing import Optional, Any, Union, List

import configargparse

from MSIConfig.config import env_variables
from MSIConfig.config.logger_config import get_logger, log_section_title, log_parameter

# Create a logger for this module
logger = get_logger(__name__)

# options whose values never reach the log
SECRET_OPTIONS = ("slack_webhook_url", "db_password")


class Config:
    def __init__(self):
        self._namespace = None
        self._parser = configargparse.ArgParser(
            description="MSIConfig: derive processing configurations for mass-spectrometry imaging datasets.",
            args_for_setting_config_path=["-c", "--config"],
            formatter_class=configargparse.ArgumentDefaultsHelpFormatter,
        )
        self._define_arguments()

    def get(self, option: str, default: Optional[Any] = None) -> Optional[Any]:
        """
        Retrieve configuration options with a default value if the option does not exist.
        :param option: str, the configuration option to retrieve.
        :param default: Optional[str], the default value to return if the option does not exist. Defaults to None.
        :return: Optional[str], The value of the configuration option or the default value.
        """
        if self._namespace is None:
            raise RuntimeError("The configuration has not been initialized. Call `parse()` first.")
        return self._namespace.get(option, default)

    def parse(self, args_str: Optional[Union[str, List[str]]] = None) -> None:
        """
        Parse the configuration settings.

        Parameters
        ----------
        args_str : Optional[Union[str, List[str]]]
            If None, arguments are taken from sys.argv; otherwise, a string or list of arguments.
            Arguments not specified on the command line are taken from the environment or the config file.
        """
        if self._namespace is not None:
            return  # Skip parsing if already parsed

        # Parse the arguments
        self._namespace = vars(self._parser.parse_args(args_str))

        self._validate_adducts("default_adducts_positive")
        self._validate_adducts("default_adducts_negative")
        self._validate_webhook_url("slack_webhook_url")
        self._validate_positive_number("db_port", True)
        self._validate_positive_number("db_pool_size", True)
        self._validate_positive_number("db_idle_timeout", True)
        self._validate_positive_number("default_ppm", True)

    def _define_arguments(self) -> None:
        """
        Define the command-line and config file arguments.
        """
        # IO arguments
        self._parser.add_argument(
            "--metadata_file",
            help="JSON file containing the experiment metadata of a dataset.",
            type=str,
            action="store",
            dest="metadata_file",
            metavar="<path>",
        )
        self._parser.add_argument(
            "--output_file",
            help="Write the processing configuration to this file instead of stdout.",
            type=str,
            action="store",
            dest="output_file",
            metavar="<path>",
        )
        self._parser.add_argument(
            "--log_dir",
            help="Directory to write log files to. No log file is written if not set.",
            type=str,
            action="store",
            dest="log_dir",
            metavar="<path>",
        )

        # Processing defaults
        self._parser.add_argument(
            "--default_adducts_positive",
            default="+H,+Na,+K",
            type=str,
            env_var=env_variables.MSICONFIG_ADDUCTS_POSITIVE,
            help="Comma separated adducts used for positive mode datasets that do not specify adducts "
                 "(default: %(default)s).",
            dest="default_adducts_positive",
        )
        self._parser.add_argument(
            "--default_adducts_negative",
            default="-H,+Cl",
            type=str,
            env_var=env_variables.MSICONFIG_ADDUCTS_NEGATIVE,
            help="Comma separated adducts used for negative mode datasets that do not specify adducts. "
                 "Use the '--default_adducts_negative=-H,+Cl' form on the command line (default: %(default)s).",
            dest="default_adducts_negative",
        )
        self._parser.add_argument(
            "--default_ppm",
            default=3.0,
            type=float,
            help="Mass tolerance in ppm used when a dataset does not specify one (default: %(default)s).",
            dest="default_ppm",
        )

        # Slack
        self._parser.add_argument(
            "--slack_webhook_url",
            type=str,
            env_var=env_variables.SLACK_WEBHOOK_URL,
            help="Slack incoming webhook URL. Notifications are disabled if not set.",
            dest="slack_webhook_url",
        )
        self._parser.add_argument(
            "--slack_channel",
            type=str,
            env_var=env_variables.SLACK_CHANNEL,
            help="Slack channel to post notifications to.",
            dest="slack_channel",
        )

        # Database
        self._parser.add_argument(
            "--db_host",
            default="localhost",
            type=str,
            env_var=env_variables.MSICONFIG_DB_HOST,
            help="Database host (default: %(default)s).",
            dest="db_host",
        )
        self._parser.add_argument(
            "--db_port",
            default=5432,
            type=int,
            env_var=env_variables.MSICONFIG_DB_PORT,
            help="Database port (default: %(default)s).",
            dest="db_port",
        )
        self._parser.add_argument(
            "--db_database",
            default="sm",
            type=str,
            env_var=env_variables.MSICONFIG_DB_DATABASE,
            help="Database name (default: %(default)s).",
            dest="db_database",
        )
        self._parser.add_argument(
            "--db_user",
            default="sm",
            type=str,
            env_var=env_variables.MSICONFIG_DB_USER,
            help="Database user (default: %(default)s).",
            dest="db_user",
        )
        self._parser.add_argument(
            "--db_password",
            default="",
            type=str,
            env_var=env_variables.MSICONFIG_DB_PASSWORD,
            help="Database password.",
            dest="db_password",
        )
        self._parser.add_argument(
            "--db_pool_size",
            default=10,
            type=int,
            help="Maximum number of pooled database connections (default: %(default)s).",
            dest="db_pool_size",
        )
        self._parser.add_argument(
            "--db_idle_timeout",
            default=30,
            type=int,
            help="Seconds after which a pooled connection is replaced (default: %(default)s).",
            dest="db_idle_timeout",
        )
        self._parser.add_argument(
            "--db_search_path",
            default="knex,public",
            type=str,
            help="Comma separated schema search path (default: %(default)s).",
            dest="db_search_path",
        )

        # Logging
        self._parser.add_argument(
            "--log_level",
            default="INFO",
            type=str,
            env_var=env_variables.MSICONFIG_LOG_LEVEL,
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help=(
                "Set the logging level for console output "
                "(default: %(default)s). Log file will always capture all levels."
            ),
            dest="log_level",
        )

    def _validate_adducts(self, param: str) -> None:
        value = self.get(param)
        adducts = [adduct.strip() for adduct in value.split(",") if adduct.strip()]
        if not adducts:
            raise ValueError(f"--{param}: at least one adduct is required. Got '{value}'.")

    def _validate_webhook_url(self, param: str) -> None:
        url = self.get(param)
        if url and not url.startswith(("http://", "https://")):
            raise ValueError(f"--{param}: '{url}' is not an http(s) URL.")

    def _validate_positive_number(self, param: str, strict: bool = False) -> None:
        value = self.get(param)
        float_value = float(value)
        if (strict and float_value <= 0) or (not strict and float_value < 0):
            comparison = "greater than 0" if strict else "0 or greater"
            raise ValueError(f"--{param}: {value} is not a positive number ({comparison}).")

    def log_parameters(self) -> None:
        """Log all chosen parameters."""
        log_section_title(logger=logger, title="[ CONFIGURATION ]")
        for key, value in self._namespace.items():
            if key in SECRET_OPTIONS and value:
                value = "****"
            log_parameter(logger=logger, parameter_name=key, parameter_value=value)

    def __getattr__(self, option):
        """
        Retrieve configuration options as attributes.

        Raises a KeyError with a helpful message if the option does not exist.
        """
        if option.startswith("_"):
            raise AttributeError(option)
        if self._namespace is None:
            raise RuntimeError("The configuration has not been initialized. Call `parse()` first.")
        if option not in self._namespace:
            raise KeyError(f"The configuration option '{option}' does not exist.")
        return self._namespace[option]

    def __getitem__(self, item):
        return self.__getattr__(item)
