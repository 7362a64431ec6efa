from typing import Optional

from MSIConfig.config.adducts_config import AdductsConfig
from MSIConfig.config.database_config import DatabaseConfig
from MSIConfig.config.logger_config import get_logger
from MSIConfig.config.msi_config import Config
from MSIConfig.config.slack_config import SlackConfig
from MSIConfig.database.database import Database
from MSIConfig.notifications.slack_notifier import SlackNotifier
from MSIConfig.processing.config_generator import ProcessingConfigGenerator
from MSIConfig.pubsub.pubsub import PubSub

logger = get_logger(__name__)


class Services:
    def __init__(
            self,
            generator: ProcessingConfigGenerator,
            notifier: SlackNotifier,
            pubsub: PubSub,
            database: Optional[Database] = None,
    ):
        """
        Process-wide collaborators, built once at startup and handed to the components using them.
        """
        self.generator = generator
        self.notifier = notifier
        self.pubsub = pubsub
        self.database = database

    @classmethod
    def from_config(cls, config: Config, with_database: bool = True) -> "Services":
        """
        Construct all services. Failures are not caught: without them the process can not serve.
        """
        adducts_config = AdductsConfig.from_parser(config)
        generator = ProcessingConfigGenerator(adducts_config.default_adducts, adducts_config.default_ppm)

        slack_config = SlackConfig.from_parser(config)
        notifier = SlackNotifier.from_config(slack_config)
        if not slack_config.enabled:
            logger.info("No Slack webhook configured, notifications are disabled.")

        pubsub = PubSub()

        database = Database(DatabaseConfig.from_parser(config)) if with_database else None

        return cls(generator=generator, notifier=notifier, pubsub=pubsub, database=database)

    def close(self) -> None:
        self.notifier.flush()
        self.notifier.close()
        if self.database is not None:
            self.database.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
