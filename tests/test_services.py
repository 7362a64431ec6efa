import os
import unittest
from unittest import mock

from MSIConfig.config.msi_config import Config
from MSIConfig.database.database import Database
from MSIConfig.pubsub.pubsub import PubSub
from MSIConfig.services import Services


@mock.patch.dict(os.environ, {}, clear=True)
class TestServices(unittest.TestCase):
    def make_config(self, args):
        config = Config()
        config.parse(args)
        return config

    def test_from_config(self):
        config = self.make_config(["--default_adducts_positive", "+H", "--slack_channel", "#sm"])
        with mock.patch("MSIConfig.database.database.create_engine") as create_engine_mock:
            services = Services.from_config(config)
        create_engine_mock.assert_called_once()
        self.assertIsInstance(services.pubsub, PubSub)
        self.assertIsInstance(services.database, Database)
        self.assertFalse(services.notifier.enabled)
        self.assertEqual(services.notifier.channel, "#sm")
        self.assertEqual(services.generator._default_adducts["+"], ["+H"])

        services.close()
        create_engine_mock.return_value.dispose.assert_called_once()

    def test_without_database(self):
        config = self.make_config([])
        with Services.from_config(config, with_database=False) as services:
            self.assertIsNone(services.database)

    def test_database_failure_is_fatal(self):
        config = self.make_config([])
        with mock.patch("MSIConfig.database.database.create_engine", side_effect=RuntimeError("no driver")):
            with self.assertRaises(RuntimeError):
                Services.from_config(config)


if __name__ == "__main__":
    unittest.main()
