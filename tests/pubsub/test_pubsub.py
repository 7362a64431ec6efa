import threading
import unittest

from MSIConfig.pubsub.pubsub import PubSub


class TestPubSub(unittest.TestCase):
    def setUp(self):
        self.pubsub = PubSub()

    def test_publish_to_all_subscribers(self):
        received_a, received_b, other = [], [], []
        self.pubsub.subscribe("datasetStatusUpdated", received_a.append)
        self.pubsub.subscribe("datasetStatusUpdated", received_b.append)
        self.pubsub.subscribe("datasetDeleted", other.append)

        self.pubsub.publish("datasetStatusUpdated", {"id": "ds1", "status": "FINISHED"})

        self.assertEqual(received_a, [{"id": "ds1", "status": "FINISHED"}])
        self.assertEqual(received_b, [{"id": "ds1", "status": "FINISHED"}])
        self.assertEqual(other, [])

    def test_publish_without_subscribers(self):
        self.pubsub.publish("nobody", 1)
        self.assertEqual(self.pubsub.subscription_count("nobody"), 0)

    def test_unsubscribe(self):
        received = []
        subscription_id = self.pubsub.subscribe("trigger", received.append)
        self.pubsub.publish("trigger", 1)
        self.pubsub.unsubscribe(subscription_id)
        self.pubsub.publish("trigger", 2)
        self.assertEqual(received, [1])
        self.assertEqual(self.pubsub.subscription_count("trigger"), 0)
        # unknown ids are ignored
        self.pubsub.unsubscribe(subscription_id)

    def test_subscription_ids_are_unique(self):
        first = self.pubsub.subscribe("trigger", print)
        second = self.pubsub.subscribe("trigger", print)
        self.assertNotEqual(first, second)

    def test_failing_handler_is_isolated(self):
        received = []

        def failing(payload):
            raise RuntimeError("boom")

        self.pubsub.subscribe("trigger", failing)
        self.pubsub.subscribe("trigger", received.append)
        with self.assertLogs("MSIConfig.pubsub.pubsub", level="ERROR"):
            self.pubsub.publish("trigger", "payload")
        self.assertEqual(received, ["payload"])

    def test_iterator(self):
        iterator = self.pubsub.iterator(["a", "b"])
        self.pubsub.publish("a", 1)
        self.pubsub.publish("c", 2)
        self.pubsub.publish("b", 3)
        self.assertEqual(next(iterator), 1)
        self.assertEqual(next(iterator), 3)
        iterator.close()
        self.assertEqual(list(iterator), [])
        self.assertEqual(self.pubsub.subscription_count("a"), 0)

    def test_iterator_across_threads(self):
        with self.pubsub.iterator("trigger") as iterator:
            publisher = threading.Thread(target=lambda: [self.pubsub.publish("trigger", i) for i in range(3)])
            publisher.start()
            received = [next(iterator) for _ in range(3)]
            publisher.join()
        self.assertEqual(received, [0, 1, 2])


if __name__ == "__main__":
    unittest.main()
