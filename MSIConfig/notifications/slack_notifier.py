"""Slack notifications about dataset metadata edits."""

import json
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Dict, List, Mapping, Optional

import jsonpatch
import requests

from MSIConfig.config.logger_config import get_logger
from MSIConfig.config.slack_config import SlackConfig

logger = get_logger(__name__)

REQUEST_TIMEOUT = 10.0


def metadata_diff(old_metadata: Mapping[str, Any], new_metadata: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Structural difference between two metadata snapshots as JSON Patch (RFC 6902) operations.
    """
    return jsonpatch.make_patch(old_metadata, new_metadata).patch


class SlackNotifier:
    """
    Posts messages to a Slack incoming webhook.

    Messages are sent from a background worker: callers never wait on the network and
    a failed post is logged, not raised. Without a webhook URL every call is a no-op.
    """

    def __init__(self, webhook_url: Optional[str] = None, channel: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.webhook_url = webhook_url
        self.channel = channel
        self._session = session or requests.Session()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: List[Future] = []
        if self.enabled:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="slack-notifier")

    @classmethod
    def from_config(cls, slack_config: SlackConfig) -> "SlackNotifier":
        return cls(webhook_url=slack_config.webhook_url, channel=slack_config.channel)

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def metadata_change_notify(self, user: str, dataset_id: str,
                               old_metadata: Mapping[str, Any], new_metadata: Mapping[str, Any]) -> None:
        if not self.enabled:
            return
        # snapshots may be malformed, that is often why an edit is reported
        try:
            diff = metadata_diff(old_metadata, new_metadata)
            dataset_name = (old_metadata.get("metaspace_options") or {}).get("Dataset_Name") or ""
            self.send(
                f"{user} edited metadata of {dataset_name} (id: {dataset_id})"
                "\nDifferences:\n" + json.dumps(diff, indent=2)
            )
        except Exception:
            logger.exception(f"Failed to build metadata change notification for dataset {dataset_id}")

    def metadata_update_failed_notify(self, user: str, dataset_id: str, error_message: str) -> None:
        if not self.enabled:
            return
        try:
            self.send(f"{user} tried to edit metadata (ds_id={dataset_id})\nError: {error_message}")
        except Exception:
            logger.exception(f"Failed to build metadata update failure notification for dataset {dataset_id}")

    def send(self, text: str) -> None:
        """Queue a message for posting."""
        if not self.enabled:
            return
        if self._executor is None:
            raise RuntimeError("The notifier has been closed.")
        payload = {"text": text, "channel": self.channel}
        self._pending = [future for future in self._pending if not future.done()]
        self._pending.append(self._executor.submit(self._post, payload))

    def _post(self, payload: Dict[str, Any]) -> None:
        try:
            response = self._session.post(self.webhook_url, json=payload, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Failed to send Slack notification", extra={"meta": {"error": str(exc)}})
            return
        except Exception:
            # nobody reads the future's result
            logger.exception("Failed to send Slack notification")
            return
        logger.debug(f"Slack notification sent to {self.channel or 'default channel'}")

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait until all queued messages have been posted (or failed)."""
        pending, self._pending = self._pending, []
        wait(pending, timeout=timeout)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self._session.close()
