import json
import logging
from typing import Any

import requests

from api.topology_api.datasource_common.base import BaseDatasourcePlugin
from api.topology_api.errors import MalformedReport, ReportFetchError

DEFAULT_BASE_URL = "http://127.0.0.1:7080"
DEFAULT_TIMEOUT = 5.0

logger = logging.getLogger(__name__)

DEDUP_PARAMETER = {
    "type": "str",
    "label": "Edge deduplication",
    "required": False,
    "default": "analyzed",
    "choices": ["analyzed", "undirected"],
}


class ControlNodeDatasourcePlugin(BaseDatasourcePlugin):
    # Asks a gossip control node for every peer it knows about (GET /peers)
    # The answer is a report: each node with its own address and the peers it sees

    @property
    def plugin_id(self) -> str:
        return "control-node"

    @property
    def display_name(self) -> str:
        return "Gossip control node"

    def parameters_schema(self) -> dict:
        return {
            "base_url": {
                "type": "str",
                "label": "Control node URL",
                "required": True,
                "default": DEFAULT_BASE_URL,
            },
            "timeout": {
                "type": "float",
                "label": "Request timeout (s)",
                "required": False,
                "default": DEFAULT_TIMEOUT,
            },
            "dedup": DEDUP_PARAMETER,
        }

    @staticmethod
    def peers_url(base_url: str) -> str:
        return base_url.rstrip("/") + "/peers"

    def _parse_source(self, source, **kwargs) -> dict:
        base_url = source if isinstance(source, str) and source.strip() else kwargs.get("base_url")
        if not isinstance(base_url, str) or not base_url.strip():
            base_url = DEFAULT_BASE_URL

        url = self.peers_url(base_url.strip())
        timeout = kwargs.get("timeout") or DEFAULT_TIMEOUT

        logger.info("Fetching peers from %s", url)
        try:
            response = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
        except requests.RequestException as exc:
            raise ReportFetchError(f"Could not reach control node at {url}: {exc}", url=url) from exc

        if response.status_code != 200:
            raise ReportFetchError(
                f"Control node at {url} answered with HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ReportFetchError(
                f"Control node at {url} did not return JSON", url=url, status_code=response.status_code
            ) from exc


class ReportFileDatasourcePlugin(BaseDatasourcePlugin):
    # Reads a report saved from GET /peers, for offline inspection

    @property
    def plugin_id(self) -> str:
        return "report-file"

    @property
    def display_name(self) -> str:
        return "Saved peer report (JSON)"

    def parameters_schema(self) -> dict:
        return {
            "file_path": {
                "type": "str",
                "label": "Path to report JSON file",
                "required": True,
            },
            "dedup": DEDUP_PARAMETER,
        }

    def _parse_source(self, source: Any, **kwargs) -> dict:
        path = self._resolve_path(source, kwargs)
        with open(path, 'r', encoding='utf-8') as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as exc:
                raise MalformedReport(f"'{path}' is not valid JSON ({exc.msg})") from exc
