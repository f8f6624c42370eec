import json
import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.urls import reverse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from api.topology_api.datasource_common.builder import DEDUP_ANALYZED, DEDUP_POLICIES
from api.topology_api.errors import InvalidAddress, MalformedReport, ReportFetchError
from core.topology_platform.engine import TopologyEngine
from datasource_peers.datasource_peers_plugin.plugin import (
    ControlNodeDatasourcePlugin,
    ReportFileDatasourcePlugin,
)
from visualizer_cytoscape.visualizer_cytoscape_plugin.plugin import CytoscapeVisualizer

LOGGER = logging.getLogger(__name__)

DATASOURCE_ID = "control-node"
VISUALIZER_ID = "cytoscape"

_ENGINE: TopologyEngine | None = None


def get_engine() -> TopologyEngine:
    global _ENGINE
    if _ENGINE is None:
        engine = TopologyEngine()
        # Available even when the entry points are not installed
        engine.registry.register_datasource(DATASOURCE_ID, ControlNodeDatasourcePlugin)
        engine.registry.register_datasource("report-file", ReportFileDatasourcePlugin)
        engine.registry.register_visualizer(VISUALIZER_ID, CytoscapeVisualizer)
        _ENGINE = engine
    return _ENGINE


def reset_engine() -> None:
    global _ENGINE
    _ENGINE = None


def json_error(
    status_code: int,
    error: str,
    message: str,
    details: object | None = None,
) -> JsonResponse:
    payload: dict[str, object] = {
        "ok": False,
        "status": status_code,
        "error": error,
        "message": message,
    }
    if details is not None:
        payload["details"] = details
    return JsonResponse(payload, status=status_code)


def _error_details(exc: Exception) -> dict[str, object]:
    details: dict[str, object] = {}
    for attr in ("position", "peer", "url", "status_code"):
        value = getattr(exc, attr, None)
        if value is not None:
            details[attr] = value
    return details


def _graph_payload(result, source: str) -> dict[str, object]:
    graph = result.graph
    return {
        "ok": True,
        "sequence": result.sequence,
        "committed": result.committed,
        "meta": {
            "node_count": len(graph.nodes),
            "edge_count": len(graph.edges),
            "source": source,
        },
        "graph": graph.to_dict(),
    }


def _failure_response(status_code: int, error: str, exc: Exception) -> JsonResponse:
    # The last good graph stays in the workspace; hand it back so the page can keep it
    response = json_error(status_code, error, str(exc), details=_error_details(exc) or None)
    last_good = get_engine().get_current_graph()
    if last_good is not None:
        payload = json.loads(response.content)
        payload["last_good"] = last_good.to_dict()
        response = JsonResponse(payload, status=status_code)
    return response


def _dedup_param(request: HttpRequest) -> str | None:
    """The requested dedup policy, or None when it is not one we know."""
    dedup = request.GET.get("dedup", "").strip() or DEDUP_ANALYZED
    return dedup if dedup in DEDUP_POLICIES else None


def _control_url_allowed(base_url: str, engine: TopologyEngine) -> bool:
    # Outside DEBUG the server only fetches from control nodes it was told about
    if settings.DEBUG:
        return True
    allowed = {engine.config.control_url.rstrip("/")}
    allowed.update(getattr(settings, "TOPOLOGY_ALLOWED_CONTROL_URLS", []))
    return base_url.rstrip("/") in allowed


def _bad_dedup_response() -> JsonResponse:
    return json_error(400, "BadRequest", f"Unknown dedup policy. Use one of: {', '.join(DEDUP_POLICIES)}.")


@require_GET
def index(request: HttpRequest) -> HttpResponse:
    html = get_engine().render(VISUALIZER_ID, refresh_url=reverse("explorer:peers-api"))
    return HttpResponse(html, content_type="text/html; charset=utf-8")


@require_GET
def peers_api(request: HttpRequest) -> JsonResponse:
    engine = get_engine()
    base_url = request.GET.get("base_url", "").strip() or engine.config.control_url
    dedup = _dedup_param(request)
    if dedup is None:
        return _bad_dedup_response()
    if not _control_url_allowed(base_url, engine):
        LOGGER.warning("Refused to fetch peers from unlisted control node %s", base_url)
        return json_error(403, "Forbidden", f"'{base_url}' is not an allowed control node.")

    try:
        result = engine.refresh(DATASOURCE_ID, base_url, dedup=dedup)
    except (MalformedReport, InvalidAddress) as exc:
        return _failure_response(422, type(exc).__name__, exc)
    except ReportFetchError as exc:
        return _failure_response(502, "ReportFetchError", exc)
    except ValueError as exc:
        return json_error(400, "BadRequest", str(exc))

    return JsonResponse(_graph_payload(result, source=base_url))


@csrf_exempt
@require_POST
def report_api(request: HttpRequest) -> JsonResponse:
    try:
        body = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return json_error(400, "BadRequest", "Invalid JSON body.")

    dedup = _dedup_param(request)
    if dedup is None:
        return _bad_dedup_response()
    try:
        result = get_engine().ingest(body, dedup=dedup)
    except (MalformedReport, InvalidAddress) as exc:
        return _failure_response(422, type(exc).__name__, exc)
    except ValueError as exc:
        return json_error(400, "BadRequest", str(exc))

    return JsonResponse(_graph_payload(result, source="push"))


@csrf_exempt
@require_POST
def workspace_undo_api(request: HttpRequest) -> JsonResponse:
    graph = get_engine().undo()
    if graph is None:
        return json_error(404, "NotFound", "No earlier topology to go back to.")
    return JsonResponse({"ok": True, "graph": graph.to_dict()})
