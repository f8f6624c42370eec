import argparse
import asyncio
import logging
import os
import signal
import webbrowser

from api.topology_api.errors import TopologyError
from core.topology_platform import PlatformConfig, TopologyEngine, TopologyPoller, configure_logging
from datasource_peers.datasource_peers_plugin.plugin import (
    ControlNodeDatasourcePlugin,
    ReportFileDatasourcePlugin,
)
from visualizer_cytoscape.visualizer_cytoscape_plugin.plugin import CytoscapeVisualizer

log = logging.getLogger("topology.run")


def build_engine(config: PlatformConfig) -> TopologyEngine:
    engine = TopologyEngine(config=config)
    engine.registry.register_datasource("control-node", ControlNodeDatasourcePlugin)
    engine.registry.register_datasource("report-file", ReportFileDatasourcePlugin)
    engine.registry.register_visualizer("cytoscape", CytoscapeVisualizer)
    return engine


def write_page(engine: TopologyEngine, out_path: str) -> str:
    html = engine.render("cytoscape")
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(html)
    return os.path.abspath(out_path)


async def poll_forever(engine: TopologyEngine, out_path: str, **options) -> None:
    def on_commit(result):
        write_page(engine, out_path)
        log.info("Wrote %s (refresh #%d)", out_path, result.sequence)

    poller = TopologyPoller(engine, "control-node", on_commit=on_commit, **options)
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, poller.request_stop)
        except (NotImplementedError, RuntimeError):
            # Windows event loops have no signal handlers; Ctrl+C still raises KeyboardInterrupt
            pass

    await poller.start()
    log.info("Polling stopped")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Render the peer topology seen by a gossip control node.")
    parser.add_argument("--control-url", help="control node base URL (default: TOPOLOGY_CONTROL_URL)")
    parser.add_argument("--report-file", help="render a saved /peers report instead of fetching one")
    parser.add_argument("--dedup", choices=["analyzed", "undirected"], default="analyzed")
    parser.add_argument("--out", default=os.path.join("out", "topology.html"))
    parser.add_argument("--poll", action="store_true", help="keep refreshing the page every poll interval")
    parser.add_argument("--no-browser", action="store_true")
    args = parser.parse_args(argv)

    config = PlatformConfig.from_env()
    configure_logging(config.log_level)
    if args.control_url:
        config.control_url = args.control_url.rstrip("/")

    engine = build_engine(config)

    try:
        if args.report_file:
            result = engine.refresh("report-file", args.report_file, dedup=args.dedup)
        else:
            result = engine.refresh("control-node", config.control_url, dedup=args.dedup)
    except TopologyError as exc:
        log.error("%s", exc)
        return 1
    except (OSError, ValueError) as exc:
        # Missing or undecodable report file
        log.error("Could not load topology: %s", exc)
        return 1

    print(f"Loaded topology #{result.sequence}")
    print(f"  Nodes : {len(result.graph.nodes)}")
    print(f"  Edges : {len(result.graph.edges)}")

    abs_path = write_page(engine, args.out)
    if not args.no_browser:
        webbrowser.open(f"file:///{abs_path.replace(os.sep, '/')}")

    if args.poll and not args.report_file:
        try:
            asyncio.run(poll_forever(engine, args.out, source=config.control_url, dedup=args.dedup))
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
