"""Diagnostic tool for the esindex exporter.

Checks that the exporter's configuration loads, that the cluster is
reachable, what today's tick would publish, and that the metrics render.

Usage:
    docker compose run --rm esindex-exporter python diagnose.py
    docker compose run --rm esindex-exporter python diagnose.py --step config
    docker compose run --rm esindex-exporter python diagnose.py --step elasticsearch
    docker compose run --rm esindex-exporter python diagnose.py --step metrics
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import traceback
from datetime import datetime
from zoneinfo import ZoneInfo

from shared.es_client import ElasticsearchClient, ElasticsearchError, mask_uri
from shared.log import setup_logging

from checks import check_index_exists
from config import ConfigurationError, ExporterSettings, load_settings
from gating import decide_value, in_window, resolve_index_name
from metrics import IndexGauge

PASS = "\033[92m PASS \033[0m"
FAIL = "\033[91m FAIL \033[0m"
WARN = "\033[93m WARN \033[0m"
INFO = "\033[94m INFO \033[0m"


def header(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def result(label: str, ok: bool, detail: str = "") -> bool:
    status = PASS if ok else FAIL
    print(f"  [{status}] {label}")
    if detail:
        for line in detail.strip().split("\n"):
            print(f"         {line}")
    return ok


def info(label: str, detail: str = "") -> None:
    print(f"  [{INFO}] {label}")
    if detail:
        print(f"         {detail}")


def warn(label: str) -> None:
    print(f"  [{WARN}] {label}")


# -- Step: Config ──────────────────────────────────────────────

def check_config() -> ExporterSettings | None:
    header("Configuration")
    try:
        s = load_settings()
    except ConfigurationError as e:
        result("Config loaded", False, str(e).replace("; ", "\n"))
        return None

    result("Config loaded", True)
    values = {
        "ES_URI": mask_uri(s.es_uri),
        "ES_INDEX_PREFIX": s.es_index_prefix,
        "QUERY_INTERVAL": str(s.query_interval),
        "START_TIME / END_TIME": s.window_label,
        "TIMEOUT": f"{s.timeout}s",
        "TIMEZONE": s.timezone,
        "LISTEN_PORT": str(s.listen_port),
        "KEEP_STALE_INDICES": str(s.keep_stale_indices),
    }
    for key, val in values.items():
        print(f"         {key} = {val}")

    if s.window_is_empty:
        warn("END_TIME is not after START_TIME; the monitored window is empty")
    return s


# -- Step: Elasticsearch ───────────────────────────────────────

async def check_elasticsearch(settings: ExporterSettings, es: ElasticsearchClient | None = None) -> bool:
    header("Elasticsearch")
    es = es or ElasticsearchClient(settings.es_uri, timeout=settings.timeout)
    try:
        try:
            cluster = await es.ping()
        except ElasticsearchError as e:
            return result("Cluster reachable", False, str(e))
        version = cluster.get("version", {}).get("number", "unknown")
        result("Cluster reachable", True, f"{cluster.get('cluster_name', '?')} (version {version})")

        now = datetime.now(ZoneInfo(settings.timezone))
        index_name = resolve_index_name(settings.es_index_prefix, now.date())
        outcome = await check_index_exists(es, index_name)
        ok = result(f"Existence check for {index_name}", outcome.ok,
                    outcome.status.value if outcome.ok else outcome.error)

        inside = in_window(now.time(), settings.start_time, settings.end_time)
        decision = decide_value(inside, outcome)
        info(
            "Tick would publish",
            f"value={decision.value} publish={decision.should_publish} "
            f"reason={decision.reason} in_window={inside}",
        )
        return ok
    finally:
        await es.close()


# -- Step: Metrics ─────────────────────────────────────────────

def check_metrics(settings: ExporterSettings) -> bool:
    header("Metrics")
    try:
        gauge = IndexGauge()
        sample_index = resolve_index_name(settings.es_index_prefix, datetime.now(ZoneInfo(settings.timezone)).date())
        gauge.set(sample_index, 1.0)
        text = gauge.render().decode()
    except Exception:
        return result("Gauge renders", False, traceback.format_exc())
    return result("Gauge renders", sample_index in text, text.strip().split("\n")[-1])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="esindex exporter diagnostics")
    parser.add_argument(
        "--step",
        choices=["config", "elasticsearch", "metrics", "all"],
        default="all",
    )
    args = parser.parse_args(argv)

    setup_logging("DEBUG", "console")

    settings = check_config()
    if settings is None:
        return 1

    ok = True
    if args.step in ("elasticsearch", "all"):
        ok = asyncio.run(check_elasticsearch(settings)) and ok
    if args.step in ("metrics", "all"):
        ok = check_metrics(settings) and ok

    print()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
