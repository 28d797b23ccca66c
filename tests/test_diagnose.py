import asyncio

import httpx

import diagnose
from config import ExporterSettings
from shared.es_client import ElasticsearchClient


def _settings():
    return ExporterSettings(
        es_uri="http://elastic:secret@es:9200",
        es_index_prefix="logs-",
        query_interval=10,
    )


def _es(handler):
    return ElasticsearchClient(
        "http://elastic:secret@es:9200", transport=httpx.MockTransport(handler),
    )


def test_check_elasticsearch_passes_when_reachable(capsys):
    def handler(request):
        if request.method == "HEAD":
            return httpx.Response(404)
        return httpx.Response(200, json={"cluster_name": "prod", "version": {"number": "8.13.0"}})

    assert asyncio.run(diagnose.check_elasticsearch(_settings(), _es(handler))) is True
    out = capsys.readouterr().out
    assert "Cluster reachable" in out
    assert "not_exists" in out
    assert "Tick would publish" in out


def test_check_elasticsearch_fails_when_unreachable(capsys):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert asyncio.run(diagnose.check_elasticsearch(_settings(), _es(handler))) is False
    assert "secret" not in capsys.readouterr().out


def test_check_metrics_renders_gauge():
    assert diagnose.check_metrics(_settings()) is True
