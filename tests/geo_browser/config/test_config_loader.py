import json
from pathlib import Path

import pytest

from geo_browser.config import load_global_config
from geo_browser.config.config_loader import DATA_ROOT_ENV, build_source
from geo_browser.config.model import SourceConfig
from geo_browser.core.aggregation import ChartKind
from geo_browser.core.exceptions import ConfigError
from geo_browser.services.sources import HttpDatasetSource, LocalDirectorySource


@pytest.fixture(autouse=True)
def _no_data_root_env(monkeypatch):
    monkeypatch.delenv(DATA_ROOT_ENV, raising=False)


def _write_global(root: Path, payload) -> None:
    root.mkdir(parents=True, exist_ok=True)
    text = payload if isinstance(payload, str) else json.dumps(payload)
    (root / "global.json").write_text(text)


def test_missing_global_json_uses_defaults(tmp_path):
    cfg = load_global_config(tmp_path)

    assert cfg.ui_title == "Geo Score Browser"
    assert cfg.source.type == "local"
    assert cfg.source.root == (tmp_path / "data").resolve()
    assert cfg.default_chart_kinds == [ChartKind.PIE, ChartKind.BAR]
    assert cfg.fetch_workers == 4
    assert cfg.heatmap_radius_level == 2
    assert cfg.map_zoom_cap == 15


def test_global_json_values_are_loaded(tmp_path):
    config_root = tmp_path / "config"
    _write_global(
        config_root,
        {
            "ui_title": "Test Browser",
            "source": {"type": "local", "root": "../datasets"},
            "default_chart_kinds": ["Scatter", "line"],
            "fetch_workers": "2",
            "heatmap_radius_level": 5,
            "map_zoom_cap": 12,
        },
    )

    cfg = load_global_config(config_root)

    assert cfg.ui_title == "Test Browser"
    assert cfg.source.root == (tmp_path / "datasets").resolve()
    assert cfg.default_chart_kinds == [ChartKind.SCATTER, ChartKind.LINE]
    assert cfg.fetch_workers == 2
    assert cfg.heatmap_radius_level == 5
    assert cfg.map_zoom_cap == 12


def test_data_root_env_resolves_relative_roots(tmp_path, monkeypatch):
    monkeypatch.setenv(DATA_ROOT_ENV, str(tmp_path / "mounted"))
    _write_global(tmp_path, {"source": {"type": "local", "root": "csv"}})

    cfg = load_global_config(tmp_path)

    assert cfg.source.root == (tmp_path / "mounted" / "csv").resolve()


def test_absolute_root_is_kept(tmp_path):
    _write_global(tmp_path, {"source": {"root": str(tmp_path / "abs")}})
    assert load_global_config(tmp_path).source.root == tmp_path / "abs"


def test_http_source(tmp_path):
    _write_global(tmp_path, {"source": {"type": "HTTP", "base_url": "http://example.org", "timeout": 5}})

    cfg = load_global_config(tmp_path)
    source = build_source(cfg.source)

    assert isinstance(source, HttpDatasetSource)
    assert source.base_url == "http://example.org"
    assert source.timeout == 5.0


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[1, 2]",
        {"source": {"type": "http"}},
        {"source": {"type": "ftp"}},
        {"default_chart_kinds": ["donut"]},
        {"fetch_workers": "many"},
    ],
)
def test_invalid_config_raises(tmp_path, payload):
    _write_global(tmp_path, payload)
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_build_local_source(tmp_path):
    source = build_source(SourceConfig(type="local", root=tmp_path))
    assert isinstance(source, LocalDirectorySource)
    assert source.root == tmp_path.resolve()
