import pytest

from docsite.config import SiteConfig, load_config
from docsite.errors import ConfigError


def test_load_sample_config(sample_root):
    config = load_config(sample_root / "docsite.yaml")
    root = sample_root.resolve()
    assert config.root == root
    assert config.content_dir == root / "content" / "docs"
    assert config.navigation_file == root / "navigation.yaml"
    assert config.site_name == "Polyglot Runtime Docs"
    assert config.home_slug == "readme"
    assert config.redirects == {"introduction": "readme"}
    assert [link.title for link in config.links] == ["GitHub", "Discord"]
    assert config.dark


def test_defaults_when_no_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DOCSITE_CONFIG", raising=False)
    config = load_config()
    assert config.root == tmp_path.resolve()
    assert config.content_dir == tmp_path.resolve() / "content" / "docs"
    assert config.toc_depth == "2-3"
    assert config.search_excerpt_length == 500


def test_env_var_selects_config(tmp_path, monkeypatch):
    cfg = tmp_path / "site.yaml"
    cfg.write_text("site_name: From Env\ncontent_dir: pages\n", encoding="utf-8")
    monkeypatch.setenv("DOCSITE_CONFIG", str(cfg))
    config = load_config()
    assert config.site_name == "From Env"
    assert config.content_dir == (tmp_path / "pages").resolve()


def test_missing_explicit_config(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


def test_unknown_key_rejected(tmp_path):
    cfg = tmp_path / "docsite.yaml"
    cfg.write_text("site_name: X\nthemes: [a]\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg)


def test_bad_toc_depth_rejected(tmp_path):
    cfg = tmp_path / "docsite.yaml"
    cfg.write_text('toc_depth: "2-9"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="toc_depth"):
        load_config(cfg)


def test_malformed_yaml(tmp_path):
    cfg = tmp_path / "docsite.yaml"
    cfg.write_text("site_name: [oops\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Malformed"):
        load_config(cfg)


def test_navigation_file_can_be_disabled(tmp_path):
    cfg = tmp_path / "docsite.yaml"
    cfg.write_text("navigation_file: null\ncode_style: light\n", encoding="utf-8")
    config = load_config(cfg)
    assert config.navigation_file is None
    assert not config.dark


def test_for_root_overrides(tmp_path):
    config = SiteConfig.for_root(tmp_path, site_name="Mine")
    assert config.site_name == "Mine"
    assert config.docs_out_dir == tmp_path.resolve() / "dist" / "docs"
    assert config.assets_out_dir == tmp_path.resolve() / "dist" / "assets"
