"""配置加载测试"""

from __future__ import annotations

import pytest

from vendorctl.core import config as config_mod
from vendorctl.core.config import CONFIG_ENV_VAR, Config, init_config
from vendorctl.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _reset_global(monkeypatch):
    monkeypatch.setattr(config_mod, "_current", None)


class TestConfig:
    def test_defaults(self) -> None:
        cfg = Config()
        assert cfg.manifest_file == "vendorctl.yml"
        assert cfg.lock_file == "vendorctl.lock"
        assert cfg.vendor_dir == "vendor"
        assert cfg.disable_cache is False

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert Config.from_file(tmp_path / "none.yml") == Config()

    def test_from_file_with_extra(self, tmp_path) -> None:
        p = tmp_path / "c.yml"
        p.write_text("cache_dir: /tmp/vc\nvcs_timeout: 30\nmirror: internal\n")
        cfg = Config.from_file(p)
        assert cfg.cache_dir == "/tmp/vc"
        assert cfg.vcs_timeout == 30
        assert cfg.extra == {"mirror": "internal"}

    def test_invalid_yaml(self, tmp_path) -> None:
        p = tmp_path / "c.yml"
        p.write_text("cache_dir: [oops\n")
        with pytest.raises(ConfigError, match="配置文件无效"):
            Config.from_file(p)

    def test_cache_path_expands_user(self) -> None:
        assert "~" not in str(Config(cache_dir="~/x").cache_path)


class TestInitConfig:
    def test_env_var(self, tmp_path, monkeypatch) -> None:
        p = tmp_path / "c.yml"
        p.write_text("vendor_dir: third_party\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(p))
        assert init_config().vendor_dir == "third_party"
        assert config_mod.get_config().vendor_dir == "third_party"

    def test_explicit_path_wins(self, tmp_path, monkeypatch) -> None:
        env_file = tmp_path / "env.yml"
        env_file.write_text("vendor_dir: from_env\n")
        arg_file = tmp_path / "arg.yml"
        arg_file.write_text("vendor_dir: from_arg\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))
        assert init_config(str(arg_file)).vendor_dir == "from_arg"

    def test_to_dict(self) -> None:
        data = Config(vendor_dir="third_party").to_dict()
        assert data["vendor_dir"] == "third_party"
        assert data["extra"] == {}
