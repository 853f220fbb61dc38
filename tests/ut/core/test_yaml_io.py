"""yaml_io 读写测试"""

from __future__ import annotations

import pytest
import yaml

from vendorctl.utils.yaml_io import dump_yaml, load_yaml, save_yaml


class TestLoadYaml:
    def test_missing_file(self, tmp_path) -> None:
        assert load_yaml(tmp_path / "nope.yml") == {}

    def test_empty_file(self, tmp_path) -> None:
        p = tmp_path / "empty.yml"
        p.write_text("")
        assert load_yaml(p) == {}

    def test_non_dict_top_level(self, tmp_path) -> None:
        p = tmp_path / "list.yml"
        p.write_text("- a\n- b\n")
        assert load_yaml(p) == {}

    def test_invalid_yaml_raises(self, tmp_path) -> None:
        p = tmp_path / "bad.yml"
        p.write_text("key: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml(p)


class TestSaveYaml:
    def test_roundtrip_keeps_key_order(self, tmp_path) -> None:
        p = tmp_path / "sub" / "out.yml"
        save_yaml(p, {"version": 1, "import": [{"package": "b"}, {"package": "a"}]})
        assert load_yaml(p)["import"][0]["package"] == "b"
        assert p.read_text().startswith("version: 1")

    def test_no_temp_files_left(self, tmp_path) -> None:
        p = tmp_path / "out.yml"
        save_yaml(p, {"a": 1})
        save_yaml(p, {"a": 2})
        assert [f.name for f in tmp_path.iterdir()] == ["out.yml"]
        assert load_yaml(p) == {"a": 2}

    def test_unicode_kept(self) -> None:
        assert "依赖" in dump_yaml({"desc": "依赖"})
