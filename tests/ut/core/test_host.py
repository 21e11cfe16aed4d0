"""宿主构建常量读取单元测试"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from termux_bootstrap.core.exceptions import ConfigError, HostUnavailableError
from termux_bootstrap.core.host import (
    BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT,
    EnvBuildConfigSource,
    ModuleBuildConfigSource,
    YamlBuildConfigSource,
    create_host_source,
    get_host_package_variant,
)


def _write_module(tmp_path: Path, name: str, body: str) -> None:
    (tmp_path / f"{name}.py").write_text(body, encoding="utf-8")


class TestModuleSource:
    def test_reads_field(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_module(tmp_path, "hostcfg_ok", 'TERMUX_PACKAGE_VARIANT = "nix-android-8"\n')
        monkeypatch.syspath_prepend(str(tmp_path))
        source = ModuleBuildConfigSource("hostcfg_ok")
        assert source.fetch_build_config_field(BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT) == "nix-android-8"

    def test_missing_module(self) -> None:
        source = ModuleBuildConfigSource("hostcfg_does_not_exist")
        with pytest.raises(HostUnavailableError, match="无法导入"):
            source.fetch_build_config_field("TERMUX_PACKAGE_VARIANT")

    def test_missing_field(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_module(tmp_path, "hostcfg_nofield", "OTHER = 1\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        source = ModuleBuildConfigSource("hostcfg_nofield")
        with pytest.raises(HostUnavailableError, match="不存在字段"):
            source.fetch_build_config_field("TERMUX_PACKAGE_VARIANT")


class TestYamlSource:
    def test_reads_field(self, tmp_path: Path) -> None:
        f = tmp_path / "build_config.yml"
        f.write_text("TERMUX_PACKAGE_VARIANT: nix-android-8\n", encoding="utf-8")
        assert YamlBuildConfigSource(f).fetch_build_config_field("TERMUX_PACKAGE_VARIANT") == "nix-android-8"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(HostUnavailableError, match="不存在"):
            YamlBuildConfigSource(tmp_path / "nope.yml").fetch_build_config_field("X")

    def test_missing_field(self, tmp_path: Path) -> None:
        f = tmp_path / "build_config.yml"
        f.write_text("OTHER: 1\n", encoding="utf-8")
        with pytest.raises(HostUnavailableError):
            YamlBuildConfigSource(f).fetch_build_config_field("TERMUX_PACKAGE_VARIANT")


class TestEnvSource:
    def test_reads_process_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOST_TERMUX_PACKAGE_VARIANT", "nix-android-8")
        source = EnvBuildConfigSource("HOST_")
        assert source.fetch_build_config_field("TERMUX_PACKAGE_VARIANT") == "nix-android-8"

    def test_context_mapping_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERMUX_PACKAGE_VARIANT", "from-env")
        source = EnvBuildConfigSource()
        value = source.fetch_build_config_field(
            "TERMUX_PACKAGE_VARIANT", {"TERMUX_PACKAGE_VARIANT": "from-context"},
        )
        assert value == "from-context"

    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TERMUX_PACKAGE_VARIANT", raising=False)
        with pytest.raises(HostUnavailableError, match="环境变量未设置"):
            EnvBuildConfigSource().fetch_build_config_field("TERMUX_PACKAGE_VARIANT")


class TestCreateHostSource:
    def test_module(self) -> None:
        source = create_host_source("module:termux_app.build_config")
        assert isinstance(source, ModuleBuildConfigSource)
        assert source.module_name == "termux_app.build_config"

    def test_yaml(self) -> None:
        source = create_host_source("yaml:/data/build_config.yml")
        assert isinstance(source, YamlBuildConfigSource)
        assert source.path == Path("/data/build_config.yml")

    @pytest.mark.parametrize("spec,prefix", [("env", ""), ("env:HOST_", "HOST_")])
    def test_env(self, spec: str, prefix: str) -> None:
        source = create_host_source(spec)
        assert isinstance(source, EnvBuildConfigSource)
        assert source.prefix == prefix

    @pytest.mark.parametrize("spec", ["", "module:", "yaml:", "http://x", "jar:foo"])
    def test_invalid(self, spec: str) -> None:
        with pytest.raises(ConfigError):
            create_host_source(spec)


class _Raising:
    def fetch_build_config_field(self, field_name: str, context: object = None) -> object:
        raise HostUnavailableError("宿主应用未安装")


class TestGetHostPackageVariant:
    def test_error_logged_and_absent(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="termux_bootstrap.core.host"):
            assert get_host_package_variant(_Raising()) is None
        assert any(r.exc_info for r in caplog.records)

    def test_yaml_roundtrip(self, tmp_path: Path) -> None:
        f = tmp_path / "build_config.yml"
        f.write_text("TERMUX_PACKAGE_VARIANT: nix-android-8\n", encoding="utf-8")
        assert get_host_package_variant(YamlBuildConfigSource(f)) == "nix-android-8"

    def test_non_string(self, tmp_path: Path) -> None:
        f = tmp_path / "build_config.yml"
        f.write_text("TERMUX_PACKAGE_VARIANT: 8\n", encoding="utf-8")
        assert get_host_package_variant(YamlBuildConfigSource(f)) is None

    def test_null_value(self, tmp_path: Path) -> None:
        f = tmp_path / "build_config.yml"
        f.write_text("TERMUX_PACKAGE_VARIANT: null\n", encoding="utf-8")
        assert get_host_package_variant(YamlBuildConfigSource(f)) is None


class TestCreateHostSourceTypes:
    @pytest.mark.parametrize("spec", [5, None, ["env"]])
    def test_non_string_rejected(self, spec: object) -> None:
        with pytest.raises(ConfigError, match="应为字符串"):
            create_host_source(spec)  # type: ignore[arg-type]
