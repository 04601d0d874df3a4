"""
Tests for the plugin_loader module.
"""

from pathlib import Path
import logging
import sys
from typing import Any

import pytest

from passpersist import provider_registry
from passpersist.plugin_loader import load_plugins_from_directory
from passpersist.provider_registry import ProviderRegistry

PLUGIN_SOURCE = '''
from passpersist.provider_registry import register_provider


@register_provider("{name}")
def provider(triples):
    triples.add("1.3.6.1.4.1.99999.1.0", "string", "{name}")
'''


class TestPluginLoader:
    """Test the plugin loader functionality."""

    @pytest.fixture(autouse=True)
    def isolate(self, mocker: Any, monkeypatch: pytest.MonkeyPatch) -> ProviderRegistry:
        mocker.patch.dict(sys.modules)
        registry = ProviderRegistry()
        monkeypatch.setattr(provider_registry, "_registry", registry)
        return registry

    @staticmethod
    def _make_plugin_dir(tmp_path: Path, files: dict[str, str] | None = None) -> Path:
        plugin_dir = tmp_path / "plugins"
        plugin_dir.mkdir()
        for file_name, source in (files or {}).items():
            (plugin_dir / file_name).write_text(source)
        return plugin_dir

    def test_nonexistent_dir(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            result = load_plugins_from_directory("nonexistent_dir")

        assert not result
        assert "Plugin directory 'nonexistent_dir' does not exist" in caplog.text

    def test_not_a_dir(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        file_path = tmp_path / "not_a_dir"
        file_path.write_text("not a directory")

        with caplog.at_level(logging.WARNING):
            result = load_plugins_from_directory(str(file_path))

        assert not result
        assert f"Plugin path '{file_path}' is not a directory" in caplog.text

    def test_underscore_files_are_skipped(self, tmp_path: Path) -> None:
        plugin_dir = self._make_plugin_dir(
            tmp_path, {"__init__.py": "", "_private.py": "raise RuntimeError('loaded')"}
        )
        assert load_plugins_from_directory(str(plugin_dir)) == []

    def test_loads_and_registers_in_sorted_order(
        self, tmp_path: Path, isolate: ProviderRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        plugin_dir = self._make_plugin_dir(
            tmp_path,
            {
                "zz_beta.py": PLUGIN_SOURCE.format(name="beta"),
                "aa_alpha.py": PLUGIN_SOURCE.format(name="alpha"),
            },
        )

        with caplog.at_level(logging.INFO):
            result = load_plugins_from_directory(str(plugin_dir))

        assert result == ["passpersist.plugins.aa_alpha", "passpersist.plugins.zz_beta"]
        assert isolate.list_providers() == ["alpha", "beta"]
        assert "Loaded plugin: passpersist.plugins.aa_alpha" in caplog.text

    def test_broken_plugin_is_logged_and_skipped(
        self, tmp_path: Path, isolate: ProviderRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        plugin_dir = self._make_plugin_dir(
            tmp_path,
            {
                "broken.py": "raise RuntimeError('Exec error')",
                "good.py": PLUGIN_SOURCE.format(name="good"),
            },
        )

        with caplog.at_level(logging.ERROR):
            result = load_plugins_from_directory(str(plugin_dir))

        assert result == ["passpersist.plugins.good"]
        assert "passpersist.plugins.broken" not in sys.modules
        assert "Failed to load plugin" in caplog.text
        assert "Exec error" in caplog.text

    def test_bad_spec(self, mocker: Any, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        mocker.patch("importlib.util.spec_from_file_location", return_value=None)
        plugin_dir = self._make_plugin_dir(tmp_path, {"test_plugin.py": "# test plugin"})

        with caplog.at_level(logging.WARNING):
            result = load_plugins_from_directory(str(plugin_dir))

        assert not result
        assert "Could not load plugin spec" in caplog.text

    def test_already_imported_module_is_not_reloaded(self, tmp_path: Path) -> None:
        plugin_dir = self._make_plugin_dir(tmp_path, {"cached.py": "raise RuntimeError('reloaded')"})
        sys.modules["passpersist.plugins.cached"] = object()  # type: ignore[assignment]

        assert load_plugins_from_directory(str(plugin_dir)) == ["passpersist.plugins.cached"]
