"""Basic tests: imports, models, CLI help."""

import pytest


class TestImports:
    def test_main_package(self):
        from kev_push import __version__, CatalogDocument, VulnerabilityEntry, parse_document
        assert __version__ == "1.0.0"

    def test_cli_import(self):
        from kev_push.cli import cli
        assert cli is not None

    def test_component_imports(self):
        from kev_push.cache.snapshot_store import SnapshotStore, default_cache_dir
        from kev_push.feeds.cisa_kev import CatalogFetcher
        from kev_push.detector import UpdateDetector, RunOutcome
        from kev_push.notify import Notifier, NotificationSink
        from kev_push.notify.pushover import PushoverSink, PushoverConfig
        from kev_push.notify.desktop import desktop_sink_for_platform

    def test_error_taxonomy(self):
        from kev_push import (
            KevPushError, ParseError, CacheError, CacheReadError,
            CacheWriteError, FetchError, NotifyError,
        )
        for err in (ParseError, CacheReadError, CacheWriteError, FetchError, NotifyError):
            assert issubclass(err, KevPushError)
        assert issubclass(CacheReadError, CacheError)
        assert issubclass(CacheWriteError, CacheError)


class TestModels:
    def test_document_creation(self):
        from kev_push import CatalogDocument
        doc = CatalogDocument(title="KEV", release_date="2024-01-01")
        assert doc.catalog_version is None
        assert doc.count is None
        assert doc.entries is None

    def test_newest_entries(self):
        from kev_push import CatalogDocument, VulnerabilityEntry

        def entry(cve, added):
            return VulnerabilityEntry(cve, "v", "p", "n", added, "d", "a", "due", "")

        doc = CatalogDocument(title="KEV", release_date="x", entries=[
            entry("CVE-1", "2022-01-01"),
            entry("CVE-3", "2024-01-01"),
            entry("CVE-2", "2023-01-01"),
        ])
        assert [e.cve_id for e in doc.newest_entries(2)] == ["CVE-3", "CVE-2"]
        assert doc.newest_entries(0) == []

    def test_newest_entries_without_entries(self):
        from kev_push import CatalogDocument
        assert CatalogDocument(title="KEV", release_date="x").newest_entries() == []


class TestCLI:
    def test_cli_help(self):
        from click.testing import CliRunner
        from kev_push.cli import cli
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "kev-push" in result.output
        assert "check" in result.output
        assert "show" in result.output

    def test_check_help(self):
        from click.testing import CliRunner
        from kev_push.cli import cli
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--help"])
        assert result.exit_code == 0
        assert "--strict" in result.output
        assert "--no-desktop" in result.output
        assert "--pushover-app" in result.output

    def test_version(self):
        from click.testing import CliRunner
        from kev_push.cli import cli
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output
