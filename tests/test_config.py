"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

from sitepdf.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "SITEPDF_CONCURRENCY",
            "SITEPDF_STATUS_CODE",
            "SITEPDF_DEDUPE_POLICY",
            "SITEPDF_HEADLESS",
            "SITEPDF_MAX_PAGE_HEIGHT",
            "SITEPDF_TRIM_LOW",
            "SITEPDF_TRIM_HIGH",
        ):
            monkeypatch.delenv(name, raising=False)

        s = Settings()

        assert s.concurrency == 8
        assert s.status_code == "200"
        assert s.dedupe_policy == "origin"
        assert s.headless is True
        assert s.max_page_height == 14400
        assert (s.trim_low_ratio, s.trim_high_ratio) == (0.10, 0.95)

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("SITEPDF_CONCURRENCY", "3")
        monkeypatch.setenv("SITEPDF_HEADLESS", "false")
        monkeypatch.setenv("SITEPDF_NAV_TIMEOUT", "12.5")
        monkeypatch.setenv("SITEPDF_DEDUPE_POLICY", "title")

        s = Settings()

        assert s.concurrency == 3
        assert s.headless is False
        assert s.navigation_timeout == 12.5
        assert s.dedupe_policy == "title"

    def test_output_dir_named_after_report_stem(self, tmp_path) -> None:
        s = Settings(output_root=tmp_path)
        assert s.output_dir_for(Path("/data/phaser-docs.tsv")) == tmp_path / "phaser-docs"

    def test_ensure_output_dir_creates_pages_dir(self, tmp_path) -> None:
        s = Settings(output_root=tmp_path)
        out_dir = s.ensure_output_dir("docs.tsv")
        assert (out_dir / "pages").is_dir()
