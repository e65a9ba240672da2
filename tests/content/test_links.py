"""Tests for guidebook.content.links — classification and on-disk resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from guidebook.content.links import LinkKind, classify_link, resolve_link, split_target


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A content root with the layouts link resolution has to handle."""
    root = tmp_path / "content"
    for relative in ("guides/a.md", "guides/b/index.md", "c/README.md", "index.md", "img/logo.png"):
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x\n")
    (tmp_path / "outside.md").write_text("x\n")
    static = tmp_path / "static" / "images"
    static.mkdir(parents=True)
    (static / "cover.png").write_text("x\n")
    return root


class TestClassifyLink:
    @pytest.mark.parametrize(
        ("target", "kind"),
        [
            ("https://example.com", LinkKind.EXTERNAL),
            ("HTTP://EXAMPLE.COM", LinkKind.EXTERNAL),
            ("//cdn.example.com/x.js", LinkKind.EXTERNAL),
            ("ftp://files.example.com", LinkKind.EXTERNAL),
            ("mailto:guides@example.com", LinkKind.MAIL),
            ("tel:+15550100", LinkKind.MAIL),
            ("#rules-of-hooks", LinkKind.ANCHOR),
            ("", LinkKind.EMPTY),
            ("   ", LinkKind.EMPTY),
            ("hooks.md", LinkKind.INTERNAL),
            ("/guides/react/", LinkKind.INTERNAL),
            ("../rust/structs.md#defining", LinkKind.INTERNAL),
        ],
    )
    def test_kind(self, target, kind):
        assert classify_link(target) is kind


class TestSplitTarget:
    def test_query_dropped_and_unquoted(self):
        assert split_target("my%20file.md?v=2#Some%20Heading") == ("my file.md", "Some Heading")

    def test_no_fragment(self):
        assert split_target("a.md") == ("a.md", None)

    def test_empty_fragment(self):
        assert split_target("a.md#") == ("a.md", None)


class TestResolveLink:
    def _resolve(self, site: Path, target: str, source: str = "guides/a.md", **kwargs):
        return resolve_link(site / source, target, site, **kwargs)

    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            ("a.md", "guides/a.md"),
            ("a", "guides/a.md"),
            ("./a.html", "guides/a.md"),
            ("b/", "guides/b/index.md"),
            ("b", "guides/b/index.md"),
            ("../c", "c/README.md"),
            ("/guides/a", "guides/a.md"),
            ("/", "index.md"),
            ("../img/logo.png", "img/logo.png"),
        ],
    )
    def test_resolves(self, site, target, expected):
        resolution = self._resolve(site, target)
        assert resolution.kind is LinkKind.INTERNAL
        assert resolution.path == (site / expected).resolve()
        assert resolution.status == "ok"

    def test_fragment_is_returned(self, site):
        resolution = self._resolve(site, "b/#setup")
        assert resolution.fragment == "setup"
        assert resolution.path == (site / "guides/b/index.md").resolve()

    def test_missing_file(self, site):
        resolution = self._resolve(site, "missing.md")
        assert resolution.broken
        assert resolution.status == "broken"
        assert resolution.reason == "no such file"

    def test_outside_root(self, site):
        resolution = self._resolve(site, "../../outside.md")
        assert resolution.broken
        assert resolution.reason == "points outside the content root"

    def test_anchor_points_at_source(self, site):
        resolution = self._resolve(site, "#intro")
        assert resolution.kind is LinkKind.ANCHOR
        assert resolution.path == site / "guides/a.md"
        assert resolution.fragment == "intro"
        assert resolution.checked

    @pytest.mark.parametrize("target", ["https://example.com/a.md", "mailto:x@example.com", ""])
    def test_unchecked(self, site, target):
        resolution = self._resolve(site, target)
        assert not resolution.checked
        assert not resolution.broken
        assert resolution.status == "skipped"

    def test_site_prefix(self, site):
        resolution = self._resolve(site, "/docs/guides/a.html", site_prefix="/docs/")
        assert resolution.path == (site / "guides/a.md").resolve()

    def test_site_prefix_only_strips_whole_segment(self, site):
        resolution = self._resolve(site, "/docsy/guides/a.md", site_prefix="docs")
        assert resolution.broken

    def test_static_roots(self, site):
        static = site.parent / "static"
        resolution = self._resolve(site, "/images/cover.png", static_roots=[static])
        assert resolution.path == (static / "images/cover.png").resolve()

    def test_static_roots_only_for_site_rooted_links(self, site):
        static = site.parent / "static"
        resolution = self._resolve(site, "images/cover.png", static_roots=[static])
        assert resolution.broken
