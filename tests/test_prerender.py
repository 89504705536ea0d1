"""Tests for prerendered-page lookup and the offline generator."""

import json

from holidayseo.dependencies import build_injector
from holidayseo.services import prerender
from holidayseo.services.prerender import generate, prerendered_path, read_prerendered
from helpers import FakeStore, make_package, make_settings, run


class TestLookup:
    def test_path_layout(self, tmp_path):
        assert prerendered_path(tmp_path, "packages", "amalfi") == tmp_path / "packages" / "amalfi.html"

    def test_unsafe_or_unknown_rejected(self, tmp_path):
        assert prerendered_path(tmp_path, "blog", "x") is None
        assert prerendered_path(tmp_path, "packages", "../secrets") is None
        assert prerendered_path(tmp_path, "packages", ".hidden") is None
        assert prerendered_path(tmp_path, "packages", "") is None

    def test_read_when_enabled(self, tmp_path):
        settings = make_settings(tmp_path, prerender_enabled=True)
        page = settings.prerendered_dir / "tours" / "9.html"
        page.parent.mkdir(parents=True)
        page.write_text("<html>9</html>", encoding="utf-8")

        assert read_prerendered(settings, "tours", "9") == "<html>9</html>"
        assert read_prerendered(settings, "tours", "10") is None

    def test_disabled(self, tmp_path):
        settings = make_settings(tmp_path)
        page = settings.prerendered_dir / "tours" / "9.html"
        page.parent.mkdir(parents=True)
        page.write_text("<html>9</html>", encoding="utf-8")
        assert read_prerendered(settings, "tours", "9") is None


class TestGenerate:
    def test_writes_packages_and_destinations(self, tmp_path):
        store = FakeStore(
            packages=[
                make_package(),
                make_package(id=2, slug="colombo-stay", category="Sri Lanka"),
                make_package(id=3, slug="draft", is_published=False),
            ]
        )
        injector = build_injector(make_settings(tmp_path), store=store)
        out = tmp_path / "out"

        counts = run(generate(injector, store, out))

        assert counts == {"packages": 2, "destinations": 2}
        assert (out / "packages" / "amalfi-coast-escape.html").is_file()
        assert (out / "destinations" / "sri-lanka.html").is_file()
        assert not (out / "packages" / "draft.html").exists()
        assert 'id="seo-content"' in (out / "packages" / "colombo-stay.html").read_text(encoding="utf-8")

    def test_main(self, tmp_path, monkeypatch):
        data_dir = tmp_path / "data"
        data_dir.mkdir()
        (data_dir / "packages.json").write_text(
            json.dumps([{"id": 1, "title": "Amalfi", "slug": "amalfi", "category": "Italy", "isPublished": True}]),
            encoding="utf-8",
        )
        settings = make_settings(tmp_path)
        monkeypatch.setattr(prerender, "get_settings", lambda: settings)

        out = tmp_path / "out"
        assert prerender.main(["--out", str(out), "--data-dir", str(data_dir)]) == 0
        assert (out / "packages" / "amalfi.html").is_file()
        assert (out / "destinations" / "italy.html").is_file()
