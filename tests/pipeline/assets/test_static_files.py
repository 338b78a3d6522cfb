"""Tests for static asset copying."""

from src.pipeline.assets.static_files import copy_cname, copy_static_dirs


def _make_static_tree(root):
    (root / "css").mkdir(parents=True)
    (root / "css" / "styles.css").write_text("body{}", encoding="utf-8")
    (root / "js").mkdir()
    (root / "js" / "main.js").write_text("// js", encoding="utf-8")
    (root / "images" / "icons").mkdir(parents=True)
    (root / "images" / "icons" / "favicon.svg").write_text("<svg/>", encoding="utf-8")


def test_copy_static_dirs_recursive(tmp_path):
    source = tmp_path / "static"
    dest = tmp_path / "dist"
    _make_static_tree(source)

    copied = copy_static_dirs(source, dest, ("css", "js", "images"))

    assert copied == ["css", "js", "images"]
    assert (dest / "css" / "styles.css").read_text(encoding="utf-8") == "body{}"
    assert (dest / "js" / "main.js").exists()
    assert (dest / "images" / "icons" / "favicon.svg").exists()


def test_copy_static_dirs_merges_into_existing_images(tmp_path):
    source = tmp_path / "static"
    dest = tmp_path / "dist"
    _make_static_tree(source)
    downloaded = dest / "images" / "logos" / "acme.png"
    downloaded.parent.mkdir(parents=True)
    downloaded.write_bytes(b"logo")

    copy_static_dirs(source, dest, ("images",))

    assert downloaded.read_bytes() == b"logo"
    assert (dest / "images" / "icons" / "favicon.svg").exists()


def test_copy_static_dirs_skips_missing(tmp_path):
    source = tmp_path / "static"
    (source / "css").mkdir(parents=True)
    copied = copy_static_dirs(source, tmp_path / "dist", ("css", "js"))
    assert copied == ["css"]
    assert not (tmp_path / "dist" / "js").exists()


def test_copy_cname(tmp_path):
    cname = tmp_path / "CNAME"
    cname.write_text("example.com\n", encoding="utf-8")
    dest = tmp_path / "dist"
    assert copy_cname(cname, dest) is True
    assert (dest / "CNAME").read_text(encoding="utf-8") == "example.com\n"


def test_copy_cname_missing_is_noop(tmp_path):
    dest = tmp_path / "dist"
    assert copy_cname(tmp_path / "CNAME", dest) is False
    assert not (dest / "CNAME").exists()
