import os

import pytest

from stamp.pkg.getter import GetterError, MockGetter, copy_dir, default_getter, detect


@pytest.fixture
def minimal(tmp_path):
    path = tmp_path / "fixtures" / "minimal"
    path.mkdir(parents=True)
    (path / "package.yaml").write_text("name: minimal\n")
    return path


def test_default_getter_copies_package(minimal, tmp_path):
    dst = tmp_path / "out" / "package"
    manifest = dst / "package.yaml"
    assert not dst.exists()

    default_getter(str(minimal), str(dst))

    assert manifest.is_file()
    assert manifest.read_text() == "name: minimal\n"


def test_default_getter_resolves_relative_paths(minimal, tmp_path, monkeypatch):
    monkeypatch.chdir(minimal.parent)
    dst = tmp_path / "relative"
    default_getter("minimal", str(dst))
    assert (dst / "package.yaml").read_text() == "name: minimal\n"


def test_default_getter_accepts_file_urls(minimal, tmp_path):
    dst = tmp_path / "from-url"
    default_getter("file://" + str(minimal), str(dst))
    assert (dst / "package.yaml").is_file()


def test_default_getter_missing_source(tmp_path):
    with pytest.raises(GetterError, match="unable to install"):
        default_getter(str(tmp_path / "missing"), str(tmp_path / "dst"))


def test_default_getter_unsupported_scheme(tmp_path):
    with pytest.raises(GetterError, match="unsupported source"):
        default_getter("https://example.com/repo", str(tmp_path / "dst"))


def test_detect_relative_path():
    assert detect("foo/bar", "/work") == "file:///work/foo/bar"


def test_detect_absolute_path():
    assert detect("/abs/pkg", "/work") == "file:///abs/pkg"


def test_detect_keeps_urls():
    assert detect("https://example.com/repo", "/work") == "https://example.com/repo"
    assert detect("git::https://example.com/repo", "/work") == "git::https://example.com/repo"


def test_detect_blank_source():
    with pytest.raises(GetterError, match="invalid source string"):
        detect("", "/work")


def test_copy_dir_skips_symlinks_and_copies_nested(tmp_path):
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "a.txt").write_text("a")
    (src / "sub" / "b.txt").write_text("b")
    os.symlink(src / "a.txt", src / "link.txt")

    dst = tmp_path / "dst"
    copy_dir(str(src), str(dst))

    assert (dst / "a.txt").read_text() == "a"
    assert (dst / "sub" / "b.txt").read_text() == "b"
    assert not os.path.lexists(dst / "link.txt")


def test_copy_dir_replaces_existing_directory(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "new.txt").write_text("new")
    dst = tmp_path / "dst"
    dst.mkdir()
    (dst / "old.txt").write_text("old")

    copy_dir(str(src), str(dst))

    assert sorted(os.listdir(dst)) == ["new.txt"]


def test_copy_dir_requires_directory(tmp_path):
    src = tmp_path / "file.txt"
    src.write_text("x")
    with pytest.raises(GetterError, match="must be a directory"):
        copy_dir(str(src), str(tmp_path / "dst"))


def test_copy_dir_missing_source(tmp_path):
    with pytest.raises(GetterError, match="source path error"):
        copy_dir(str(tmp_path / "nope"), str(tmp_path / "dst"))


def test_mock_getter_records_and_delegates():
    seen = []
    mock = MockGetter(lambda src, dst: seen.append((src, dst)))
    assert mock.called is False

    mock.get("src-url", "/dst")

    assert mock.called is True
    assert mock.src == "src-url"
    assert mock.dst == "/dst"
    assert seen == [("src-url", "/dst")]


def test_mock_getter_propagates_handler_errors():
    def handler(src, dst):
        raise RuntimeError("boom")

    mock = MockGetter(handler)
    with pytest.raises(RuntimeError, match="boom"):
        mock.get("a", "b")
    assert mock.called is True