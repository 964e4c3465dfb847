import pytest

from leafbridge.filesystem import (
    DirectoryResource,
    DirRef,
    FileResource,
    FileSystemResources,
    ResolutionError,
    get_known_folder,
    localize,
)

ENV = {"PROGRAMFILES": "C:\\Program Files"}


@pytest.fixture
def resources():
    return FileSystemResources(
        directories={
            "vendor": DirectoryResource(location="program-files", path="Vendor"),
            "app": DirectoryResource(location="vendor", path="App"),
            "loop-a": DirectoryResource(location="loop-b", path="a"),
            "loop-b": DirectoryResource(location="loop-a", path="b"),
            "nowhere": DirectoryResource(path="x"),
            "orphan": DirectoryResource(location="missing", path="x"),
        },
        files={
            "config": FileResource(location="app", path="conf/app.ini"),
            "lost": FileResource(location="orphan", path="f.txt"),
            "unplaced": FileResource(path="f.txt"),
        },
    )


def test_known_folder_lookup():
    folder = get_known_folder("system")
    assert folder.id == "system"
    assert folder.protected is True
    assert get_known_folder("program-files").protected is False
    assert get_known_folder("not-a-folder") is None


def test_resolve_known_folder_directly(resources):
    ref = resources.resolve_directory("program-data")
    assert ref.root == get_known_folder("program-data")
    assert ref.lineage == ()


def test_resolve_directory_lineage_from_root(resources):
    ref = resources.resolve_directory("app")
    assert ref.root.id == "program-files"
    assert [d.path for d in ref.lineage] == ["Vendor", "App"]


def test_directory_path(resources):
    assert resources.resolve_directory("app").path(ENV) == "C:\\Program Files\\Vendor\\App"


def test_resolve_file_and_path(resources):
    ref = resources.resolve_file("config")
    assert ref.file_id == "config"
    assert ref.dir() == resources.resolve_directory("app")
    path = ref.path(ENV)
    assert path.startswith(ref.dir().path(ENV) + "\\")
    assert path.endswith("conf\\app.ini")


def test_cycle_is_detected(resources):
    with pytest.raises(ResolutionError, match="cyclic reference"):
        resources.resolve_directory("loop-a")


def test_directory_without_location(resources):
    with pytest.raises(ResolutionError, match="does not have a location"):
        resources.resolve_directory("nowhere")


def test_undefined_parent(resources):
    with pytest.raises(ResolutionError, match='"missing" parent directory is not defined'):
        resources.resolve_directory("orphan")


def test_undefined_directory(resources):
    with pytest.raises(ResolutionError, match="is not defined"):
        resources.resolve_directory("ghost")


def test_file_resolution_errors(resources):
    with pytest.raises(ResolutionError, match='failed to resolve the "lost" file'):
        resources.resolve_file("lost")
    with pytest.raises(ResolutionError, match="does not have a location"):
        resources.resolve_file("unplaced")
    with pytest.raises(ResolutionError, match="is not defined"):
        resources.resolve_file("ghost")


def test_missing_environment_variable():
    ref = DirRef(get_known_folder("program-files"))
    with pytest.raises(ResolutionError, match="ProgramFiles"):
        ref.path({})


def test_localize_converts_separators():
    assert localize("a/b/c") == "a\\b\\c"
    assert localize(".") == "."


@pytest.mark.parametrize(
    "bad", ["", "../x", "/abs", "a//b", "a/./b", "a\\b", "c:x", "CON", "nul.txt", "a/"]
)
def test_localize_rejects_non_local(bad):
    with pytest.raises(ValueError):
        localize(bad)