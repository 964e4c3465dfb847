import pytest

from leafbridge.commands import Command
from leafbridge.fileattributes import FileAttributes
from leafbridge.filehash import Entry, HashType, HashValue
from leafbridge.packages import (
    Package,
    PackageConfigError,
    PackageContent,
    PackageFile,
    PackageSource,
    PackageSourceType,
    validate_package_id,
)


def test_validate_package_id_missing():
    with pytest.raises(PackageConfigError, match="a package ID is missing"):
        validate_package_id("")


def test_package_content_empty():
    assert str(PackageContent()) == "pkg"


def test_package_content_id_only():
    assert str(PackageContent(id="tool")).split("-") == ["pkg", "tool"]


def test_package_content_truncates_hash():
    entry = Entry(HashType("sha3-256"), HashValue(bytes(range(32))))
    assert str(PackageContent(id="tool", primary_hash=entry)) == "pkg-tool-0001020304050607"


@pytest.mark.parametrize(
    "ptype, fmt, ext",
    [
        ("exe", "", "exe"),
        ("msi", "", "msi"),
        ("archive", "zip", "zip"),
        ("archive", "tar", "file"),
        ("other", "", "file"),
    ],
)
def test_file_extension(ptype, fmt, ext):
    package = Package(name="tool", type=ptype, format=fmt)
    assert package.file_extension() == ext
    assert package.file_name() == "tool." + ext


def test_is_archive():
    assert Package(type="archive").is_archive() is True
    assert Package(type="msi").is_archive() is False


def test_unrecognized_type_fails():
    with pytest.raises(PackageConfigError, match="is not recognized"):
        Package(type="dmg").validate()


def test_unrecognized_archive_format_fails():
    with pytest.raises(PackageConfigError, match="not a recognized format for archive"):
        Package(type="archive", format="rar").validate()


def test_source_without_type_fails():
    with pytest.raises(PackageConfigError, match="the source type is missing"):
        PackageSource(url="https://example.com/a.msi").validate()


def test_source_unknown_type_fails():
    with pytest.raises(PackageConfigError, match="ftp"):
        PackageSource(type="ftp").validate()


def test_package_reports_failing_source_index():
    package = Package(
        type="msi",
        sources=[PackageSource(type=PackageSourceType.HTTP), PackageSource()],
    )
    with pytest.raises(PackageConfigError, match="package source 1"):
        package.validate()


def test_package_reports_bad_attributes():
    package = Package(type="exe", attributes=FileAttributes(size=-1))
    with pytest.raises(PackageConfigError, match="package file attributes"):
        package.validate()


def test_executable_only_valid_for_archives():
    package = Package(type="msi", commands={"install": Command(executable="setup")})
    with pytest.raises(PackageConfigError, match="only valid for archive packages"):
        package.validate()


def test_executable_must_be_a_package_file():
    files = {"setup": PackageFile(path="bin/setup.exe")}
    package = Package(
        type="archive",
        format="zip",
        files=files,
        commands={"install": Command(executable="setup")},
    )
    package.validate()
    package.files = {}
    with pytest.raises(PackageConfigError, match='package file "setup"'):
        package.validate()