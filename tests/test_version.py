import pytest

from leafbridge.version import Version, compare_version_segments, compare_versions

BASIC = ["", "1", "1.2", "1.2.3.4.5.6", "10.2.78.212341.2", "1.2..4"]

COMPLEX = [
    ("vA5", "A5"),
    ("v52.21A", "52.21A"),
    ("1.2.", "1.2"),
]

COMPARISONS = [
    ("1", "1", 0),
    ("1.", "1", 0),
    ("1", "1.", 0),
    ("v1", "1", 0),
    ("v1.", "1", 0),
    ("v1", "1.", 0),
    ("1A", "1A", 0),
    ("2024.41.2.A", "2024.41.2.A", 0),
    ("1", "1.1", -1),
    ("1.", "1.1", -1),
    ("1.1", "1.2", -1),
    ("1.1", "2.1", -1),
    ("000001", "0000010", -1),
    ("01.1", "1.2", -1),
    ("1.1", "01.2", -1),
    ("1.2.3.4.5", "5.4.3.2.1", -1),
    ("1.2.3.4.5", "5.4.3.2", -1),
    ("1.2.3.4.5", "5.4.3", -1),
    ("1.2.", "5.4.3", -1),
    ("1A", "1B", -1),
    ("1.A", "1.B", -1),
    ("A.B", "A.C", -1),
    ("A.B", "A.C.", -1),
    ("A.B", "A.C..", -1),
    ("A", "A.A", -1),
    ("A", "A.1", -1),
    ("B100", "A1000", -1),
    ("2024.41.2.A", "2024.41.2.B", -1),
    ("2024.41.0.2.A", "2024.41.2.A", -1),
    ("000000000000000000000000000000000000000000001", "0000010", -1),
    (
        "100000000000000000000000000000000000000000000",
        "200000000000000000000000000000000000000000000",
        -1,
    ),
    (
        "200000000000000000000000000000000000000000000",
        "1000000000000000000000000000000000000000000000",
        -1,
    ),
]


@pytest.mark.parametrize("text", BASIC)
def test_basic_round_trip(text):
    assert ".".join(Version(text).segments()) == text


@pytest.mark.parametrize("text,expected", COMPLEX)
def test_complex_segmentation(text, expected):
    assert ".".join(Version(text).segments()) == expected


@pytest.mark.parametrize("text,expected", COMPLEX)
def test_canonical(text, expected):
    assert Version(text).canonical() == expected


@pytest.mark.parametrize("a,b,result", COMPARISONS)
def test_compare_versions(a, b, result):
    assert compare_versions(Version(a), Version(b)) == result
    assert compare_versions(Version(b), Version(a)) == -result


def test_segments_keep_empty_middle():
    assert list(Version("1.2..4").segments()) == ["1", "2", "", "4"]


def test_single_v_is_not_stripped():
    assert list(Version("v").segments()) == ["v"]


def test_segment_comparison_numeric_vs_text():
    assert compare_version_segments("10", "9") == 1
    assert compare_version_segments("A", "10") == -1
    assert compare_version_segments("B", "B") == 0