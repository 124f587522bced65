import pytest

from vssparser.core.models import Instance
from vssparser.parsing.scanner import ScanFailure, ValueScanner


@pytest.fixture
def scan():
    return ValueScanner()


def test_end_of_line(scan):
    assert scan.end_of_line("   \nnext", 0) == 4
    assert scan.end_of_line("  ", 0) == 2
    with pytest.raises(ScanFailure) as exc:
        scan.end_of_line("  junk\n", 0)
    assert exc.value.position == 2


def test_rest_of_line(scan):
    assert scan.rest_of_line("abc def\nxyz", 0) == (8, "abc def")
    assert scan.rest_of_line("tail", 2) == (4, "il")


def test_indent_and_word(scan):
    assert scan.indent_at("    x", 0) == 4
    assert scan.word("Vehicle.Speed: x", 0) == (13, "Vehicle.Speed")
    with pytest.raises(ScanFailure):
        scan.word(":", 0)


@pytest.mark.parametrize("text, value", [
    ('"double quoted"', "double quoted"),
    ("'single'", "single"),
    ('  "padded"  ', "padded"),
])
def test_quoted(scan, text, value):
    pos, found = scan.quoted(text, 0)
    assert found == value
    assert pos == len(text)


@pytest.mark.parametrize("text, reason", [
    ('""', "empty string"),
    ('"café"', "non-ASCII"),
    ('"unterminated', "expected a quoted string"),
    ("bare", "expected a quoted string"),
])
def test_quoted_failures(scan, text, reason):
    with pytest.raises(ScanFailure, match=reason):
        scan.quoted(text, 0)


def test_bare(scan):
    assert scan.bare("  km/h  \n", 0) == (8, "km/h")
    assert scan.bare("a,b", 0) == (1, "a")
    with pytest.raises(ScanFailure, match="non-ASCII"):
        scan.bare("°C", 0)
    with pytest.raises(ScanFailure):
        scan.bare("[x]", 0)


@pytest.mark.parametrize("text, value", [("42", "42"), ("-10", "-10"), ("3.25x", "3.25"), ("7.", "7.")])
def test_number(scan, text, value):
    assert scan.number(text, 0)[1] == value


def test_number_rejects_words(scan):
    with pytest.raises(ScanFailure, match="expected a number"):
        scan.number("abc", 0)


def test_scalar_prefers_quoted_then_bare(scan):
    assert scan.scalar("'a b'", 0)[1] == "a b"
    assert scan.scalar("a b", 0)[1] == "a"


def test_first_of_reports_furthest_failure(scan):
    with pytest.raises(ScanFailure) as exc:
        scan.first_of('   ""', 0, scan.quoted, scan.number)
    assert exc.value.reason == "empty string"
    assert exc.value.position == 3


def test_optional_does_not_move(scan):
    assert scan.optional("[x]", 0, scan.bare) == (0, None)


@pytest.mark.parametrize("text, values", [
    ("[1, 2, 3]", ["1", "2", "3"]),
    ("['UNKNOWN', 'FORWARD_WHEEL_DRIVE']", ["UNKNOWN", "FORWARD_WHEEL_DRIVE"]),
    ('[ "a" ,b,-1.5 ]', ["a", "b", "-1.5"]),
    ("[a, , b]", ["a", "b"]),
    ("[]", []),
])
def test_bracket_list(scan, text, values):
    pos, found = scan.bracket_list(text, 0)
    assert found == values
    assert pos == len(text)


@pytest.mark.parametrize("text", ["[a b]", "[a, b", "a, b]"])
def test_bracket_list_failures(scan, text):
    with pytest.raises(ScanFailure):
        scan.bracket_list(text, 0)


def test_inline_list_single_scalar(scan):
    assert scan.inline_list(" 0", 0)[1] == ["0"]
    assert scan.inline_list(" 'on'", 0)[1] == ["on"]


def test_inline_list_keeps_bracket_errors(scan):
    with pytest.raises(ScanFailure, match="expected ',' or ']'"):
        scan.inline_list("[a b]", 0)


def test_instance_with_prefix(scan):
    pos, found = scan.instance("Row[1,4]", 0)
    assert found == Instance(("1", "4"), "Row")
    assert found.render() == "Row[1,4]"


def test_instance_quoted_tokens(scan):
    found = scan.instance('["DriverSide", \'PassengerSide\', ]', 0)[1]
    assert found == Instance(("DriverSide", "PassengerSide"))
    assert found.prefix is None


def test_instances_inline_groups(scan):
    pos, groups = scan.instances_inline(' Row[1,2] ["Left","Right"]\n', 0)
    assert groups == [Instance(("1", "2"), "Row"), Instance(("Left", "Right"))]
    assert scan.end_of_line(' Row[1,2] ["Left","Right"]\n', pos)


@pytest.mark.parametrize("text", ["Row", '["Left]', "Row[1 2]"])
def test_instance_failures(scan, text):
    with pytest.raises(ScanFailure):
        scan.instance(text, 0)
