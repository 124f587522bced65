import os

import pytest

from vssparser.core.errors import CyclicIncludeError, ErrorKind, VssIOError, VssSemanticError, VssSyntaxError
from vssparser.loading.loader import LineKind, VssLoader
from vssparser.parsing.pipeline import parse_text


def memory_reader(files):
    """Reader collaborator serving a dict of path -> text."""
    sources = {os.path.normpath(path): text for path, text in files.items()}

    def reader(path):
        if path not in sources:
            raise FileNotFoundError(2, "No such file or directory", path)
        return sources[path].encode("utf-8")
    return reader


@pytest.mark.parametrize("raw, kind, path, prefix", [
    ("#include child.vspec Body", LineKind.INCLUDE, "child.vspec", "Body"),
    ("   #include child.vspec", LineKind.INCLUDE, "child.vspec", None),
    ("#include\tchild.vspec", LineKind.INCLUDE, "child.vspec", None),
    ("#includes are documented below", LineKind.COMMENT, None, None),
    ("  # a comment", LineKind.COMMENT, None, None),
    ("", LineKind.EMPTY, None, None),
    ("    ", LineKind.EMPTY, None, None),
    ("Vehicle:", LineKind.DATA, None, None),
])
def test_classify(raw, kind, path, prefix):
    line = VssLoader().classify(raw)
    assert line.kind is kind
    assert line.include_path == path
    assert line.include_prefix == prefix


def test_classify_strips_trailing_spaces_from_data():
    assert VssLoader().classify("  type: branch   ").text == "  type: branch"


@pytest.mark.parametrize("raw", ["#include", "#include   ", "#include a.vspec Prefix extra"])
def test_classify_rejects_malformed_include(raw):
    with pytest.raises(ValueError, match="malformed #include"):
        VssLoader().classify(raw)


def test_resolve():
    loader = VssLoader()
    assert loader.resolve("child.vspec", "spec/body") == os.path.normpath("spec/body/child.vspec")
    assert loader.resolve("../x.vspec", "spec/body") == os.path.normpath("spec/x.vspec")
    assert loader.resolve("/abs/x.vspec", "spec/body") == os.path.normpath("/abs/x.vspec")
    assert loader.resolve("x.vspec", None) == "x.vspec"


def test_only_data_lines_are_retained():
    reader = memory_reader({
        "root.vspec": "# header\n\nA:\n  type: branch\n   \n# trailing comment\n",
    })
    context = VssLoader(reader=reader).load("root.vspec")

    assert [line.text for line in context.lines] == ["A:", "  type: branch"]
    assert [line.lineno for line in context.lines] == [3, 4]
    assert [line.index for line in context.lines] == [0, 1]
    assert context.lines[0].source.prefix is None


def test_include_prefix_and_sequence():
    """
    INCLUDE TEST: included lines are spliced at the directive, carry the
    include prefix, and share one sequence counter across files.
    """
    reader = memory_reader({
        "root.vspec": "A:\n  type: branch\n#include sub/child.vspec Drive\nZ:\n  type: branch\n",
        "sub/child.vspec": "B:\n  type: branch\n#include grand.vspec\n",
        "sub/grand.vspec": "# grand\nC:\n  type: branch\n",
    })
    context = VssLoader(reader=reader).load("root.vspec")

    texts = [line.text for line in context.lines]
    assert texts == ["A:", "  type: branch", "B:", "  type: branch",
                     "C:", "  type: branch", "Z:", "  type: branch"]
    assert [line.index for line in context.lines] == list(range(8))

    prefixes = [line.source.prefix for line in context.lines]
    assert prefixes == [None, None, "Drive", "Drive", "Drive", "Drive", None, None]

    grand = context.lines[4]
    assert grand.lineno == 2
    assert grand.source.basename == "grand.vspec"
    assert grand.source.dirname == "sub"
    assert [f.basename for f in context.files] == ["root.vspec", "child.vspec", "grand.vspec"]
    assert context.stack == []


def test_nested_prefix_overrides_instead_of_concatenating():
    reader = memory_reader({
        "root.vspec": "#include child.vspec Outer\n",
        "child.vspec": "#include grand.vspec Inner\n",
        "grand.vspec": "C:\n  type: branch\n",
    })
    context = VssLoader(reader=reader).load("root.vspec")
    assert context.lines[0].source.prefix == "Inner"


def test_same_file_may_be_included_twice():
    reader = memory_reader({
        "root.vspec": "#include row.vspec Row1\n#include row.vspec Row2\n",
        "row.vspec": "Seat:\n  type: branch\n",
    })
    context = VssLoader(reader=reader).load("root.vspec")
    assert [line.source.prefix for line in context.lines] == ["Row1", "Row1", "Row2", "Row2"]


def test_missing_root_file():
    with pytest.raises(VssIOError) as exc:
        VssLoader(reader=memory_reader({})).load("nowhere.vspec")
    assert exc.value.filename == "nowhere.vspec"
    assert "fail to open nowhere.vspec" in exc.value.message


def test_missing_include_names_the_including_line():
    reader = memory_reader({
        "root.vspec": "A:\n  type: branch\n#include missing.vspec\n",
    })
    with pytest.raises(VssIOError) as exc:
        VssLoader(reader=reader).load("root.vspec")
    assert exc.value.filename == "root.vspec"
    assert exc.value.line == 3
    assert "missing.vspec" in exc.value.message


def test_missing_file_on_disk(tmp_path):
    root = tmp_path / "root.vspec"
    root.write_text("#include gone.vspec\n")
    with pytest.raises(VssIOError) as exc:
        VssLoader().load(str(root))
    assert exc.value.line == 1
    assert "gone.vspec" in str(exc.value)


def test_cyclic_include_fails_fast():
    reader = memory_reader({
        "a.vspec": "A:\n  type: branch\n#include b.vspec\n",
        "b.vspec": "#include a.vspec\n",
    })
    with pytest.raises(CyclicIncludeError) as exc:
        VssLoader(reader=reader).load("a.vspec")
    assert isinstance(exc.value, VssIOError)
    assert exc.value.filename == "b.vspec"
    assert exc.value.line == 1
    assert "a.vspec -> b.vspec -> a.vspec" in exc.value.message


def test_self_include_with_prefix_is_cyclic():
    reader = memory_reader({"a.vspec": "#include a.vspec Loop\n"})
    with pytest.raises(CyclicIncludeError):
        VssLoader(reader=reader).load("a.vspec")


def test_malformed_include_is_a_located_syntax_error():
    reader = memory_reader({"root.vspec": "A:\n  type: branch\n#include a.vspec B C\n"})
    with pytest.raises(VssSyntaxError) as exc:
        VssLoader(reader=reader).load("root.vspec")
    assert exc.value.filename == "root.vspec"
    assert exc.value.line == 3
    assert exc.value.excerpt == "#include a.vspec B C"


def test_tab_indentation_is_rejected():
    reader = memory_reader({"root.vspec": "A:\n\ttype: branch\n"})
    with pytest.raises(VssSyntaxError, match="tab character") as exc:
        VssLoader(reader=reader).load("root.vspec")
    assert exc.value.line == 2


def test_undecodable_bytes():
    def reader(path):
        return b"A:\n  description: \xff\xfe\n"

    with pytest.raises(VssIOError, match="not valid utf-8-sig"):
        VssLoader(reader=reader).load("root.vspec")


def test_bom_is_tolerated(tmp_path):
    root = tmp_path / "root.vspec"
    root.write_bytes(b"\xef\xbb\xbfA:\n  type: branch\n")
    context = VssLoader().load(str(root))
    assert context.lines[0].text == "A:"


@pytest.mark.parametrize("separator", ["\x0c", "\x0b", "\x1c", "\x85", "\u2028", "\u2029"])
def test_only_newline_ends_a_physical_line(separator):
    """
    LINE SPLIT TEST: form feeds and Unicode separators stay inside their
    line, so later line numbers keep matching the file.
    """
    reader = memory_reader({
        "root.vspec": f"A:\n  type: branch\n  description: one{separator}  two\nB:\n  type: branch\n",
    })
    context = VssLoader(reader=reader).load("root.vspec")
    assert [line.lineno for line in context.lines] == [1, 2, 3, 4, 5]
    assert context.lines[2].text == f"  description: one{separator}  two"

    result = parse_text(f"A:\n  type: branch\n  description: one{separator}two\n")
    assert result.spec.branches[0].description == f"one{separator}two"


@pytest.mark.parametrize("separator", ["\x0c", "\u2028"])
def test_error_after_embedded_separator_keeps_its_line(separator):
    text = f"A:\n  type: branch\n  description: one{separator}  two\n  foo: bar\n"
    with pytest.raises(VssSemanticError) as exc:
        parse_text(text)
    assert exc.value.kind is ErrorKind.UNAUTHORIZED_TAG
    assert exc.value.line == 4


def test_crlf_line_endings():
    reader = memory_reader({"root.vspec": "A:\r\n  type: branch\r\n\r\n#include b.vspec\r\n",
                            "b.vspec": "B:\r\n  type: branch"})
    context = VssLoader(reader=reader).load("root.vspec")
    assert [line.text for line in context.lines] == ["A:", "  type: branch", "B:", "  type: branch"]
    assert [line.lineno for line in context.lines] == [1, 2, 1, 2]


def test_physical_lines():
    loader = VssLoader()
    assert loader.physical_lines("") == []
    assert loader.physical_lines("a\nb") == ["a", "b"]
    assert loader.physical_lines("a\n\nb\n") == ["a", "", "b"]
    assert loader.physical_lines("a\r\nb\r\n") == ["a", "b"]
