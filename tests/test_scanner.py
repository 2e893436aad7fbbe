"""Tests for spectable.scanner module."""

from pathlib import Path

import pytest

from spectable.config import ScannerConfig
from spectable.models import SourceRange
from spectable.scanner import (
    ScanResult,
    SourceScanner,
    has_block_label_nearby,
    has_opening_brace_nearby,
    has_where_block,
    scan_file,
    scan_source,
)
from spectable.values import Value


@pytest.fixture
def scanner():
    """Create a SourceScanner with default settings."""
    return SourceScanner()


class TestScanFixture:
    """Tests against the data-driven specification fixture."""

    def test_finds_class(self, scanner, data_driven_source):
        classes = scanner.scan(data_driven_source)

        assert len(classes) == 1
        assert classes[0].name == "DataDrivenSpec"
        assert classes[0].line == 5
        assert not classes[0].is_abstract

    def test_method_order_and_lifecycle_excluded(self, scanner, data_driven_source):
        methods = scanner.scan(data_driven_source)[0].methods

        assert [m.name for m in methods] == [
            "maximum of two numbers",
            "double pipe separates inputs from outputs",
            "semicolon separated table",
            "maximum of #a and #b is #c",
            "#person.name is #age years old",
            "single column with placeholder",
            "mixed value types",
        ]

    def test_every_method_is_data_driven(self, scanner, data_driven_source):
        methods = scanner.scan(data_driven_source)[0].methods
        assert all(m.is_data_driven for m in methods)

    def test_method_positions(self, scanner, data_driven_source):
        method = scanner.scan(data_driven_source)[0].find_method("maximum of two numbers")

        assert method.line == 12
        assert method.where_line == 16
        assert method.range.start_line == 12
        assert method.range.start_column == 0

    def test_iterations(self, scanner, data_driven_source):
        method = scanner.scan(data_driven_source)[0].find_method("maximum of two numbers")

        assert [it.index for it in method.iterations] == [0, 1, 2]
        assert method.iterations[1].data_values == {
            "a": Value.number(7),
            "b": Value.number(4),
            "c": Value.number(7),
        }
        assert method.iterations[0].range.start_line == 18

    def test_unrolled_display_names(self, scanner, data_driven_source):
        method = scanner.scan(data_driven_source)[0].find_method("maximum of #a and #b is #c")
        assert [it.display_name for it in method.iterations] == [
            "maximum of 1 and 3 is 3",
            "maximum of 7 and 4 is 7",
        ]

    def test_semicolon_table(self, scanner, data_driven_source):
        method = scanner.scan(data_driven_source)[0].find_method("semicolon separated table")
        assert method.iterations[1].data_values == {
            "a": Value.number(4),
            "b": Value.number(5),
            "product": Value.number(20),
        }

    def test_mixed_values(self, scanner, data_driven_source):
        method = scanner.scan(data_driven_source)[0].find_method("mixed value types")
        assert method.iterations[0].data_values == {
            "text": Value.string("hello"),
            "number": Value.number(42),
            "decimal": Value.number(3.5),
            "flag": Value.boolean(True),
            "nothing": Value.null(),
        }

    def test_rescan_is_deterministic(self, scanner, data_driven_source):
        assert scanner.scan(data_driven_source) == scanner.scan(data_driven_source)


class TestMethodDetection:
    """Tests for feature method recognition."""

    def test_identifier_method_with_block_label(self, scanner):
        content = """
class MathSpec extends Specification {
    def addsNumbers() {
        expect:
        1 + 1 == 2
    }
}
"""
        methods = scanner.scan(content)[0].methods
        assert [m.name for m in methods] == ["addsNumbers"]
        assert not methods[0].is_data_driven
        assert methods[0].iterations is None
        assert methods[0].where_line is None

    def test_helper_method_without_label_rejected(self, scanner):
        content = """
class MathSpec extends Specification {
    def helper() {
        return 42
    }

    def "real feature"() {
        expect:
        helper() == 42
    }
}
"""
        methods = scanner.scan(content)[0].methods
        assert [m.name for m in methods] == ["real feature"]

    def test_void_and_single_quoted(self, scanner):
        content = """
class MathSpec extends Specification {
    void 'it works'() {
        expect:
        true
    }
}
"""
        assert scanner.scan(content)[0].methods[0].name == "it works"

    def test_quoted_name_with_other_quote(self, scanner):
        content = """
class MathSpec extends Specification {
    def "it's fine"() {
        expect:
        true
    }
}
"""
        assert scanner.scan(content)[0].methods[0].name == "it's fine"

    def test_brace_on_following_line(self, scanner):
        content = """
class MathSpec extends Specification {
    def "brace below"()
    {
        expect:
        true
    }
}
"""
        assert [m.name for m in scanner.scan(content)[0].methods] == ["brace below"]

    def test_block_comment_before_brace(self, scanner):
        content = """
class MathSpec extends Specification {
    def "x"()
    /* note */
    {
        expect:
        true
    }
}
"""
        assert [m.name for m in scanner.scan(content)[0].methods] == ["x"]

    def test_brace_too_far_rejected(self, scanner):
        content = """
class MathSpec extends Specification {
    def "brace far away"()





    {
        expect:
        true
    }
}
"""
        assert scanner.scan(content)[0].methods == []

    @pytest.mark.parametrize("hook", ["setup", "setupSpec", "cleanup", "cleanupSpec"])
    def test_lifecycle_hooks_rejected(self, scanner, hook):
        content = f"""
class MathSpec extends Specification {{
    def {hook}() {{
        given:
        def x = 1
    }}
}}
"""
        assert scanner.scan(content)[0].methods == []

    def test_custom_lifecycle_methods(self):
        content = """
class MathSpec extends Specification {
    def prepare() {
        given:
        def x = 1
    }
}
"""
        config = ScannerConfig(lifecycle_methods=frozenset({"prepare"}))
        assert scan_source(content, config)[0].methods == []

    def test_where_with_data_pipes_only(self, scanner):
        content = """
class MathSpec extends Specification {
    def "pipes"() {
        expect:
        x > 0
        where:
        x << [1, 2, 3]
    }
}
"""
        method = scanner.scan(content)[0].methods[0]
        assert method.is_data_driven
        assert method.iterations is None


class TestClassDetection:
    """Tests for specification class recognition."""

    def test_qualified_base_class(self, scanner):
        content = "class FooSpec extends spock.lang.Specification {\n}\n"
        assert [c.name for c in scanner.scan(content)] == ["FooSpec"]

    def test_non_specification_class_ignored(self, scanner):
        content = """
class Helper {
    def "looks like a feature"() {
        expect:
        true
    }
}
"""
        assert scanner.scan(content) == []

    def test_abstract_class_flagged(self, scanner):
        content = """
abstract class BaseSpec extends Specification {
    def "inherited feature"() {
        expect:
        true
    }
}
"""
        classes = scanner.scan(content)
        assert classes[0].is_abstract
        assert [m.name for m in classes[0].methods] == ["inherited feature"]

    def test_two_classes_in_one_file(self, scanner):
        content = """
class FirstSpec extends Specification {
    def "first"() {
        expect:
        true
    }
}

class SecondSpec extends Specification {
    def "second"() {
        expect:
        true
    }
}
"""
        classes = scanner.scan(content)
        assert [c.name for c in classes] == ["FirstSpec", "SecondSpec"]
        assert [m.name for m in classes[1].methods] == ["second"]

    def test_nested_class_methods_skipped(self, scanner):
        content = """
class OuterSpec extends Specification {
    def "outer first"() {
        expect:
        true
    }

    class InnerSpec extends Specification {
        def "inner feature"() {
            expect:
            true
        }
    }

    def "outer second"() {
        expect:
        true
    }
}
"""
        classes = scanner.scan(content)
        assert [c.name for c in classes] == ["OuterSpec"]
        assert [m.name for m in classes[0].methods] == ["outer first", "outer second"]

    def test_one_line_nested_class(self, scanner):
        content = """
class OuterSpec extends Specification {
    class Empty extends Specification {}

    def "after nested"() {
        expect:
        true
    }

    def "second after"() {
        expect:
        true
    }
}
"""
        methods = scanner.scan(content)[0].methods
        assert [m.name for m in methods] == ["after nested", "second after"]

    def test_one_line_class_followed_by_class(self, scanner):
        content = """
class EmptySpec extends Specification {}

class FullSpec extends Specification {
    def "feature"() {
        expect:
        true
    }
}
"""
        classes = scanner.scan(content)
        assert [c.name for c in classes] == ["EmptySpec", "FullSpec"]
        assert classes[0].methods == []
        assert [m.name for m in classes[1].methods] == ["feature"]

    def test_class_range(self, scanner):
        content = "class FooSpec extends Specification {\n}\n"
        assert scanner.scan(content)[0].range == SourceRange(0, 0, 0, 37)


class TestMalformedInput:
    """Malformed input never raises."""

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "// only a comment\n/* and a block */\n",
            "}}}}\n{{\n",
            "class BrokenSpec extends Specification {\n    def \"x\"() {\n        expect:\n",
        ],
    )
    def test_does_not_raise(self, scanner, content):
        assert isinstance(scanner.scan(content), list)

    def test_truncated_file_keeps_what_was_found(self, scanner):
        content = """
class BrokenSpec extends Specification {
    def "complete"() {
        expect:
        true
    }

    def "cut off"() {
        expect:
        a
        where:
        a | _
        1 | _
"""
        methods = scanner.scan(content)[0].methods
        assert [m.name for m in methods] == ["complete", "cut off"]
        assert methods[1].is_data_driven
        assert len(methods[1].iterations) == 1

    def test_extra_closing_braces_end_class(self, scanner):
        content = """
class BrokenSpec extends Specification {
    }
    }
    def "outside"() {
        expect:
        true
    }
"""
        classes = scanner.scan(content)
        assert classes[0].methods == []


class TestNearbyHelpers:
    """Tests for lookahead helpers."""

    def test_opening_brace_skips_comments(self):
        lines = ['def "x"()', "    // comment", "", "    {"]
        assert has_opening_brace_nearby(lines, 0)

    def test_opening_brace_skips_block_comments(self):
        lines = ['def "x"()', "    /* note */", "    {"]
        assert has_opening_brace_nearby(lines, 0)

    def test_opening_brace_first_code_line_decides(self):
        lines = ['def "x"()', "    println 1", "    {"]
        assert not has_opening_brace_nearby(lines, 0)

    def test_block_label_stops_at_method_end(self):
        lines = ["def helper() {", "    1", "}", "def other() {", "    expect:"]
        assert not has_block_label_nearby(lines, 0)

    def test_block_label_window(self):
        lines = ["def x() {"] + ["    call()"] * 60 + ["    expect:"]
        assert not has_block_label_nearby(lines, 0, window=50)
        assert has_block_label_nearby(lines, 0, window=70)

    def test_has_where_block(self):
        lines = ["def x() {", "    expect:", "    a", "    where:", "    a | _", "    1 | _", "}"]
        assert has_where_block(lines, 0)


class TestScanFiles:
    """Tests for scanning files and directories."""

    def test_scan_file(self, fixtures_dir):
        classes = scan_file(fixtures_dir / "specs" / "DataDrivenSpec.groovy")
        assert classes[0].name == "DataDrivenSpec"

    def test_scan_missing_file(self, tmp_path):
        assert scan_file(tmp_path / "Missing.groovy") == []

    def test_scan_paths(self, tmp_path, data_driven_source):
        (tmp_path / "src" / "test").mkdir(parents=True)
        (tmp_path / "build" / "tmp").mkdir(parents=True)
        (tmp_path / "src" / "test" / "DataDrivenSpec.groovy").write_text(data_driven_source)
        (tmp_path / "src" / "test" / "Helper.groovy").write_text("class Helper {}\n")
        (tmp_path / "build" / "tmp" / "CopySpec.groovy").write_text(data_driven_source)

        result = SourceScanner().scan_paths(tmp_path)

        assert isinstance(result, ScanResult)
        assert result.files_scanned == 1
        assert list(result.classes_by_file) == [tmp_path / "src" / "test" / "DataDrivenSpec.groovy"]
        assert result.class_count == 1
        assert result.errors == []

    def test_scan_paths_custom_patterns(self, tmp_path):
        (tmp_path / "MathTests.groovy").write_text("class MathTests extends Specification {\n}\n")

        result = SourceScanner().scan_paths(tmp_path, patterns=["*Tests.groovy"])

        assert result.class_count == 1
        assert Path(next(iter(result.classes_by_file))).name == "MathTests.groovy"
