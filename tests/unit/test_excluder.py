"""Unit tests for PathExclusionFilter."""

import itertools
from concurrent.futures import ThreadPoolExecutor
from pathlib import PurePosixPath

import pytest

from file_excluder_mcp.constants import PlatformConvention
from file_excluder_mcp.core import PathExclusionFilter
from file_excluder_mcp.errors import PatternSyntaxError

WINDOWS = PlatformConvention.WINDOWS_STYLE
POSIX = PlatformConvention.POSIX_STYLE

UNIX_DIR = "/home/user/project/tests/PHPStan/File"
WINDOWS_DIR = r"C:\projects\app\tests\PHPStan\File"


class TestExcludeOnWindows:
    """Test exclusion verdicts under the Windows convention (legacy mode)."""

    @pytest.mark.parametrize("file_path,excludes,expected", [
        (WINDOWS_DIR + "/data/excluded-file.php", [], False),
        (WINDOWS_DIR + "/data/excluded-file.php", [WINDOWS_DIR], True),
        (WINDOWS_DIR + r"\Foo\data\excluded-file.php", [WINDOWS_DIR + "/*/data/*"], True),
        (WINDOWS_DIR + r"\data\func-call.php", [], False),
        (WINDOWS_DIR + r"\data\parse-error.php", [WINDOWS_DIR + "/*"], True),
        (WINDOWS_DIR + r"\data\parse-error.php", [WINDOWS_DIR + "/data/?a?s?-error.?h?"], True),
        (WINDOWS_DIR + r"\data\parse-error.php", [WINDOWS_DIR + "/data/[pP]arse-[eE]rror.ph[pP]"], True),
        (WINDOWS_DIR + r"\data\parse-error.php", ["tests/PHPStan/File/data"], True),
        (WINDOWS_DIR + r"\data\parse-error.php", [WINDOWS_DIR + "/aaa"], False),
        (r"C:\Temp\data\parse-error.php", ["C:/Temp/*"], True),
        (r"C:\Data\data\parse-error.php", ["C:/Temp/*"], False),
        (r"c:\Temp\data\parse-error.php", ["C:/Temp/*"], True),
        (r"C:\Temp\data\parse-error.php", ["C:/temp/*"], True),
        (r"c:\Data\data\parse-error.php", ["C:/Temp/*"], False),
        (r"c:\etc\phpstan\dummy-1.php", ["c:\\etc\\phpstan\\"], True),
        (r"c:\etc\phpstan-test\dummy-2.php", ["c:\\etc\\phpstan\\"], False),
        (r"c:\etc\phpstan-test\dummy-2.php", [r"c:\etc\phpstan"], True),
    ])
    def test_files_are_excluded(self, file_path, excludes, expected):
        """Test Windows paths against mixed-separator and mixed-case patterns."""
        excluder = PathExclusionFilter(excludes, True, WINDOWS)

        assert excluder.is_excluded(file_path) is expected


class TestExcludeOnUnix:
    """Test exclusion verdicts under the POSIX convention (legacy mode)."""

    @pytest.mark.parametrize("file_path,excludes,expected", [
        (UNIX_DIR + "/data/excluded-file.php", [], False),
        (UNIX_DIR + "/data/excluded-file.php", [UNIX_DIR], True),
        (UNIX_DIR + "/Foo/data/excluded-file.php", [UNIX_DIR + "/*/data/*"], True),
        (UNIX_DIR + "/data/func-call.php", [], False),
        (UNIX_DIR + "/data/parse-error.php", [UNIX_DIR + "/*"], True),
        (UNIX_DIR + "/data/parse-error.php", [UNIX_DIR + "/data/?a?s?-error.?h?"], True),
        (UNIX_DIR + "/data/parse-error.php", [UNIX_DIR + "/data/[pP]arse-[eE]rror.ph[pP]"], True),
        (UNIX_DIR + "/data/parse-error.php", ["tests/PHPStan/File/data"], True),
        (UNIX_DIR + "/data/parse-error.php", [UNIX_DIR + "/aaa"], False),
        ("/tmp/data/parse-error.php", ["/tmp/*"], True),
        ("/home/myname/data/parse-error.php", ["/tmp/*"], False),
        ("/etc/phpstan/dummy-1.php", ["/etc/phpstan/"], True),
        ("/etc/phpstan-test/dummy-2.php", ["/etc/phpstan/"], False),
        ("/etc/phpstan-test/dummy-2.php", ["/etc/phpstan"], True),
    ])
    def test_files_are_excluded(self, file_path, excludes, expected):
        """Test POSIX paths against literal and wildcard patterns."""
        excluder = PathExclusionFilter(excludes, True, POSIX)

        assert excluder.is_excluded(file_path) is expected

    def test_case_sensitive(self):
        """Test that POSIX matching respects case."""
        excluder = PathExclusionFilter(["/tmp/*"], True, POSIX)

        assert not excluder.is_excluded("/TMP/data/parse-error.php")


class TestNoImplicitWildcard:
    """Test the difference between legacy and strict literal matching."""

    @pytest.mark.parametrize("file_path,excludes,legacy,expected", [
        (UNIX_DIR + "/tests/foo.php", [UNIX_DIR + "/test"], True, True),
        (UNIX_DIR + "/tests/foo.php", [UNIX_DIR + "/test"], False, False),
        (UNIX_DIR + "/test/foo.php", [UNIX_DIR + "/test"], False, True),
        (UNIX_DIR + "/FileExcluderTest.php", [UNIX_DIR + "/FileExcluderTest.php"], False, True),
        (UNIX_DIR + "/tests/foo.php", [UNIX_DIR + "/test*"], False, True),
        (UNIX_DIR + "/tests/foo.php", [UNIX_DIR + "/test*"], True, True),
    ])
    def test_no_implicit_wildcard(self, file_path, excludes, legacy, expected):
        """Test absolute literal patterns in both modes."""
        excluder = PathExclusionFilter(excludes, legacy, POSIX)

        assert excluder.is_excluded(file_path) is expected

    def test_relative_literal_in_strict_mode(self):
        """Test that a relative literal only matches at the start of the path."""
        excluder = PathExclusionFilter(["test"], False, POSIX)

        assert not excluder.is_excluded("tests/foo.php")
        assert excluder.is_excluded("test/foo.php")
        assert not excluder.is_excluded("/repo/test/foo.php")

    def test_relative_literal_in_legacy_mode(self):
        """Test that a relative literal also matches as a trailing fragment."""
        excluder = PathExclusionFilter(["vendor/lib"], True, POSIX)

        assert excluder.is_excluded("/repo/vendor/lib")
        assert excluder.is_excluded("/repo/vendor/lib/src/a.php")
        assert not excluder.is_excluded("/repo/myvendor/lib/src/a.php")


class TestFilterProperties:
    """Test properties that hold for every filter."""

    @pytest.mark.parametrize("legacy", [True, False])
    @pytest.mark.parametrize("path,convention", [
        ("/etc/phpstan/dummy-1.php", POSIX),
        ("relative/path/file.php", POSIX),
        ("/Mixed/Case/Dir", POSIX),
        (r"C:\Temp\data\parse-error.php", WINDOWS),
        ("c:/etc/phpstan/", WINDOWS),
    ])
    def test_literal_path_excludes_itself(self, path, convention, legacy):
        """Test that a path used verbatim as a pattern excludes that path."""
        excluder = PathExclusionFilter([path], legacy, convention)

        assert excluder.is_excluded(path)

    def test_empty_path_excludes_itself_in_strict_mode(self):
        """Test that an empty literal pattern matches only the empty path."""
        excluder = PathExclusionFilter([""], False, POSIX)

        assert excluder.is_excluded("")
        assert not excluder.is_excluded("/etc/x.php")

    @pytest.mark.parametrize("legacy", [True, False])
    def test_order_independence(self, legacy):
        """Test that permuting patterns never changes verdicts."""
        patterns = ["/tmp/*", "/etc/phpstan", "vendor", "/data/[pP]arse-error.php", "*.log"]
        paths = [
            "/tmp/x.php",
            "/etc/phpstan-test/a.php",
            "/etc/phpstan/a.php",
            "vendor/autoload.php",
            "/repo/vendor/autoload.php",
            "/data/Parse-error.php",
            "/var/app.log",
            "/src/app.php",
        ]
        expected = [PathExclusionFilter(patterns, legacy, POSIX).is_excluded(p) for p in paths]

        for permutation in itertools.permutations(patterns):
            excluder = PathExclusionFilter(permutation, legacy, POSIX)
            assert [excluder.is_excluded(p) for p in paths] == expected

    def test_empty_pattern_list(self):
        """Test that a filter without patterns excludes nothing."""
        excluder = PathExclusionFilter([], True, POSIX)

        assert excluder.patterns == ()
        assert not excluder.is_excluded("/anything.php")
        assert not excluder.is_excluded("")

    def test_concurrent_queries(self):
        """Test that a shared filter gives the same answers across threads."""
        excluder = PathExclusionFilter(["/tmp/*", "/etc/phpstan/"], True, POSIX)
        paths = ["/tmp/a.php", "/etc/phpstan/b.php", "/src/c.php"] * 200

        with ThreadPoolExecutor(max_workers=8) as pool:
            verdicts = list(pool.map(excluder.is_excluded, paths))

        assert verdicts == [True, True, False] * 200


class TestFilterConstruction:
    """Test construction and read-only accessors."""

    def test_malformed_pattern_fails_construction(self):
        """Test that construction propagates compilation errors."""
        with pytest.raises(PatternSyntaxError) as exc_info:
            PathExclusionFilter(["/tmp/*", "/data/[abc"], True, POSIX)

        assert exc_info.value.pattern == "/data/[abc"

    def test_default_convention_is_host(self):
        """Test that the host convention is used when none is given."""
        excluder = PathExclusionFilter(["/tmp/*"])

        assert excluder.convention == PlatformConvention.current()
        assert excluder.legacy_implicit_wildcard is True

    def test_patterns_keep_configured_order(self):
        """Test that compiled patterns keep raw strings and order."""
        excluder = PathExclusionFilter(["b/*", "a", "c"], False, POSIX)

        assert [p.raw for p in excluder.patterns] == ["b/*", "a", "c"]

    def test_accepts_generator(self):
        """Test that patterns may be any iterable."""
        excluder = PathExclusionFilter((p for p in ["/tmp/*"]), True, POSIX)

        assert excluder.is_excluded("/tmp/x")

    def test_repr(self):
        """Test the debugging representation."""
        excluder = PathExclusionFilter(["/tmp/*"], False, POSIX)

        assert repr(excluder) == (
            "PathExclusionFilter(patterns=['/tmp/*'], "
            "legacy_implicit_wildcard=False, convention='posix')"
        )


class TestFilterQueries:
    """Test supplementary query helpers."""

    def test_find_matching_pattern_returns_first(self):
        """Test that the first matching pattern is reported."""
        excluder = PathExclusionFilter(["/src/*.txt", "/src/*", "/src"], True, POSIX)

        match = excluder.find_matching_pattern("/src/app.php")

        assert match is not None
        assert match.raw == "/src/*"

    def test_find_matching_pattern_none(self):
        """Test that None is returned for included paths."""
        excluder = PathExclusionFilter(["/src/*"], True, POSIX)

        assert excluder.find_matching_pattern("/lib/app.php") is None

    def test_filter_paths_preserves_order(self):
        """Test that filter_paths keeps included paths in order."""
        excluder = PathExclusionFilter(["/vendor", "*.log"], True, POSIX)
        paths = ["/src/b.php", "/vendor/x.php", "/src/a.php", "/var/debug.log"]

        assert excluder.filter_paths(paths) == ["/src/b.php", "/src/a.php"]

    def test_accepts_path_objects(self):
        """Test that path objects are converted to strings."""
        excluder = PathExclusionFilter(["/tmp/*"], True, POSIX)

        assert excluder.is_excluded(PurePosixPath("/tmp/data/parse-error.php"))

    def test_caller_strings_not_modified(self):
        """Test that patterns keep their original text for display."""
        excluder = PathExclusionFilter([r"C:\Temp\*"], True, WINDOWS)

        assert excluder.patterns[0].raw == r"C:\Temp\*"
        assert excluder.patterns[0].normalized == "c:/temp/*"
