"""Unit tests for exclusion pattern matching."""

from pybunnysync.sync.exclude import expand_braces, is_excluded


class TestIsExcluded:
    """Tests for is_excluded."""

    def test_no_patterns(self):
        """Test that an empty pattern list never excludes."""
        assert is_excluded("anything.txt", []) is False

    def test_wildcard_extension(self):
        """Test a * wildcard pattern."""
        assert is_excluded("debug.log", ["*.log"]) is True
        assert is_excluded("debug.txt", ["*.log"]) is False

    def test_exact_name(self):
        """Test an exact file name pattern."""
        assert is_excluded(".bunnysync", [".bunnysync"]) is True
        assert is_excluded("bunnysync", [".bunnysync"]) is False

    def test_any_pattern_matches(self):
        """Test that one matching pattern is enough."""
        assert is_excluded("a.tmp", ["*.log", "*.tmp"]) is True

    def test_case_sensitive(self):
        """Test that matching is case-sensitive."""
        assert is_excluded("README.MD", ["*.md"]) is False

    def test_prefix_wildcard(self):
        """Test a trailing wildcard."""
        assert is_excluded("temp_123", ["temp_*"]) is True
        assert is_excluded("my_temp_123", ["temp_*"]) is False

    def test_brace_alternatives(self):
        """Test that {a,b} matches either alternative."""
        assert is_excluded("debug.log", ["*.{log,tmp}"]) is True
        assert is_excluded("cache.tmp", ["*.{log,tmp}"]) is True
        assert is_excluded("page.html", ["*.{log,tmp}"]) is False

    def test_brace_alternatives_whole_name(self):
        """Test that alternatives must still match the whole name."""
        assert is_excluded("Thumbs.db", ["{Thumbs.db,.DS_Store}"]) is True
        assert is_excluded("my.DS_Store", ["{Thumbs.db,.DS_Store}"]) is False


class TestExpandBraces:
    """Tests for brace expansion."""

    def test_no_braces(self):
        """Test that plain patterns are returned unchanged."""
        assert expand_braces("*.log") == ["*.log"]

    def test_single_group(self):
        """Test one group of alternatives."""
        assert expand_braces("*.{log,tmp}") == ["*.log", "*.tmp"]

    def test_several_groups(self):
        """Test that groups combine in order."""
        assert expand_braces("{a,b}-{1,2}") == ["a-1", "a-2", "b-1", "b-2"]

    def test_nested_groups(self):
        """Test that nested groups are expanded."""
        assert sorted(set(expand_braces("{x,{y,z}}"))) == ["x", "y", "z"]
