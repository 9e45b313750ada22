"""Tests for the validator factories."""

from promptline import validators as v
from promptline.core.prompt import Failed, Passed, ValidationWarning, Warned, normalize_validation


class TestBasicValidators:
    """Tests for single-purpose validators."""

    def test_required(self) -> None:
        check = v.required()

        assert check("") == "This field is required"
        assert check("   ") == "This field is required"
        assert check(None) == "This field is required"
        assert check([]) == "This field is required"
        assert check("x") is None
        assert check(["a"]) is None

    def test_lengths_count_graphemes(self) -> None:
        """A base letter plus combining accent counts once."""
        assert v.min_length(2)("e\u0301") == "Must be at least 2 characters"
        assert v.max_length(1)("e\u0301") is None
        assert v.max_length(1)("ab") == "Must be at most 1 characters"

    def test_pattern_is_full_match(self) -> None:
        check = v.pattern(r"[a-z]+")

        assert check("abc") is None
        assert check("abc1") == "Invalid format"

    def test_one_of(self) -> None:
        check = v.one_of(["dev", "prod"])

        assert check("dev") is None
        assert check("qa") == "Must be one of: dev, prod"

    def test_integer_and_range(self) -> None:
        assert v.integer()("-12") is None
        assert v.integer()("1.5") == "Must be a number"
        assert v.in_range(1, 10)("10") is None
        assert v.in_range(1, 10)("11") == "Must be between 1 and 10"
        assert v.in_range(1, 10)("x") == "Must be between 1 and 10"

    def test_email_and_url(self) -> None:
        assert v.email()("dev@example.com") is None
        assert v.email()("dev@example") == "Must be a valid email address"
        assert v.url()("https://example.com/x") is None
        assert v.url()("example.com") == "Must be a valid URL"

    def test_paths(self, tmp_path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x")

        assert v.path_exists()(str(target)) is None
        assert v.path_exists()(str(tmp_path / "missing")) == "Path does not exist"
        assert v.path_exists()("") == "Path does not exist"
        assert v.directory_exists()(str(tmp_path)) is None
        assert v.directory_exists()(str(target)) == "Directory does not exist"

    def test_warn_if(self) -> None:
        check = v.warn_if(lambda value: value == "root", "Running as root")

        assert check("root") == ValidationWarning("Running as root")
        assert check("user") is None


class TestCombine:
    """Tests for combine()."""

    def test_all_pass(self) -> None:
        assert v.combine(v.required(), v.integer())("42") == Passed("42")

    def test_first_error_wins(self) -> None:
        result = v.combine(v.required("empty"), v.integer("nan"))("")

        assert result == Failed("empty")

    def test_error_after_warning(self) -> None:
        """A later error still beats an earlier warning."""
        check = v.combine(v.warn_if(lambda _: True, "careful"), v.integer())

        assert check("x") == Failed("Must be a number")
        assert check("1") == Warned("careful")

    def test_result_normalises(self) -> None:
        """combine() results pass through normalisation unchanged."""
        result = v.combine(v.required())("ok")

        assert normalize_validation(result, "ok") == Passed("ok")
