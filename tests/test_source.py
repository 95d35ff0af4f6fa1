"""Tests for force10.source — method and class body extraction."""

from pathlib import Path

from force10.source import extract_class_body, extract_method_body, read_lines, read_source


class TestBraceBodies:
    def test_simple_body(self) -> None:
        source = "function index() { return 1; }"
        assert extract_method_body(source, "index") == " return 1; "

    def test_nested_braces(self) -> None:
        source = (
            "function show(id) {\n"
            "  if (id) { return render('Show', { id }); }\n"
            "}\n"
            "function other() { return 2; }\n"
        )
        body = extract_method_body(source, "show")
        assert body is not None
        assert "render('Show'" in body
        assert "return 2" not in body

    def test_return_type_annotation(self) -> None:
        source = "public function index(): Response { return x; }"
        assert extract_method_body(source, "index") == " return x; "

    def test_unbalanced_takes_rest(self) -> None:
        source = "function index() { if (a) { return 1;"
        assert extract_method_body(source, "index") == " if (a) { return 1;"

    def test_name_must_match_whole_word(self) -> None:
        source = "function indexAll() { return 1; }"
        assert extract_method_body(source, "index") is None


class TestIndentedBodies:
    def test_method_in_class(self) -> None:
        source = (
            "class UsersController:\n"
            "    def index(self, request):\n"
            "        users = load()\n"
            "\n"
            "        return Inertia.render('Users/Index', {'users': users})\n"
            "\n"
            "    def show(self, request):\n"
            "        return Inertia.render('Users/Show')\n"
        )
        body = extract_method_body(source, "index")
        assert body is not None
        assert "Users/Index" in body
        assert "Users/Show" not in body

    def test_async_and_return_annotation(self) -> None:
        source = (
            "async def store(self, request) -> Response:\n"
            "    return inertia('Created')\n"
        )
        assert extract_method_body(source, "store") == "    return inertia('Created')"

    def test_one_line_body(self) -> None:
        source = "def show(self): return inertia('Show')\n"
        assert extract_method_body(source, "show") == " return inertia('Show')"

    def test_body_at_end_of_file(self) -> None:
        source = "def last(self):\n    return 1"
        assert extract_method_body(source, "last") == "    return 1"

    def test_missing_method(self) -> None:
        assert extract_method_body("def other(self):\n    pass\n", "index") is None

    def test_earliest_declaration_wins(self) -> None:
        source = (
            "def index(self):\n"
            "    return 'python'\n"
            "function index() { return 'brace'; }\n"
        )
        assert extract_method_body(source, "index") == "    return 'python'"


class TestClassBodies:
    def test_class_body_scopes_methods(self) -> None:
        source = (
            "class First:\n"
            "    def index(self):\n"
            "        return 'first'\n"
            "\n"
            "class Second(Base):\n"
            "    def index(self):\n"
            "        return 'second'\n"
        )
        body = extract_class_body(source, "Second")
        assert body is not None
        assert extract_method_body(body, "index") == "        return 'second'"

    def test_missing_class(self) -> None:
        assert extract_class_body("class Other:\n    pass\n", "Missing") is None


class TestReaders:
    def test_read_source(self, tmp_path: Path) -> None:
        path = tmp_path / "mod.py"
        path.write_text("x = 1\n")
        assert read_source(path) == "x = 1\n"

    def test_read_source_missing(self, tmp_path: Path) -> None:
        assert read_source(tmp_path / "nope.py") is None

    def test_read_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "lines.py"
        path.write_text("a\nb\nc\nd\n")
        assert read_lines(str(path), 2, 3) == "b\nc\n"

    def test_read_lines_sees_rewritten_file(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text("x = inertia('Old')\n")
        assert read_lines(str(path), 1, 1) == "x = inertia('Old')\n"

        path.write_text("x = inertia('Renamed')\n")
        assert read_lines(str(path), 1, 1) == "x = inertia('Renamed')\n"

    def test_read_lines_bad_span(self, tmp_path: Path) -> None:
        path = tmp_path / "span.py"
        path.write_text("a\n")
        assert read_lines(str(path), 3, 2) is None
        assert read_lines(str(tmp_path / "missing.py"), 1, 1) is None
