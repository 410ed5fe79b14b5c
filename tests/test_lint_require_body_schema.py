"""Tests for the require-body-schema lint rule."""

from pathlib import Path

import pytest

from app.lint import lint_file, lint_paths, lint_source
from app.lint.rules.require_body_schema import (
    MISSING_VALIDATION_MESSAGE,
    SCHEMA_NAMES,
    RequireBodySchemaRule,
    is_route_file,
)

ROUTE_PATH = "app/api/recipes/route.py"
RULES = [RequireBodySchemaRule()]


def messages(source: str, path: str = ROUTE_PATH):
    return [d.message for d in lint_source(source, path, RULES)]


@pytest.mark.parametrize(
    "path,expected",
    [
        ("app/api/recipes/route.py", True),
        ("/srv/app/api/photos/signed_url/route.py", True),
        ("app\\api\\recipes\\route.py", True),
        ("app/api/recipes/handlers.py", False),
        ("app/services/route.py", False),
        ("api/route.py", False),
    ],
)
def test_file_filter(path, expected):
    """Route modules live below an api directory and are named route.py."""
    assert RequireBodySchemaRule().applies_to(path.replace("\\", "/")) is expected
    assert is_route_file(path.replace("\\", "/")) is expected


def test_out_of_scope_file_has_no_diagnostics():
    """Files outside the filter are never reported, whatever they contain."""
    source = "def POST(request):\n    return None\n"
    assert messages(source, "app/services/recipes.py") == []


def test_out_of_scope_file_is_not_parsed():
    """No visitors are installed, so even invalid syntax is not reported."""
    assert messages("def POST(:\n", "app/services/broken.py") == []


def test_missing_post_schema():
    source = """
def POST(request):
    return Thing.parse(request)
"""
    assert messages(source) == ["API route with POST method must define a PostSchema"]


def test_missing_post_schema_without_validation_reports_both():
    source = """
async def POST(request):
    return {}
"""
    assert messages(source) == [
        "API route with POST method must define a PostSchema",
        MISSING_VALIDATION_MESSAGE,
    ]


def test_schemas_present_but_no_validation_call():
    source = """
PutSchema = UpdateRecipe
PatchSchema = UpdateRecipe

class DeleteSchema(RequestSchema):
    id: str

def PUT(request):
    return {}

def PATCH(request):
    return {}

def DELETE(request):
    return {}
"""
    assert messages(source) == [MISSING_VALIDATION_MESSAGE]


def test_no_method_handlers_means_no_diagnostics():
    source = """
def GET(request):
    return {}

def helper():
    return 1
"""
    assert messages(source) == []


def test_schema_and_safe_parse_on_any_receiver_is_clean():
    source = """
PostSchema = CreateRecipe

async def POST(request):
    result = someVariable.safeParse(body)
    return result
"""
    assert messages(source) == []


def test_schema_declared_in_nested_block_counts():
    source = """
if FEATURE_ENABLED:
    PostSchema = CreateRecipe

def POST(request):
    return PostSchema.parse(request)
"""
    assert messages(source) == []


def test_schema_declared_inside_function_counts():
    source = """
def build():
    PostSchema: type = CreateRecipe
    return PostSchema

def POST(request):
    return build().parse(request)
"""
    assert messages(source) == []


def test_missing_schemas_reported_in_fixed_order():
    source = """
def DELETE(request): ...
def PATCH(request): ...
def PUT(request): ...
def POST(request): ...

x.parse(1)
"""
    assert messages(source) == [
        "API route with POST method must define a PostSchema",
        "API route with PUT method must define a PutSchema",
        "API route with PATCH method must define a PatchSchema",
        "API route with DELETE method must define a DeleteSchema",
    ]


def test_get_and_head_never_require_a_schema():
    source = """
def GET(request): ...
def HEAD(request): ...
"""
    assert messages(source) == []


def test_only_module_level_functions_are_handlers():
    source = """
class Handlers:
    def POST(self, request): ...

def outer():
    def PUT(request): ...
    return PUT

if True:
    def PATCH(request): ...

DELETE = lambda request: None
"""
    assert messages(source) == []


def test_parse_must_be_a_method_call():
    """A bare ``parse(...)`` call is not an ``<object>.parse(...)`` call."""
    source = """
from somewhere import parse

PostSchema = CreateRecipe

def POST(request):
    return parse(request)
"""
    assert messages(source) == [MISSING_VALIDATION_MESSAGE]


def test_other_method_names_do_not_count_as_validation():
    source = """
PostSchema = CreateRecipe

def POST(request):
    return PostSchema.model_validate(request)
"""
    assert messages(source) == [MISSING_VALIDATION_MESSAGE]


def test_duplicate_declarations_are_harmless():
    source = """
PostSchema = A
PostSchema = B

def POST(request):
    return PostSchema.parse(request)
"""
    assert messages(source) == []


def test_diagnostics_attach_to_module():
    source = "\n\n\ndef POST(request):\n    pass\n"
    diagnostics = lint_source(source, ROUTE_PATH, RULES)
    assert {(d.line, d.column) for d in diagnostics} == {(1, 0)}
    assert {d.rule for d in diagnostics} == {"require-body-schema"}
    assert all(d.path == ROUTE_PATH for d in diagnostics)


def test_running_twice_gives_same_result():
    source = """
def POST(request): ...
def PUT(request): ...
PutSchema = X
"""
    first = lint_source(source, ROUTE_PATH, RULES)
    second = lint_source(source, ROUTE_PATH, RULES)
    assert first == second
    assert len(first) == 2


def test_state_does_not_leak_between_files():
    """A schema in one file does not satisfy a handler in another."""
    satisfied = "PostSchema = X\ndef POST(r):\n    return PostSchema.parse(r)\n"
    missing = "def POST(r):\n    return y.parse(r)\n"
    rule = RequireBodySchemaRule()
    assert lint_source(satisfied, "app/api/a/route.py", [rule]) == []
    assert [d.message for d in lint_source(missing, "app/api/b/route.py", [rule])] == [
        "API route with POST method must define a PostSchema"
    ]


def test_schema_name_mapping():
    assert dict(SCHEMA_NAMES) == {
        "POST": "PostSchema",
        "PUT": "PutSchema",
        "PATCH": "PatchSchema",
        "DELETE": "DeleteSchema",
    }


def test_syntax_error_in_route_file_is_reported():
    diagnostics = lint_source("def POST(:\n", ROUTE_PATH, RULES)
    assert len(diagnostics) == 1
    assert diagnostics[0].rule == "syntax-error"


def test_null_bytes_in_route_file_are_reported():
    diagnostics = lint_source("PostSchema = X\0\n", ROUTE_PATH, RULES)
    assert len(diagnostics) == 1
    assert diagnostics[0].rule == "syntax-error"


@pytest.fixture
def route_tree(tmp_path):
    route_dir = tmp_path / "app" / "api" / "recipes"
    route_dir.mkdir(parents=True)
    (route_dir / "route.py").write_text(
        "PostSchema = X\n\ndef POST(r):\n    return PostSchema.parse(r)\n", encoding="utf-8"
    )
    return tmp_path


def test_undecodable_file_outside_routes_is_skipped(route_tree):
    (route_tree / "app" / "legacy.py").write_bytes(b"# caf\xe9\n")
    assert lint_paths([route_tree / "app"], RULES) == []


def test_undecodable_route_file_is_reported(route_tree):
    broken = route_tree / "app" / "api" / "photos" / "route.py"
    broken.parent.mkdir()
    broken.write_bytes(b"# caf\xe9\ndef POST(r): ...\n")

    diagnostics = lint_paths([route_tree / "app"], RULES)
    assert len(diagnostics) == 1
    assert diagnostics[0].rule == "syntax-error"
    assert diagnostics[0].message.startswith("Could not read file")
    assert diagnostics[0].path.endswith("photos/route.py")


def test_relative_paths_are_matched_by_location(route_tree, monkeypatch):
    """``api/...`` given from inside ``app/`` is still a route module."""
    (route_tree / "app" / "api" / "recipes" / "route.py").write_text(
        "def POST(r):\n    return {}\n", encoding="utf-8"
    )
    monkeypatch.chdir(route_tree / "app")

    diagnostics = lint_file("api/recipes/route.py", RULES)
    assert [d.path for d in diagnostics] == ["api/recipes/route.py"] * 2


def test_project_route_modules_follow_the_convention():
    api_dir = Path(__file__).resolve().parents[1] / "app" / "api"
    assert lint_paths([api_dir], RULES) == []
