import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).resolve().parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

import srcgen  # noqa: E402


@pytest.fixture
def make_field() -> Callable[..., srcgen.Field]:
    def _make_field(
        name: str = "Id",
        type_name: str = "int",
        *,
        visibility: srcgen.Visibility = srcgen.Visibility.NONE,
        mutability: srcgen.Mutability = srcgen.Mutability.NONE,
        value: str | None = None,
    ) -> srcgen.Field:
        return srcgen.Field(
            name=name,
            type_ref=srcgen.type_ref(type_name),
            visibility=visibility,
            mutability=mutability,
            value=value,
        )

    return _make_field


@pytest.fixture
def make_parameter() -> Callable[..., srcgen.Parameter]:
    def _make_parameter(
        name: str, type_name: str, extension: bool = False
    ) -> srcgen.Parameter:
        return srcgen.Parameter(
            name=name, type_ref=srcgen.type_ref(type_name), extension=extension
        )

    return _make_parameter


@pytest.fixture
def sum_method(make_parameter: Callable[..., srcgen.Parameter]) -> srcgen.Method:
    return srcgen.Method(
        name="Sum",
        type_ref=srcgen.type_ref("int"),
        parameters=[make_parameter("a", "int"), make_parameter("b", "int")],
        body="return a + b;",
    )


@pytest.fixture
def widget_file(make_field: Callable[..., srcgen.Field]) -> srcgen.CodeFile:
    return srcgen.CodeFile(
        namespace="Acme",
        imports=["core"],
        classes=[srcgen.Class(name="Widget", members=[make_field("Id", "int")])],
    )


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[object], Path]:
    def _write_tree(data: object, filename: str = "tree.json") -> Path:
        tree = tmp_path / filename
        tree.write_text(json.dumps(data), encoding="utf-8")
        return tree

    return _write_tree
