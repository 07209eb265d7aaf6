"""Source-text emitter for curly-brace object-oriented languages.

Callers assemble a tree of nodes (file, namespace, classes, members) and
render it into indented C#-style source text. A JSON tree description can be
rendered from the command line.

Usage:
    python srcgen.py tree.json
    python srcgen.py tree.json --output out/Widget.cs --create
    python srcgen.py tree.json --stdout
"""

import argparse
import enum
import json
from dataclasses import dataclass, field
from pathlib import Path
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol


# ===--- Formatting constants ---=== #

TERMINATOR = ";"
NEWLINE = "\r\n"
"""Fixed line break. Output is byte-identical on every host platform."""

INDENT_UNIT = "\t"
MAX_DEPTH = 255

IMPORT_KEYWORD = "import"
NAMESPACE_KEYWORD = "namespace"
CLASS_KEYWORD = "class"
ENUM_KEYWORD = "enum"
EXTENSION_MARKER = "this"

STANDARD_IMPORTS: tuple[str, ...] = ("System", "System.Collections.Generic")
"""Imports emitted after the caller's list when include_standard_imports is set."""


# ===--- Errors ---=== #

VALID_ERROR_CODES = {
    "PATH_NOT_FOUND",
    "INVALID_TREE",
    "UNKNOWN_NODE_KIND",
    "INVALID_QUALIFIER",
    "CONFLICT_OUTPUT_FLAGS",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


class InvalidMemberError(ValueError):
    """A member whose configuration cannot be rendered.

    Raised from render() before any text for the member is produced, so a
    failed render never yields partial output.
    """

    def __init__(self, member: str, message: str, suggestion: str | None = None):
        super().__init__(message)
        self.member = member
        self.message = message
        self.suggestion = suggestion


# ===--- Formatting primitives ---=== #


def join_with_spaces(tokens: Iterable[str | None]) -> str:
    """Join non-blank tokens with single spaces.

    Empty, whitespace-only and None tokens are dropped and every survivor is
    stripped, so optional qualifiers never leave double or edge spaces:

        join_with_spaces(["", "public", "", "int"]) == "public int"
    """
    return " ".join(token.strip() for token in tokens if token and token.strip())


def indent(depth: int) -> str:
    if not 0 <= depth <= MAX_DEPTH:
        raise ValueError(f"depth must be in [0, {MAX_DEPTH}], got {depth}")
    return INDENT_UNIT * depth


def prefix_indent(depth: int, text: str) -> str:
    return f"{indent(depth)}{text}"


def line_for(depth: int, text: str, terminate: bool = False) -> str:
    """Return one complete output line: indentation, text, optional ';', line break."""
    line = prefix_indent(depth, text)
    if terminate:
        line += TERMINATOR
    return line + NEWLINE


# ===--- Type references ---=== #


def qualified_type_name(descriptor: type) -> str:
    """Return module.qualname for a type, bare qualname for builtins."""
    module = getattr(descriptor, "__module__", "") or ""
    qualname = getattr(descriptor, "__qualname__", None) or descriptor.__name__
    if module in ("", "builtins"):
        return qualname
    return f"{module}.{qualname}"


def resolve_type_name(literal: str | None, descriptor: type | None) -> str:
    """Pick the display name for a type.

    A non-blank literal wins verbatim, then the descriptor's fully qualified
    name, then the empty string.
    """
    if literal and literal.strip():
        return literal
    if descriptor is None:
        return ""
    return qualified_type_name(descriptor)


@dataclass(frozen=True)
class TypeRef:
    """Displayable type name built from a literal or a Python type.

    Attributes:
        literal: Type name used verbatim when non-blank, e.g. "List<int>".
        descriptor: Structured type rendered by its fully qualified name when
            no literal is given.
    """

    literal: str | None = None
    descriptor: type | None = None

    @property
    def display_name(self) -> str:
        return resolve_type_name(self.literal, self.descriptor)


def type_ref(value: "str | type | TypeRef | None") -> TypeRef:
    """Build a TypeRef from a literal name, a type, or an existing TypeRef.

    Raises:
        TypeError: If value is none of the accepted shapes.
    """
    if value is None:
        return TypeRef()
    if isinstance(value, TypeRef):
        return value
    if isinstance(value, str):
        return TypeRef(literal=value)
    if isinstance(value, type):
        return TypeRef(descriptor=value)
    raise TypeError(f"Cannot build a type reference from {type(value).__name__}")


# ===--- Qualifiers ---=== #


class Visibility(enum.Enum):
    NONE = "none"
    PRIVATE = "private"
    PROTECTED = "protected"
    PUBLIC = "public"


class Mutability(enum.Enum):
    NONE = "none"
    CONST = "const"
    STATIC = "static"
    READONLY = "readonly"


def qualifier_text(qualifier: Visibility | Mutability) -> str:
    if qualifier is None or qualifier.name == "NONE":
        return ""
    return qualifier.name.lower()


def declaration_text(
    visibility: str, mutability: str, type_name: str, name: str
) -> str:
    """Return the shared "visibility mutability type name" declaration prefix."""
    return join_with_spaces((visibility, mutability, type_name, name))


def _declaration(node: "Field | Property | Method | LiteralCollection") -> str:
    return declaration_text(
        qualifier_text(node.visibility),
        qualifier_text(node.mutability),
        node.type_ref.display_name,
        node.name,
    )


# ===--- Renderable contract ---=== #


class Renderable(Protocol):
    def render(self, depth: int = 0) -> str: ...

    def render_line(self, depth: int = 0) -> str: ...


@dataclass(kw_only=True)
class Node:
    """Root of every renderable tree node.

    Variants supply render(), the Renderable contract. It is a pure function
    of the node's own state and the depth it is given. It never mutates the node, so repeated renders are identical.
    """

    name: str = ""

    def render_line(self, depth: int = 0) -> str:
        return self.render(depth) + NEWLINE


def render_children(nodes: Sequence[Renderable] | None, depth: int) -> str:
    """Render a sequence of sibling nodes at one depth.

    Every node but the last ends with a line break; the last one does not,
    leaving the caller in control of what follows the block.
    """
    children = list(nodes or ())
    if not children:
        return ""
    head = "".join(child.render_line(depth) for child in children[:-1])
    return head + children[-1].render(depth)


def join_sections(sections: Iterable[str]) -> str:
    """Join non-empty rendered blocks with exactly one blank line between them."""
    return (NEWLINE * 2).join(section for section in sections if section)


def _body_lines(depth: int, body: str | None) -> list[str]:
    if not body or not body.strip():
        return []
    return [
        line_for(depth, line) if line.strip() else NEWLINE
        for line in body.splitlines()
    ]


# ===--- Member variants ---=== #


@dataclass(kw_only=True)
class Parameter(Node):
    """A method parameter.

    Parameters carry no visibility or mutability. They are inlined into a
    signature, so render() ignores the depth and never indents.
    """

    type_ref: TypeRef = field(default_factory=TypeRef)
    extension: bool = False

    def render(self, depth: int = 0) -> str:
        marker = EXTENSION_MARKER if self.extension else ""
        return declaration_text(marker, "", self.type_ref.display_name, self.name)


def _initializer(value: str | None) -> str:
    if not value or not value.strip():
        return ""
    return f" = {value.strip()}"


@dataclass(kw_only=True)
class Field(Node):
    type_ref: TypeRef = field(default_factory=TypeRef)
    visibility: Visibility = Visibility.NONE
    mutability: Mutability = Mutability.NONE
    value: str | None = None

    def render(self, depth: int = 0) -> str:
        return prefix_indent(
            depth, _declaration(self) + _initializer(self.value) + TERMINATOR
        )


def _accessor(keyword: str, body: str | None) -> str:
    if not body or not body.strip():
        return keyword + TERMINATOR
    return f"{keyword} {body.strip()}"


@dataclass(kw_only=True)
class Property(Node):
    """An auto or custom-accessor property.

    Renders as "<decl> { get; set; };", terminated like a Field, so an
    initializer gives "<decl> { get; set; } = <value>;". A custom getter_body
    or setter_body replaces the bare ";" of its accessor. At least one
    accessor must be present.
    """

    type_ref: TypeRef = field(default_factory=TypeRef)
    visibility: Visibility = Visibility.NONE
    mutability: Mutability = Mutability.NONE
    value: str | None = None
    has_getter: bool = True
    has_setter: bool = True
    getter_body: str | None = None
    setter_body: str | None = None

    def validate(self) -> None:
        if not self.has_getter and not self.has_setter:
            raise InvalidMemberError(
                self.name,
                f"Property '{self.name}' needs a getter or a setter.",
                "Set has_getter or has_setter to True.",
            )

    def accessor_block(self) -> str:
        self.validate()
        getter = _accessor("get", self.getter_body) if self.has_getter else ""
        setter = _accessor("set", self.setter_body) if self.has_setter else ""
        return join_with_spaces(("{", getter, setter, "}"))

    def render(self, depth: int = 0) -> str:
        text = join_with_spaces((_declaration(self), self.accessor_block()))
        return prefix_indent(depth, text + _initializer(self.value) + TERMINATOR)


@dataclass(kw_only=True)
class Method(Node):
    """A method with an inline parameter list and a pre-formatted body.

    type_ref is the return type (also reachable as return_type). Each line of
    body is emitted one level deeper than the signature.
    """

    type_ref: TypeRef = field(default_factory=TypeRef)
    visibility: Visibility = Visibility.NONE
    mutability: Mutability = Mutability.NONE
    parameters: list[Parameter] = field(default_factory=list)
    body: str = ""

    @property
    def return_type(self) -> TypeRef:
        return self.type_ref

    @return_type.setter
    def return_type(self, value: TypeRef) -> None:
        self.type_ref = value

    def signature(self) -> str:
        params = ", ".join(param.render(0) for param in self.parameters or ())
        return f"{_declaration(self)}({params})"

    def render(self, depth: int = 0) -> str:
        parts = [prefix_indent(depth, self.signature()), NEWLINE, line_for(depth, "{")]
        parts.extend(_body_lines(depth + 1, self.body))
        parts.append(prefix_indent(depth, "}"))
        return "".join(parts)


# ===--- Collections ---=== #


def render_collection(
    depth: int, header: str, values: Sequence[str], terminate: bool
) -> str:
    """Render "<header>" followed by a brace block of comma-separated values.

    One value per line at depth + 1. The separator is decided by position, so
    duplicate values are handled like any other.
    """
    parts = [prefix_indent(depth, header), NEWLINE, line_for(depth, "{")]
    last = len(values) - 1
    for position, value in enumerate(values):
        parts.append(prefix_indent(depth + 1, value))
        if position != last:
            parts.append(",")
        parts.append(NEWLINE)
    parts.append(prefix_indent(depth, "}"))
    if terminate:
        parts.append(TERMINATOR)
    return "".join(parts)


@dataclass(frozen=True)
class EnumItem:
    name: str
    value: str | None = None

    def render(self) -> str:
        if self.value and self.value.strip():
            return join_with_spaces((self.name, "=", self.value))
        return self.name.strip()


def enum_item(value: "str | tuple[str, str] | EnumItem") -> EnumItem:
    """Build an EnumItem from a bare name or a (name, value) pair."""
    if isinstance(value, EnumItem):
        return value
    if isinstance(value, str):
        return EnumItem(value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        name, item_value = value
        return EnumItem(str(name), None if item_value is None else str(item_value))
    raise TypeError(f"Cannot build an enum item from {value!r}")


@dataclass(kw_only=True)
class Enum(Node):
    visibility: Visibility = Visibility.NONE
    items: list[EnumItem] = field(default_factory=list)

    def values(self) -> list[str]:
        return [item.render() for item in self.items or ()]

    def render(self, depth: int = 0) -> str:
        header = declaration_text(
            qualifier_text(self.visibility), "", ENUM_KEYWORD, self.name
        )
        return render_collection(depth, header, self.values(), terminate=False)


@dataclass(kw_only=True)
class LiteralCollection(Node):
    """A collection member initialised from literal values.

    Renders "<decl> = new <Type>()" followed by a brace block of values and a
    closing ";".
    """

    type_ref: TypeRef = field(default_factory=TypeRef)
    visibility: Visibility = Visibility.NONE
    mutability: Mutability = Mutability.NONE
    values: list[str] = field(default_factory=list)

    def render(self, depth: int = 0) -> str:
        header = f"{_declaration(self)} = new {self.type_ref.display_name}()"
        return render_collection(depth, header, list(self.values or ()), terminate=True)


Member = Field | Property | Method | Enum | LiteralCollection


# ===--- Containers ---=== #


@dataclass(kw_only=True)
class Class(Node):
    """A class declaration owning its members and nested classes.

    Header layout:
        <visibility> <mutability> class Name<T> : Base, IOne, ITwo where T : Constraint

    The generic constraint is emitted only when generic_param is also set.
    Members come first, then nested classes, with one blank line between the
    two blocks when both are present.
    """

    visibility: Visibility = Visibility.NONE
    mutability: Mutability = Mutability.NONE
    base_type: str | None = None
    interfaces: list[str] = field(default_factory=list)
    generic_param: str | None = None
    generic_constraint: str | None = None
    members: list[Member] = field(default_factory=list)
    nested: list["Class"] = field(default_factory=list)

    def header(self) -> str:
        text = declaration_text(
            qualifier_text(self.visibility),
            qualifier_text(self.mutability),
            CLASS_KEYWORD,
            self.name,
        )
        generic = (self.generic_param or "").strip()
        if generic:
            text += f"<{generic}>"

        bases = [
            base.strip()
            for base in (self.base_type, *(self.interfaces or ()))
            if base and base.strip()
        ]
        if bases:
            text += " : " + ", ".join(bases)

        constraint = (self.generic_constraint or "").strip()
        if generic and constraint:
            text = join_with_spaces((text, "where", generic, ":", constraint))
        return text

    def render(self, depth: int = 0) -> str:
        parts = [prefix_indent(depth, self.header()), NEWLINE, line_for(depth, "{")]
        body = join_sections(
            (
                render_children(self.members, depth + 1),
                render_children(self.nested, depth + 1),
            )
        )
        if body:
            parts.extend((body, NEWLINE))
        parts.append(prefix_indent(depth, "}"))
        return "".join(parts)


@dataclass(kw_only=True)
class CodeFile(Node):
    """Root of a source tree: imports, optional namespace, classes, members.

    path and create_file only matter to write_to_file. Standard imports
    follow the caller's imports. Deduplicating imports is left to the caller.
    """

    path: str | Path | None = None
    create_file: bool = False
    imports: list[str] = field(default_factory=list)
    include_standard_imports: bool = False
    namespace: str | None = None
    classes: list[Class] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)

    def import_names(self) -> list[str]:
        names = [name for name in self.imports or () if name and name.strip()]
        if self.include_standard_imports:
            names = names + list(STANDARD_IMPORTS)
        return names

    @property
    def has_namespace(self) -> bool:
        return bool(self.namespace and self.namespace.strip())

    def render(self, depth: int = 0) -> str:
        parts: list[str] = []

        names = self.import_names()
        for name in names:
            parts.append(
                line_for(depth, join_with_spaces((IMPORT_KEYWORD, name)), terminate=True)
            )
        if names:
            parts.append(NEWLINE)

        inner = depth
        if self.has_namespace:
            parts.append(line_for(depth, join_with_spaces((NAMESPACE_KEYWORD, self.namespace))))
            parts.append(line_for(depth, "{"))
            inner = depth + 1

        body = join_sections(
            (
                render_children(self.classes, inner),
                render_children(self.members, inner),
            )
        )
        if body:
            parts.extend((body, NEWLINE))

        if self.has_namespace:
            parts.append(prefix_indent(depth, "}"))

        return "".join(parts)


# ===--- Persistence ---=== #


@dataclass(frozen=True)
class FileWriteResult:
    """Result of writing one rendered file.

    Attributes:
        filename: Final path component of the written file.
        path: Absolute path of the written file.
        line_count: Number of line breaks in the written content.
        byte_count: Number of bytes written (UTF-8 encoded).
    """

    filename: str
    path: Path
    line_count: int
    byte_count: int


def skip_reason(code_file: CodeFile) -> str | None:
    """Return why write_to_file would leave the disk untouched, or None."""
    if code_file.path is None or not str(code_file.path).strip():
        return "no output path"
    path = Path(code_file.path)
    if not code_file.create_file and not path.exists():
        return f"{path} does not exist and file creation was not requested"
    return None


def write_to_file(code_file: CodeFile) -> FileWriteResult | None:
    """Render a CodeFile and overwrite its target path with the text.

    No-op when the path is blank, or when it does not exist and create_file
    is False. The file is rendered before anything touches the disk, so an
    invalid tree leaves no partial file behind. Line breaks are written
    verbatim, with no platform translation.

    Args:
        code_file: Root node carrying path and create_file.

    Returns:
        FileWriteResult for the written file, or None when skipped.

    Raises:
        InvalidMemberError: Propagated from rendering.
        OSError: Propagated directly if the filesystem write fails.
    """
    if skip_reason(code_file) is not None:
        return None

    content = code_file.render(0)
    path = Path(code_file.path)
    if code_file.create_file:
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
    resolved = path.resolve()
    return FileWriteResult(
        filename=resolved.name,
        path=resolved,
        line_count=content.count(NEWLINE),
        byte_count=len(resolved.read_bytes()),
    )


# ===--- Tree loading ---=== #


def _require_mapping(data: object, where: str) -> dict:
    if not isinstance(data, dict):
        raise ConfigError(
            "INVALID_TREE",
            f"{where} must be an object, got {type(data).__name__}",
        )
    return data


def _optional_string(data: dict, key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(
        "INVALID_TREE",
        f"{where}.{key} must be a string, got {type(value).__name__}",
    )


def _string(data: dict, key: str, where: str) -> str:
    return _optional_string(data, key, where) or ""


def _list(data: dict, key: str, where: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(
            "INVALID_TREE",
            f"{where}.{key} must be a list, got {type(value).__name__}",
        )
    return value


def _string_list(data: dict, key: str, where: str) -> list[str]:
    values = _list(data, key, where)
    for value in values:
        if not isinstance(value, str):
            raise ConfigError(
                "INVALID_TREE",
                f"{where}.{key} entries must be strings, got {type(value).__name__}",
            )
    return list(values)


def _flag(data: dict, key: str, where: str, default: bool = False) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(
            "INVALID_TREE",
            f"{where}.{key} must be true or false, got {value!r}",
        )
    return value


def parse_qualifier(
    qualifier_type: type[Visibility] | type[Mutability], raw: object, where: str
) -> Visibility | Mutability:
    if raw is None or raw == "":
        return qualifier_type.NONE
    if isinstance(raw, str):
        try:
            return qualifier_type[raw.strip().upper()]
        except KeyError:
            pass
    choices = ", ".join(member.value for member in qualifier_type)
    raise ConfigError(
        "INVALID_QUALIFIER",
        f"Invalid {qualifier_type.__name__.lower()} at {where}: {raw!r}",
        f"Use one of: {choices}.",
    )


def _visibility(data: dict, where: str) -> Visibility:
    return parse_qualifier(Visibility, data.get("visibility"), where)


def _mutability(data: dict, where: str) -> Mutability:
    return parse_qualifier(Mutability, data.get("mutability"), where)


def _type(data: dict, where: str) -> TypeRef:
    return type_ref(_optional_string(data, "type", where))


def load_parameter(data: object, where: str) -> Parameter:
    data = _require_mapping(data, where)
    return Parameter(
        name=_string(data, "name", where),
        type_ref=_type(data, where),
        extension=_flag(data, "extension", where),
    )


def _load_field(data: dict, where: str) -> Field:
    return Field(
        name=_string(data, "name", where),
        type_ref=_type(data, where),
        visibility=_visibility(data, where),
        mutability=_mutability(data, where),
        value=_optional_string(data, "value", where),
    )


def _load_property(data: dict, where: str) -> Property:
    return Property(
        name=_string(data, "name", where),
        type_ref=_type(data, where),
        visibility=_visibility(data, where),
        mutability=_mutability(data, where),
        value=_optional_string(data, "value", where),
        has_getter=_flag(data, "has_getter", where, default=True),
        has_setter=_flag(data, "has_setter", where, default=True),
        getter_body=_optional_string(data, "getter_body", where),
        setter_body=_optional_string(data, "setter_body", where),
    )


def _load_method(data: dict, where: str) -> Method:
    return Method(
        name=_string(data, "name", where),
        type_ref=_type(data, where),
        visibility=_visibility(data, where),
        mutability=_mutability(data, where),
        parameters=[
            load_parameter(param, f"{where}.parameters[{index}]")
            for index, param in enumerate(_list(data, "parameters", where))
        ],
        body=_string(data, "body", where),
    )


def _load_enum(data: dict, where: str) -> Enum:
    items: list[EnumItem] = []
    for index, raw in enumerate(_list(data, "items", where)):
        try:
            items.append(enum_item(raw))
        except TypeError as err:
            raise ConfigError(
                "INVALID_TREE",
                f"{where}.items[{index}] must be a name or a [name, value] pair",
            ) from err
    return Enum(
        name=_string(data, "name", where),
        visibility=_visibility(data, where),
        items=items,
    )


def _load_literal_collection(data: dict, where: str) -> LiteralCollection:
    return LiteralCollection(
        name=_string(data, "name", where),
        type_ref=_type(data, where),
        visibility=_visibility(data, where),
        mutability=_mutability(data, where),
        values=_string_list(data, "values", where),
    )


MEMBER_LOADERS: dict[str, Callable[[dict, str], Member]] = {
    "field": _load_field,
    "property": _load_property,
    "method": _load_method,
    "enum": _load_enum,
    "literal_collection": _load_literal_collection,
}


def load_member(data: object, where: str) -> Member:
    data = _require_mapping(data, where)
    kind = data.get("kind")
    loader = MEMBER_LOADERS.get(kind) if isinstance(kind, str) else None
    if loader is None:
        raise ConfigError(
            "UNKNOWN_NODE_KIND",
            f"Unknown member kind at {where}: {kind!r}",
            f"Use one of: {', '.join(MEMBER_LOADERS)}.",
        )
    return loader(data, where)


def _load_members(data: dict, where: str) -> list[Member]:
    return [
        load_member(member, f"{where}.members[{index}]")
        for index, member in enumerate(_list(data, "members", where))
    ]


def load_class(data: object, where: str) -> Class:
    data = _require_mapping(data, where)
    return Class(
        name=_string(data, "name", where),
        visibility=_visibility(data, where),
        mutability=_mutability(data, where),
        base_type=_optional_string(data, "base_type", where),
        interfaces=_string_list(data, "interfaces", where),
        generic_param=_optional_string(data, "generic_param", where),
        generic_constraint=_optional_string(data, "generic_constraint", where),
        members=_load_members(data, where),
        nested=[
            load_class(nested, f"{where}.nested[{index}]")
            for index, nested in enumerate(_list(data, "nested", where))
        ],
    )


def load_code_file(data: object) -> CodeFile:
    """Build a CodeFile from a JSON-compatible tree description.

    Members are tagged with "kind" (field, property, method, enum,
    literal_collection). Qualifiers are case-insensitive names such as
    "public" or "static". Types are literal names.

    Raises:
        ConfigError: INVALID_TREE for wrong shapes, UNKNOWN_NODE_KIND for an
            unknown member kind, INVALID_QUALIFIER for an unknown qualifier.
    """
    where = "file"
    data = _require_mapping(data, where)
    return CodeFile(
        name=_string(data, "name", where),
        path=_optional_string(data, "path", where),
        create_file=_flag(data, "create_file", where),
        imports=_string_list(data, "imports", where),
        include_standard_imports=_flag(data, "include_standard_imports", where),
        namespace=_optional_string(data, "namespace", where),
        classes=[
            load_class(cls, f"{where}.classes[{index}]")
            for index, cls in enumerate(_list(data, "classes", where))
        ],
        members=_load_members(data, where),
    )


def read_tree(path: Path) -> CodeFile:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as err:
        raise ConfigError(
            "INVALID_TREE",
            f"Tree description is not valid JSON: {path} ({err.msg}, line {err.lineno})",
            "Check the file with a JSON linter.",
        ) from err
    return load_code_file(data)


# ===--- CLI config contracts ---=== #


@dataclass(frozen=True)
class RenderConfig:
    tree: Path
    output: Path | None
    create: bool
    stdout: bool


def validate_path_exists(path: Path | None, flag: str) -> Path:
    if path is None:
        raise ConfigError(
            "PATH_NOT_FOUND",
            f"{flag} is required: no path provided.",
            f"Pass the path explicitly: {flag} /path/to/tree.json",
        )
    if path.exists():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        "Provide an existing tree description file.",
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a JSON source tree description to C#-style source"
    )

    parser.add_argument("tree", type=Path)
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--create", action="store_true", default=False)
    parser.add_argument("--stdout", action="store_true", default=False)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> RenderConfig:
    if args.stdout and (args.output is not None or args.create):
        raise ConfigError(
            "CONFLICT_OUTPUT_FLAGS",
            "--stdout cannot be combined with --output or --create.",
            "Either print with --stdout or write with --output/--create.",
        )

    tree = validate_path_exists(args.tree, "tree")
    return RenderConfig(
        tree=tree,
        output=args.output,
        create=bool(args.create),
        stdout=bool(args.stdout),
    )


def build_config(argv: list[str] | None = None) -> RenderConfig:
    return validate_config(parse_args(argv))


# ===--- Main rendering ---=== #


def run_render(config: RenderConfig) -> FileWriteResult | None:
    """Load, render and write (or print) one tree description.

    Raises:
        ConfigError: Malformed tree description.
        InvalidMemberError: A member in the tree cannot be rendered.
        OSError: Tree not readable or filesystem write failure.
    """
    if config.stdout:
        code_file = read_tree(config.tree)
        print(code_file.render(0), end="")
        return None

    print(f"Loading: {config.tree}")
    code_file = read_tree(config.tree)
    if config.output is not None:
        code_file.path = config.output
    if config.create:
        code_file.create_file = True

    text = code_file.render(0)
    print(f"  Rendered: {text.count(NEWLINE) + 1 if text else 0} lines")

    reason = skip_reason(code_file)
    if reason is not None:
        print(f"  Skipped: {reason}")
        return None

    result = write_to_file(code_file)
    print(
        f"  Written: {result.line_count} line breaks, "
        f"{result.byte_count} bytes to {result.path}"
    )
    return result


def main(argv: list[str] | None = None):
    try:
        config = build_config(argv)
        run_render(config)
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err
    except InvalidMemberError as err:
        print(f"Invalid member '{err.member}': {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err
    except OSError as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err


if __name__ == "__main__":
    main()
