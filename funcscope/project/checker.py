"""Signature resolution and light type inference over tree-sitter trees.

The ``TypeChecker`` answers one question for the analyzer: what is the
canonical signature of this function-like node? Written annotations are
normalised (whitespace collapsed, object literal types printed as
``{ a: number; b: string; }``); missing ones are inferred from default
values, expression bodies and ``return`` statements.

Inference is deliberately local. It follows identifiers to parameters,
variables and functions in enclosing scopes, and across relative imports to
exported declarations of other program files. Anything it cannot follow is
``any``, which is also what the TypeScript compiler reports for an
implicitly untyped value.

Rendering follows TypeScript's signature printer::

    <T>(items: T[], limit?: number, ...rest: any[]): T | undefined
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import tree_sitter as ts

from ..exceptions import SignatureResolutionError
from ..parsing.nodes import (
    ARROW_FUNCTION_TYPES,
    BODYLESS_FUNCTION_TYPES,
    CLASS_LIKE_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    FUNCTION_LIKE_TYPES,
    GENERATOR_TYPES,
    TYPE_ANNOTATION_TYPES,
    VARIABLE_STATEMENT_TYPES,
    first_named_child,
    has_keyword,
    named_children,
    unwrap_declaration,
)

if TYPE_CHECKING:
    from ..parsing import ParsedAST
    from .program import Program, SourceFile

logger = logging.getLogger(__name__)

_ARITHMETIC_OPERATORS = frozenset({"-", "*", "/", "%", "**", "&", "|", "^", "<<", ">>", ">>>"})
_COMPARISON_OPERATORS = frozenset({"==", "!=", "===", "!==", "<", ">", "<=", ">=", "instanceof", "in"})
_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

# Global conversion functions with a fixed result
_GLOBAL_CALL_TYPES = {
    "String": "string",
    "Number": "number",
    "Boolean": "boolean",
    "parseInt": "number",
    "parseFloat": "number",
    "isNaN": "boolean",
    "Symbol": "symbol",
    "BigInt": "bigint",
}

_LITERAL_TYPES = {
    "number": "number",
    "string": "string",
    "template_string": "string",
    "true": "boolean",
    "false": "boolean",
    "null": "null",
    "undefined": "undefined",
    "regex": "RegExp",
    "update_expression": "number",
    "jsx_element": "JSX.Element",
    "jsx_self_closing_element": "JSX.Element",
}

_FUNCTION_VALUE_TYPES = ARROW_FUNCTION_TYPES | FUNCTION_EXPRESSION_TYPES

_NodeKey = tuple[Path, int, int, str]


@dataclass(frozen=True)
class Parameter:
    """One rendered parameter of a signature."""

    name: str
    type: str
    optional: bool = False
    rest: bool = False

    def __str__(self) -> str:
        prefix = "..." if self.rest else ""
        marker = "?" if self.optional else ""
        return f"{prefix}{self.name}{marker}: {self.type}"


@dataclass(frozen=True)
class Signature:
    """A resolved call signature."""

    parameters: tuple[Parameter, ...]
    return_type: str
    type_parameters: str = ""


@dataclass(frozen=True)
class _Binding:
    """A declaration an identifier resolved to."""

    kind: str
    node: ts.Node
    source_file: SourceFile
    module: str | None = None
    imported: str | None = None


def _key(source_file: SourceFile, node: ts.Node) -> _NodeKey:
    return (source_file.path, node.start_byte, node.end_byte, node.type)


def _split_top_level(text: str, separator: str) -> list[str]:
    """Split *text* on *separator* occurrences outside brackets."""
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(text):
        char = text[i]
        if char in "<([{":
            depth += 1
        elif char in ">)]}" and not (char == ">" and text[i - 1:i] == "="):
            depth -= 1
        elif depth == 0 and text.startswith(separator, i):
            parts.append(text[start:i].strip())
            i += len(separator)
            start = i
            continue
        i += 1
    parts.append(text[start:].strip())
    return [p for p in parts if p]


def _is_function_type(text: str) -> bool:
    return len(_split_top_level(text, "=>")) > 1


def union_of(types: list[str]) -> str:
    """Join *types* into a union, flattening and de-duplicating members."""
    members: list[str] = []
    for type_text in types:
        parts = [type_text] if _is_function_type(type_text) else _split_top_level(type_text, "|")
        for part in parts:
            if part not in members:
                members.append(part)
    if not members:
        return "never"
    if "any" in members:
        return "any"
    if len(members) > 1:
        members = [m for m in members if m != "never"]
        members = [f"({m})" if _is_function_type(m) else m for m in members]
    return " | ".join(members)


def _array_of(element: str) -> str:
    if len(_split_top_level(element, "|")) > 1 or _is_function_type(element):
        return f"({element})[]"
    return f"{element}[]"


def _combine_binary(op: str, left_type: str, right_type: str) -> str:
    """Result type of ``+`` or a logical operator applied to two operand types."""
    if op == "+":
        if "string" in (left_type, right_type):
            return "string"
        if left_type == right_type and left_type in ("number", "bigint"):
            return left_type
        return "any"
    if op in _LOGICAL_OPERATORS:
        return union_of([left_type, right_type])
    return "any"


def _unwrap_promise(type_text: str) -> str:
    if type_text.startswith("Promise<") and type_text.endswith(">"):
        return type_text[len("Promise<"):-1]
    return type_text


class TypeChecker:
    """Resolves signatures for function-like nodes of one ``Program``."""

    def __init__(self, program: Program) -> None:
        self._program = program

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def get_signature_from_declaration(
        self, node: ts.Node, source_file: SourceFile
    ) -> Signature | None:
        """Return the signature of a function-like *node*.

        Returns ``None`` when *node* is not function-like or its parameter
        list did not parse.

        Raises:
            SignatureResolutionError: If *source_file* is not part of the
                program this checker belongs to.
        """
        if self._program.get_source_file(source_file.path) is None:
            raise SignatureResolutionError(
                f"{source_file.path} is not part of the program"
            )
        if node.type not in FUNCTION_LIKE_TYPES or node.is_missing:
            return None
        params = node.child_by_field_name("parameters") or node.child_by_field_name("parameter")
        if params is None or params.has_error or params.is_missing:
            return None
        return_type = node.child_by_field_name("return_type")
        if return_type is not None and return_type.has_error:
            return None
        return self._signature(node, source_file, frozenset())

    @staticmethod
    def signature_to_string(signature: Signature) -> str:
        """Render *signature* as ``<T>(a: A, b?: B): R``."""
        params = ", ".join(str(p) for p in signature.parameters)
        return f"{signature.type_parameters}({params}): {signature.return_type}"

    @staticmethod
    def function_type_to_string(signature: Signature) -> str:
        """Render *signature* as a function type, ``(a: A) => R``."""
        params = ", ".join(str(p) for p in signature.parameters)
        return f"{signature.type_parameters}({params}) => {signature.return_type}"

    def type_to_string(self, type_node: ts.Node, source_file: SourceFile) -> str:
        """Render a written type (or type annotation) in normalised form."""
        if type_node.type in TYPE_ANNOTATION_TYPES:
            inner = first_named_child(type_node)
            if inner is not None:
                type_node = inner
        elif type_node.type in ("asserts_annotation", "type_predicate_annotation"):
            inner = first_named_child(type_node)
            if inner is not None:
                type_node = inner
        return self._render(type_node, source_file.ast)

    # ------------------------------------------------------------------
    # Signatures
    # ------------------------------------------------------------------

    def _signature(
        self, node: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> Signature:
        visiting = visiting | {_key(source_file, node)}
        type_params = node.child_by_field_name("type_parameters")
        return Signature(
            parameters=self._parameters(node, source_file, visiting),
            return_type=self._return_type(node, source_file, visiting),
            type_parameters=self._render(type_params, source_file.ast) if type_params else "",
        )

    def _parameters(
        self, node: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> tuple[Parameter, ...]:
        single = node.child_by_field_name("parameter")
        if single is not None:
            return (Parameter(name=source_file.ast.get_text(single), type="any"),)

        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return ()
        entries = [c for c in named_children(params_node) if c.type != "decorator"]
        result: list[Parameter] = []
        for index, entry in enumerate(entries):
            trailing_optional = all(self._is_optional_like(e) for e in entries[index + 1:])
            result.append(self._parameter(entry, source_file, visiting, trailing_optional))
        return tuple(result)

    @staticmethod
    def _parameter_parts(entry: ts.Node) -> tuple[ts.Node | None, ts.Node | None, ts.Node | None]:
        """Split a parameter into its (pattern, type, default value) nodes."""
        if entry.type in ("required_parameter", "optional_parameter"):
            return (
                entry.child_by_field_name("pattern"),
                entry.child_by_field_name("type"),
                entry.child_by_field_name("value"),
            )
        if entry.type == "assignment_pattern":
            return entry.child_by_field_name("left"), None, entry.child_by_field_name("right")
        return entry, None, None

    def _is_optional_like(self, entry: ts.Node) -> bool:
        pattern, _, value = self._parameter_parts(entry)
        return (
            entry.type == "optional_parameter"
            or value is not None
            or (pattern is not None and pattern.type == "rest_pattern")
        )

    def _parameter(
        self,
        entry: ts.Node,
        source_file: SourceFile,
        visiting: frozenset[_NodeKey],
        trailing_optional: bool,
    ) -> Parameter:
        ast = source_file.ast
        pattern, type_node, value = self._parameter_parts(entry)
        rest = pattern is not None and pattern.type == "rest_pattern"

        if pattern is None:
            name = " ".join(ast.get_text(entry).split())
        elif rest:
            inner = first_named_child(pattern)
            name = ast.get_text(inner) if inner is not None else ast.get_text(pattern).lstrip(".")
        else:
            name = " ".join(ast.get_text(pattern).split())

        if type_node is not None:
            type_text = self.type_to_string(type_node, source_file)
        elif value is not None:
            type_text = self._infer(value, source_file, visiting)
        elif rest:
            type_text = "any[]"
        else:
            type_text = "any"

        optional = entry.type == "optional_parameter" or (value is not None and trailing_optional)
        return Parameter(name=name, type=type_text, optional=optional, rest=rest)

    def _return_type(
        self, node: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> str:
        written = node.child_by_field_name("return_type")
        if written is not None:
            return self.type_to_string(written, source_file)
        if node.type in BODYLESS_FUNCTION_TYPES:
            return "any"
        body = node.child_by_field_name("body")
        if body is None:
            return "any"

        is_async = has_keyword(node, "async")
        if node.type in GENERATOR_TYPES or has_keyword(node, "*"):
            return "AsyncGenerator<any, any, any>" if is_async else "Generator<any, any, any>"

        if body.type == "statement_block":
            inferred = self._infer_block_returns(body, source_file, visiting)
        else:
            inferred = self._infer(body, source_file, visiting)

        if is_async:
            return f"Promise<{_unwrap_promise(inferred)}>"
        return inferred

    def _infer_block_returns(
        self, body: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> str:
        types: list[str] = []
        has_bare_return = False
        for expression in _iter_return_values(body):
            if expression is None:
                has_bare_return = True
            else:
                types.append(self._infer(expression, source_file, visiting))
        if not types:
            return "void"
        # Bare returns and running off the end both yield undefined
        if has_bare_return or not _completes_abruptly(body, source_file.ast):
            types.append("undefined")
        return union_of(types)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _infer(
        self, node: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> str:
        """Infer the widened type of an expression node."""
        ast = source_file.ast
        kind = node.type

        if kind in _LITERAL_TYPES:
            return _LITERAL_TYPES[kind]

        if kind in ("parenthesized_expression", "non_null_expression"):
            inner = first_named_child(node)
            if inner is None:
                return "any"
            inferred = self._infer(inner, source_file, visiting)
            if kind == "non_null_expression":
                members = [m for m in _split_top_level(inferred, "|") if m not in ("null", "undefined")]
                return union_of(members) if members else inferred
            return inferred

        if kind == "binary_expression":
            return self._infer_binary(node, source_file, visiting)

        if kind == "unary_expression":
            operator = node.child_by_field_name("operator")
            op = ast.get_text(operator) if operator is not None else ""
            if op in ("!", "delete"):
                return "boolean"
            if op == "typeof":
                return "string"
            if op == "void":
                return "undefined"
            return "number"

        if kind == "ternary_expression":
            branches = [node.child_by_field_name("consequence"), node.child_by_field_name("alternative")]
            return union_of([self._infer(b, source_file, visiting) for b in branches if b is not None])

        if kind in ("as_expression", "satisfies_expression"):
            parts = list(named_children(node))
            if not parts:
                return "any"
            target = parts[-1]
            if kind == "satisfies_expression" or ast.get_text(target) == "const":
                return self._infer(parts[0], source_file, visiting)
            return self._render(target, ast)

        if kind == "type_assertion":
            parts = list(named_children(node))
            if len(parts) >= 2:
                return self.type_to_string(first_named_child(parts[0]) or parts[0], source_file)
            return "any"

        if kind == "await_expression":
            inner = first_named_child(node)
            return _unwrap_promise(self._infer(inner, source_file, visiting)) if inner else "any"

        if kind == "assignment_expression":
            right = node.child_by_field_name("right")
            return self._infer(right, source_file, visiting) if right is not None else "any"

        if kind == "sequence_expression":
            parts = list(named_children(node))
            return self._infer(parts[-1], source_file, visiting) if parts else "any"

        if kind == "new_expression":
            constructor = node.child_by_field_name("constructor")
            if constructor is None:
                return "any"
            name = " ".join(ast.get_text(constructor).split())
            type_args = node.child_by_field_name("type_arguments") or next(
                (c for c in node.named_children if c.type == "type_arguments"), None
            )
            return name + (self._render(type_args, ast) if type_args is not None else "")

        if kind == "array":
            elements = [
                self._infer(e, source_file, visiting)
                for e in named_children(node)
                if e.type != "spread_element"
            ]
            return _array_of(union_of(elements)) if elements else "any[]"

        if kind == "object":
            return self._infer_object(node, source_file, visiting)

        if kind in _FUNCTION_VALUE_TYPES:
            if _key(source_file, node) in visiting:
                return "any"
            return self.function_type_to_string(self._signature(node, source_file, visiting))

        if kind == "call_expression":
            return self._infer_call(node, source_file, visiting)

        if kind == "member_expression":
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is not None and prop is not None and ast.get_text(prop) == "length":
                obj_type = self._infer(obj, source_file, visiting)
                if obj_type == "string" or obj_type.endswith("[]"):
                    return "number"
            return "any"

        if kind == "identifier":
            name = ast.get_text(node)
            if name == "undefined":
                return "undefined"
            if name in ("NaN", "Infinity"):
                return "number"
            binding = self._lookup(name, node, source_file)
            return self._binding_type(binding, visiting) if binding is not None else "any"

        return "any"

    def _infer_binary(
        self, node: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> str:
        """Infer a binary expression, folding left-nested chains iteratively.

        ``a + b + c`` parses as ``(a + b) + c``; long generated chains would
        otherwise recurse once per operator.
        """
        ast = source_file.ast
        chain: list[tuple[str, ts.Node]] = []
        current = node
        result: str | None = None
        while current.type == "binary_expression":
            operator = current.child_by_field_name("operator")
            op = ast.get_text(operator) if operator is not None else ""
            if op in _ARITHMETIC_OPERATORS:
                result = "number"
                break
            if op in _COMPARISON_OPERATORS:
                result = "boolean"
                break
            left = current.child_by_field_name("left")
            right = current.child_by_field_name("right")
            if left is None or right is None:
                result = "any"
                break
            chain.append((op, right))
            current = left
        if result is None:
            result = self._infer(current, source_file, visiting)

        for op, right in reversed(chain):
            result = _combine_binary(op, result, self._infer(right, source_file, visiting))
        return result

    def _infer_object(
        self, node: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> str:
        ast = source_file.ast
        members: list[str] = []
        for child in named_children(node):
            if child.type == "pair":
                key = child.child_by_field_name("key")
                value = child.child_by_field_name("value")
                if key is None or value is None:
                    continue
                members.append(f"{ast.get_text(key)}: {self._infer(value, source_file, visiting)}")
            elif child.type == "shorthand_property_identifier":
                name = ast.get_text(child)
                binding = self._lookup(name, child, source_file)
                members.append(f"{name}: {self._binding_type(binding, visiting) if binding else 'any'}")
            elif child.type == "method_definition":
                name_node = child.child_by_field_name("name")
                if name_node is None:
                    continue
                signature = self._signature(child, source_file, visiting)
                members.append(ast.get_text(name_node) + self.signature_to_string(signature))
        if not members:
            return "{}"
        return "{ " + "; ".join(members) + "; }"

    def _infer_call(
        self, node: ts.Node, source_file: SourceFile, visiting: frozenset[_NodeKey]
    ) -> str:
        callee = node.child_by_field_name("function")
        if callee is None or callee.type != "identifier":
            return "any"
        name = source_file.ast.get_text(callee)
        binding = self._lookup(name, callee, source_file)
        if binding is None:
            return _GLOBAL_CALL_TYPES.get(name, "any")

        target = self._callable(binding, visiting)
        if target is None:
            return "any"
        fn_node, fn_file = target
        if _key(fn_file, fn_node) in visiting:
            return "any"
        return self._return_type(fn_node, fn_file, visiting | {_key(fn_file, fn_node)})

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    def _lookup(self, name: str, start: ts.Node, source_file: SourceFile) -> _Binding | None:
        """Find the declaration *name* refers to at *start*, innermost scope first."""
        scope = start.parent
        while scope is not None:
            if scope.type in FUNCTION_LIKE_TYPES:
                binding = self._lookup_parameter(name, scope, source_file)
                if binding is not None:
                    return binding
            elif scope.type in ("statement_block", "program", "switch_case", "switch_default"):
                binding = self._lookup_in_block(name, scope, source_file)
                if binding is not None:
                    return binding
            scope = scope.parent
        return None

    def _lookup_parameter(self, name: str, fn: ts.Node, source_file: SourceFile) -> _Binding | None:
        ast = source_file.ast
        single = fn.child_by_field_name("parameter")
        if single is not None:
            return _Binding("parameter", single, source_file) if ast.get_text(single) == name else None
        params = fn.child_by_field_name("parameters")
        if params is None:
            return None
        for entry in named_children(params):
            pattern, _, _ = self._parameter_parts(entry)
            if pattern is not None and pattern.type == "rest_pattern":
                pattern = first_named_child(pattern)
            if pattern is not None and pattern.type == "identifier" and ast.get_text(pattern) == name:
                return _Binding("parameter", entry, source_file)
        return None

    def _lookup_in_block(self, name: str, block: ts.Node, source_file: SourceFile) -> _Binding | None:
        for child in named_children(block):
            if child.type == "import_statement":
                binding = self._import_binding(name, child, source_file)
                if binding is not None:
                    return binding
                continue
            binding = self._declared_binding(name, unwrap_declaration(child), source_file)
            if binding is not None:
                return binding
        return None

    @staticmethod
    def _declared_binding(name: str, statement: ts.Node, source_file: SourceFile) -> _Binding | None:
        ast = source_file.ast
        if statement.type in VARIABLE_STATEMENT_TYPES:
            for declarator in named_children(statement):
                if declarator.type != "variable_declarator":
                    continue
                decl_name = declarator.child_by_field_name("name")
                if decl_name is not None and decl_name.type == "identifier" and ast.get_text(decl_name) == name:
                    return _Binding("variable", declarator, source_file)
            return None

        decl_name = statement.child_by_field_name("name")
        if decl_name is None or ast.get_text(decl_name) != name:
            return None
        if statement.type in FUNCTION_DECLARATION_TYPES:
            return _Binding("function", statement, source_file)
        if statement.type in CLASS_LIKE_TYPES:
            return _Binding("class", statement, source_file)
        if statement.type == "enum_declaration":
            return _Binding("enum", statement, source_file)
        return None

    def _import_binding(self, name: str, statement: ts.Node, source_file: SourceFile) -> _Binding | None:
        ast = source_file.ast
        source = statement.child_by_field_name("source")
        if source is None:
            return None
        module = ast.get_text(source).strip("'\"`")
        for clause in named_children(statement):
            if clause.type != "import_clause":
                continue
            for part in named_children(clause):
                if part.type == "identifier" and ast.get_text(part) == name:
                    return _Binding("import", part, source_file, module=module, imported="default")
                if part.type != "named_imports":
                    continue
                for spec in named_children(part):
                    if spec.type != "import_specifier":
                        continue
                    spec_name = spec.child_by_field_name("name")
                    alias = spec.child_by_field_name("alias")
                    local = alias if alias is not None else spec_name
                    if local is not None and spec_name is not None and ast.get_text(local) == name:
                        return _Binding(
                            "import", spec, source_file, module=module, imported=ast.get_text(spec_name)
                        )
        return None

    def _resolve_import(self, binding: _Binding) -> _Binding | None:
        if binding.module is None or binding.imported is None:
            return None
        target = self._program.resolve_module(binding.source_file.path, binding.module)
        if target is None:
            return None
        ast = target.ast
        for statement in named_children(ast.root_node):
            if statement.type != "export_statement":
                continue
            is_default = any(not c.is_named and c.type == "default" for c in statement.children)
            declaration = unwrap_declaration(statement)

            if binding.imported == "default":
                if not is_default:
                    continue
                if declaration.type in FUNCTION_DECLARATION_TYPES | _FUNCTION_VALUE_TYPES:
                    return _Binding("function", declaration, target)
                value = statement.child_by_field_name("value")
                if value is not None and value.type == "identifier":
                    return self._lookup_in_block(ast.get_text(value), ast.root_node, target)
                continue

            if declaration is not statement:
                found = self._declared_binding(binding.imported, declaration, target)
                if found is not None:
                    return found
                continue

            for clause in named_children(statement):
                if clause.type != "export_clause":
                    continue
                for spec in named_children(clause):
                    spec_name = spec.child_by_field_name("name")
                    alias = spec.child_by_field_name("alias")
                    exported = alias if alias is not None else spec_name
                    if spec_name is not None and exported is not None and ast.get_text(exported) == binding.imported:
                        return self._lookup_in_block(ast.get_text(spec_name), ast.root_node, target)
        return None

    def _callable(
        self, binding: _Binding, visiting: frozenset[_NodeKey]
    ) -> tuple[ts.Node, SourceFile] | None:
        """Return the function-like node a binding refers to, if any."""
        if binding.kind == "function":
            return binding.node, binding.source_file
        if binding.kind == "variable":
            value = binding.node.child_by_field_name("value")
            if value is not None and value.type in _FUNCTION_VALUE_TYPES:
                return value, binding.source_file
            return None
        if binding.kind == "import":
            key = _key(binding.source_file, binding.node)
            if key in visiting:
                return None
            resolved = self._resolve_import(binding)
            return self._callable(resolved, visiting | {key}) if resolved is not None else None
        return None

    def _binding_type(self, binding: _Binding, visiting: frozenset[_NodeKey]) -> str:
        key = _key(binding.source_file, binding.node)
        if key in visiting:
            return "any"
        visiting = visiting | {key}
        source_file = binding.source_file
        ast = source_file.ast

        if binding.kind == "parameter":
            if binding.node.type == "identifier":
                return "any"
            return self._parameter(binding.node, source_file, visiting, trailing_optional=False).type

        if binding.kind == "variable":
            written = binding.node.child_by_field_name("type")
            if written is not None:
                return self.type_to_string(written, source_file)
            value = binding.node.child_by_field_name("value")
            return self._infer(value, source_file, visiting) if value is not None else "any"

        if binding.kind == "function":
            return self.function_type_to_string(self._signature(binding.node, source_file, visiting))

        if binding.kind == "class":
            name = binding.node.child_by_field_name("name")
            return f"typeof {ast.get_text(name)}" if name is not None else "any"

        if binding.kind == "enum":
            name = binding.node.child_by_field_name("name")
            return ast.get_text(name) if name is not None else "any"

        if binding.kind == "import":
            resolved = self._resolve_import(binding)
            return self._binding_type(resolved, visiting) if resolved is not None else "any"

        return "any"

    # ------------------------------------------------------------------
    # Type rendering
    # ------------------------------------------------------------------

    def _render(self, node: ts.Node, ast: ParsedAST) -> str:
        """Render a type node with normalised whitespace."""
        if node.type in ("object_type", "interface_body"):
            members = [self._render(m, ast) for m in named_children(node)]
            return "{ " + "; ".join(members) + "; }" if members else "{}"

        children = [c for c in node.children if c.type != "comment"]
        if not children:
            return " ".join(ast.get_text(node).split())
        if node.type == "union_type" and children[0].type == "|":
            children = children[1:]

        pieces: list[str] = []
        previous: ts.Node | None = None
        for child in children:
            if previous is not None and child.start_byte > previous.end_byte:
                pieces.append(" ")
            pieces.append(self._render(child, ast))
            previous = child
        return "".join(pieces)


def _iter_return_values(node: ts.Node):
    """Yield the value of every ``return`` under *node*; ``None`` for a bare return.

    Nested functions and classes are not entered.
    """
    stack = list(reversed(node.children))
    while stack:
        child = stack.pop()
        if child.type == "return_statement":
            yield first_named_child(child)
        elif child.type not in FUNCTION_LIKE_TYPES and child.type not in CLASS_LIKE_TYPES:
            stack.extend(reversed(child.children))


_LOOP_TYPES = frozenset({"while_statement", "do_statement", "for_statement"})


def _contains_break(body: ts.Node) -> bool:
    stack = [body]
    while stack:
        node = stack.pop()
        if node.type == "break_statement":
            return True
        if node.type not in FUNCTION_LIKE_TYPES and node.type not in CLASS_LIKE_TYPES:
            stack.extend(node.children)
    return False


def _is_endless_loop(statement: ts.Node, ast: ParsedAST) -> bool:
    """``while (true)``, ``do ... while (true)`` or ``for (;;)`` without a ``break``."""
    condition = statement.child_by_field_name("condition")
    if statement.type == "for_statement":
        endless = condition is None or condition.type == "empty_statement"
    else:
        endless = condition is not None and ast.get_text(condition).strip("() \t\n") == "true"
    body = statement.child_by_field_name("body")
    return endless and body is not None and not _contains_break(body)


def _completes_abruptly(statement: ts.Node | None, ast: ParsedAST) -> bool:
    """Whether control can never run past the end of *statement*.

    Covers ``return``, ``throw``, blocks containing one, ``if``/``else`` and
    ``try`` whose branches all do, and endless loops. Anything else, such as
    an exhaustive ``switch``, counts as falling through.
    """
    if statement is None:
        return False
    kind = statement.type
    if kind in ("return_statement", "throw_statement"):
        return True
    if kind in ("statement_block", "else_clause", "finally_clause"):
        return any(_completes_abruptly(child, ast) for child in named_children(statement))
    if kind == "if_statement":
        alternative = statement.child_by_field_name("alternative")
        return _completes_abruptly(statement.child_by_field_name("consequence"), ast) and _completes_abruptly(
            alternative, ast
        )
    if kind == "try_statement":
        if _completes_abruptly(statement.child_by_field_name("finalizer"), ast):
            return True
        handler = statement.child_by_field_name("handler")
        return _completes_abruptly(statement.child_by_field_name("body"), ast) and (
            handler is None or _completes_abruptly(handler.child_by_field_name("body"), ast)
        )
    if kind in _LOOP_TYPES:
        return _is_endless_loop(statement, ast)
    return False
