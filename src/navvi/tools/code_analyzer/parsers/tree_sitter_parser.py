"""
Tree-sitter Parser
Extracts functions, classes, imports and exports from JavaScript/TypeScript sources.
"""
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

from tree_sitter import Node, Parser

from navvi.core.exceptions import ParseError
from ..complexity import file_complexity, function_complexity
from ..models import (
    ANONYMOUS,
    ClassInfo,
    ExportInfo,
    FileAnalysis,
    FunctionInfo,
    ImportInfo,
    MethodInfo,
    PropertyInfo,
)
from ..scanner import to_repo_path
from .base import BaseParser
from .dialects import Dialect

logger = logging.getLogger(__name__)

FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
FUNCTION_EXPRESSIONS = {"function_expression", "function", "generator_function"}
CLASS_DECLARATIONS = {"class_declaration", "abstract_class_declaration"}
FIELD_DEFINITIONS = {"field_definition", "public_field_definition"}
VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
TYPE_DECLARATIONS = {"interface_declaration", "type_alias_declaration", "enum_declaration"}


class TreeSitterParser(BaseParser):
    """
    Parser for one source dialect using Tree-sitter.
    Parser instances are not thread-safe; use get_parser() to share them per thread.
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.language = dialect.load_language()
        self.parser = Parser(self.language)

    def parse(self, source_code: str, file_path: Path, repo_root: Path) -> FileAnalysis:
        source_bytes = bytes(source_code, "utf8")
        tree = self.parser.parse(source_bytes)
        root_node = tree.root_node
        rel_path = to_repo_path(file_path, repo_root)

        if root_node.has_error:
            error_node = _first_error(root_node)
            line = error_node.start_point[0] + 1 if error_node else None
            raise ParseError(rel_path, f"syntax error ({self.dialect.value})", line=line)

        extractor = _FileExtractor(source_bytes)
        extractor.visit(root_node)

        # End-of-program row, not a newline count
        lines = root_node.end_point[0] + 1

        return FileAnalysis(
            path=rel_path,
            language=Path(file_path).suffix.lstrip(".").lower(),
            size=len(source_code),
            lines=lines,
            functions=extractor.functions,
            classes=extractor.classes,
            imports=extractor.imports,
            exports=extractor.exports,
            complexity=file_complexity(extractor.functions, extractor.classes, lines),
            dependencies=list(dict.fromkeys(imp.module for imp in extractor.imports)),
        )


_local = threading.local()


def get_parser(dialect: Dialect) -> TreeSitterParser:
    """Return this thread's cached parser for ``dialect``."""
    parsers: Optional[Dict[Dialect, TreeSitterParser]] = getattr(_local, "parsers", None)
    if parsers is None:
        parsers = _local.parsers = {}
    if dialect not in parsers:
        parsers[dialect] = TreeSitterParser(dialect)
    return parsers[dialect]


def _first_error(root: Node) -> Optional[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


class _FileExtractor:
    """Walks a syntax tree in document order collecting declarations"""

    def __init__(self, source_bytes: bytes):
        self.source = source_bytes
        self.functions: List[FunctionInfo] = []
        self.classes: List[ClassInfo] = []
        self.imports: List[ImportInfo] = []
        self.exports: List[ExportInfo] = []

    def text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf8")

    def visit(self, root: Node):
        # Iterative walk: minified or generated code nests deeper than the recursion limit
        stack = [root]
        while stack:
            node = stack.pop()
            if not node.is_named:
                continue
            handler = getattr(self, f"visit_{node.type}", None)
            if handler:
                handler(node)
            stack.extend(reversed(node.children))

    # Functions

    def visit_function_declaration(self, node: Node):
        name_node = node.child_by_field_name("name")
        self.functions.append(self._function_info(node, self.text(name_node) if name_node else ANONYMOUS))

    visit_generator_function_declaration = visit_function_declaration

    def visit_function_expression(self, node: Node):
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            self.functions.append(self._function_info(node, self.text(name_node)))
            return
        binding = self._binding_name(node)
        if binding:
            self.functions.append(self._function_info(node, binding))
        elif _is_default_export_value(node):
            self.functions.append(self._function_info(node, ANONYMOUS))

    visit_function = visit_function_expression
    visit_generator_function = visit_function_expression

    def visit_arrow_function(self, node: Node):
        binding = self._binding_name(node)
        if binding:
            self.functions.append(self._function_info(node, binding))

    def _binding_name(self, node: Node) -> Optional[str]:
        """Name of the variable declarator ``node`` is directly bound to."""
        parent = node.parent
        if parent is None or parent.type != "variable_declarator":
            return None
        value = parent.child_by_field_name("value")
        name_node = parent.child_by_field_name("name")
        if value is None or value.id != node.id or name_node is None:
            return None
        if name_node.type != "identifier":
            return None
        return self.text(name_node)

    def _function_info(self, node: Node, name: str) -> FunctionInfo:
        return FunctionInfo(
            name=name,
            line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            parameters=self._parameters(node),
            complexity=function_complexity(node),
        )

    def _parameters(self, node: Node) -> List[str]:
        single = node.child_by_field_name("parameter")
        if single is not None:
            return [self.text(single)]
        params = node.child_by_field_name("parameters")
        if params is None:
            return []
        return [self._parameter_name(p) for p in params.named_children if p.type != "comment"]

    def _parameter_name(self, param: Node) -> str:
        if param.type == "identifier":
            return self.text(param)
        if param.type in ("required_parameter", "optional_parameter"):
            pattern = param.child_by_field_name("pattern")
            if pattern is not None:
                return self._parameter_name(pattern)
        if param.type == "assignment_pattern":
            left = param.child_by_field_name("left")
            if left is not None and left.type == "identifier":
                return self.text(left)
        if param.type == "rest_pattern":
            inner = param.named_children
            if inner and inner[0].type == "identifier":
                return self.text(inner[0])
        return "param"

    # Classes

    def visit_class_declaration(self, node: Node):
        self.classes.append(self._class_info(node))

    visit_abstract_class_declaration = visit_class_declaration

    def visit_class(self, node: Node):
        # Class expressions count only as the value of `export default`
        if _is_default_export_value(node):
            self.classes.append(self._class_info(node))

    def _class_info(self, node: Node) -> ClassInfo:
        name_node = node.child_by_field_name("name")
        extends, implements = self._heritage(node)
        methods: List[MethodInfo] = []
        properties: List[PropertyInfo] = []

        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type == "method_definition":
                    methods.append(self._method_info(member))
                elif member.type in FIELD_DEFINITIONS:
                    properties.append(self._property_info(member))

        return ClassInfo(
            name=self.text(name_node) if name_node else ANONYMOUS,
            line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            methods=methods,
            properties=properties,
            extends=extends,
            implements=implements,
            complexity=sum(m.complexity for m in methods),
        )

    def _heritage(self, node: Node):
        extends = None
        implements: List[str] = []
        heritage = next((c for c in node.children if c.type == "class_heritage"), None)
        if heritage is None:
            return extends, implements

        for child in heritage.named_children:
            if child.type == "extends_clause":  # typescript grammar
                value = child.child_by_field_name("value")
                if value is not None and value.type == "identifier":
                    extends = self.text(value)
            elif child.type == "implements_clause":
                for iface in child.named_children:
                    if iface.type == "generic_type":
                        iface = iface.child_by_field_name("name") or iface
                    implements.append(self.text(iface))
            elif child.type == "identifier" and extends is None:  # javascript grammar
                extends = self.text(child)
        return extends, implements

    def _modifiers(self, member: Node):
        tokens = {c.type for c in member.children if not c.is_named}
        accessibility = next(
            (self.text(c) for c in member.children if c.type == "accessibility_modifier"),
            None,
        )
        return tokens, accessibility

    def _member_name(self, name_node: Optional[Node]):
        if name_node is None:
            return ANONYMOUS, None
        if name_node.type == "private_property_identifier":
            return self.text(name_node), "private"
        if name_node.type in ("property_identifier", "identifier"):
            return self.text(name_node), None
        return ANONYMOUS, None

    def _method_info(self, member: Node) -> MethodInfo:
        tokens, accessibility = self._modifiers(member)
        name, implied_visibility = self._member_name(member.child_by_field_name("name"))

        if "get" in tokens:
            kind = "get"
        elif "set" in tokens:
            kind = "set"
        elif name == "constructor":
            kind = "constructor"
        else:
            kind = "method"

        if kind in ("get", "set"):
            visibility = "public"
        else:
            visibility = accessibility or implied_visibility or "public"

        return MethodInfo(
            name=name,
            line=member.start_point[0] + 1,
            end_line=member.end_point[0] + 1,
            parameters=self._parameters(member),
            complexity=function_complexity(member),
            visibility=visibility,
            is_static="static" in tokens,
            kind=kind,
        )

    def _property_info(self, member: Node) -> PropertyInfo:
        tokens, accessibility = self._modifiers(member)
        name_node = member.child_by_field_name("property") or member.child_by_field_name("name")
        name, implied_visibility = self._member_name(name_node)
        return PropertyInfo(
            name=name,
            line=member.start_point[0] + 1,
            visibility=accessibility or implied_visibility or "public",
            is_static="static" in tokens,
        )

    # Imports / exports

    def visit_import_statement(self, node: Node):
        source = node.child_by_field_name("source")
        if source is None:
            return
        names: List[str] = []
        is_default = False

        clause = next((c for c in node.named_children if c.type == "import_clause"), None)
        if clause is not None:
            for child in clause.named_children:
                if child.type == "identifier":
                    names.append(self.text(child))
                    is_default = True
                elif child.type == "namespace_import":
                    names.extend(self.text(c) for c in child.named_children if c.type == "identifier")
                elif child.type == "named_imports":
                    for spec in child.named_children:
                        if spec.type != "import_specifier":
                            continue
                        local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                        if local is not None:
                            names.append(self.text(local))

        self.imports.append(ImportInfo(
            module=_string_value(self.text(source)),
            names=names,
            line=node.start_point[0] + 1,
            is_default=is_default,
        ))

    def visit_export_statement(self, node: Node):
        is_default = any(c.type == "default" for c in node.children if not c.is_named)
        declaration = node.child_by_field_name("declaration")

        if declaration is not None:
            line = declaration.start_point[0] + 1
            name_node = declaration.child_by_field_name("name")
            if is_default:
                self.exports.append(ExportInfo(
                    name=self.text(name_node) if name_node else "default", line=line, kind="default"
                ))
            elif declaration.type in FUNCTION_DECLARATIONS:
                self.exports.append(ExportInfo(name=self.text(name_node), line=line, kind="function"))
            elif declaration.type in CLASS_DECLARATIONS:
                self.exports.append(ExportInfo(name=self.text(name_node), line=line, kind="class"))
            elif declaration.type in TYPE_DECLARATIONS and name_node is not None:
                self.exports.append(ExportInfo(name=self.text(name_node), line=line, kind="variable"))
            elif declaration.type in VARIABLE_DECLARATIONS:
                for declarator in declaration.named_children:
                    if declarator.type != "variable_declarator":
                        continue
                    var_name = declarator.child_by_field_name("name")
                    if var_name is not None and var_name.type == "identifier":
                        self.exports.append(ExportInfo(
                            name=self.text(var_name), line=declarator.start_point[0] + 1, kind="variable"
                        ))
            return

        if is_default:
            value = node.child_by_field_name("value")
            name = self.text(value) if value is not None and value.type == "identifier" else "default"
            self.exports.append(ExportInfo(name=name, line=node.start_point[0] + 1, kind="default"))
            return

        clause = next((c for c in node.named_children if c.type == "export_clause"), None)
        if clause is not None:
            for spec in clause.named_children:
                if spec.type != "export_specifier":
                    continue
                exported = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                if exported is not None:
                    self.exports.append(ExportInfo(
                        name=self.text(exported), line=spec.start_point[0] + 1, kind="variable"
                    ))


def _string_value(literal: str) -> str:
    if len(literal) >= 2 and literal[0] in "'\"`" and literal[-1] == literal[0]:
        return literal[1:-1]
    return literal


def _is_default_export_value(node: Node) -> bool:
    parent = node.parent
    if parent is None or parent.type != "export_statement":
        return False
    return any(c.type == "default" for c in parent.children if not c.is_named)
