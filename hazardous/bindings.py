"""Variable binding tracker for Go syntax trees.

Records the most recent textual right-hand side of every assignment-like
statement (``:=``, ``=``, compound operators, ``var`` and ``const`` specs).
The result is a flat table: no scoping, last write wins. Shell bindings are
collected by the shell adapter while it walks the same file.
"""

from typing import Any

from hazardous.ir import BindingTable

STRING_LITERAL_TYPES = frozenset(["interpreted_string_literal", "raw_string_literal"])

BASIC_LITERAL_TYPES = STRING_LITERAL_TYPES | frozenset([
    "int_literal",
    "float_literal",
    "imaginary_literal",
    "rune_literal",
])

# go/ast models these as identifiers, tree-sitter gives them their own types
IDENTIFIER_TYPES = frozenset(["identifier", "true", "false", "nil", "iota"])


def _node_text(node: Any) -> str:
    return node.text.decode("utf-8", errors="ignore") if node.text else ""


def expression_items(node: Any) -> list[Any]:
    """Flatten an ``expression_list`` (or a single expression) into its items."""
    if node is None:
        return []
    if node.type == "expression_list":
        return [child for child in node.named_children if child.type != "comment"]
    return [node]


def call_arguments(call: Any) -> list[Any]:
    """Argument expressions of a ``call_expression``."""
    arg_list = call.child_by_field_name("arguments")
    if arg_list is None:
        return []
    return [child for child in arg_list.named_children if child.type != "comment"]


def render_literal(node: Any) -> str:
    """Literal value with string delimiters stripped."""
    text = _node_text(node)
    if node.type in STRING_LITERAL_TYPES:
        return text[1:-1]
    return text


def _render_call_argument(node: Any) -> str:
    if node.type in BASIC_LITERAL_TYPES or node.type in IDENTIFIER_TYPES:
        return _node_text(node)
    return "_"


def render_go_value(node: Any) -> str:
    """Textual form of a right-hand side, or "" when it is not recognized.

    Literals render without quotes, identifiers by name, and calls with an
    identifier callee as ``callee(arg, ...)`` where literal arguments keep
    their quotes and anything complex becomes ``_``.
    """
    if node.type in BASIC_LITERAL_TYPES:
        return render_literal(node)

    if node.type in IDENTIFIER_TYPES:
        return _node_text(node)

    if node.type == "call_expression":
        function = node.child_by_field_name("function")
        if function is None or function.type != "identifier":
            return ""
        args = ", ".join(_render_call_argument(arg) for arg in call_arguments(node))
        return f"{_node_text(function)}({args})"

    return ""


class GoBindingTracker:
    """Walks a Go tree and fills a BindingTable in document order."""

    def __init__(self):
        self.bindings = BindingTable()

    def track(self, root: Any) -> BindingTable:
        stack = [root]
        while stack:
            node = stack.pop()
            node_type = node.type

            if node_type in ("short_var_declaration", "assignment_statement"):
                self._bind_assignment(node)
            elif node_type in ("var_spec", "const_spec"):
                self._bind_spec(node)

            stack.extend(reversed(node.children))

        return self.bindings

    def _bind_assignment(self, node: Any) -> None:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is None and node.children:
            left = node.children[0]
        if right is None and len(node.children) > 2:
            right = node.children[2]

        self._bind_positional(expression_items(left), expression_items(right))

    def _bind_spec(self, node: Any) -> None:
        names = [child for child in node.named_children if child.type == "identifier"]
        values = expression_items(node.child_by_field_name("value"))
        self._bind_positional(names, values)

    def _bind_positional(self, names: list[Any], values: list[Any]) -> None:
        # x, y := f() has no per-name right-hand side: every name is unresolved
        positional = len(names) == len(values)

        for index, name_node in enumerate(names):
            if name_node.type != "identifier":
                continue
            name = _node_text(name_node)
            if name == "_":
                continue
            value = render_go_value(values[index]) if positional else ""
            self.bindings.bind(name, value)


def track_go_assignments(tree: Any) -> BindingTable:
    """Build the binding table for a parsed Go file."""
    if tree is None:
        return BindingTable()
    return GoBindingTracker().track(tree.root_node)
