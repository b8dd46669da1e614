"""Go adapter: tree-sitter ``go`` trees to CommandNodes and bindings.

Two call shapes become commands:

- calls with a plain identifier callee, ``rm("-rf", dir)``, named after the
  callee;
- ``exec.Command("rm", "-rf", dir)`` and ``exec.CommandContext(ctx, "rm", ...)``,
  named after the literal program argument.

String literals become literal arguments, identifiers become ``${name}`` so
the path classifier can resolve them through the binding table.
"""

from typing import Any

from hazardous.bindings import STRING_LITERAL_TYPES, call_arguments, render_literal, track_go_assignments
from hazardous.ir import ArgOrigin, ArgumentToken, BindingTable, CommandNode

# exec function name -> index of the program argument
EXEC_FUNCTIONS = {
    "Command": 0,
    "CommandContext": 1,
}


def _node_text(node: Any) -> str:
    return node.text.decode("utf-8", errors="ignore") if node.text else ""


def _render_argument(node: Any) -> ArgumentToken:
    if node.type in STRING_LITERAL_TYPES:
        return ArgumentToken(text=render_literal(node), origin=ArgOrigin.LITERAL)
    if node.type == "identifier":
        return ArgumentToken(text=f"${{{_node_text(node)}}}", origin=ArgOrigin.VARIABLE)
    return ArgumentToken(text=_node_text(node), origin=ArgOrigin.UNRESOLVED)


def command_from_call(call: Any) -> CommandNode | None:
    """Build a CommandNode from a ``call_expression``, or None if it is not command-shaped."""
    function = call.child_by_field_name("function")
    if function is None:
        return None

    args = call_arguments(call)
    line = call.start_point[0] + 1
    col = call.start_point[1] + 1

    if function.type == "identifier":
        return CommandNode(
            name=_node_text(function),
            args=tuple(_render_argument(arg) for arg in args),
            line=line,
            col=col,
        )

    if function.type == "selector_expression":
        operand = function.child_by_field_name("operand")
        field = function.child_by_field_name("field")
        if operand is None or field is None or _node_text(operand) != "exec":
            return None

        name_index = EXEC_FUNCTIONS.get(_node_text(field))
        if name_index is None or len(args) <= name_index:
            return None

        program = args[name_index]
        if program.type not in STRING_LITERAL_TYPES:
            return None

        return CommandNode(
            name=render_literal(program),
            args=tuple(_render_argument(arg) for arg in args[name_index + 1:]),
            line=line,
            col=col,
        )

    return None


def _walk_calls(root: Any) -> list[CommandNode]:
    commands = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "call_expression":
            command = command_from_call(node)
            if command is not None:
                commands.append(command)
        stack.extend(reversed(node.children))
    return commands


def extract_go_commands(tree: Any) -> tuple[list[CommandNode], BindingTable]:
    """Extract command-shaped calls in document order plus the binding table."""
    return _walk_calls(tree.root_node), track_go_assignments(tree)
