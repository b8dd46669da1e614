"""Shell adapter: tree-sitter ``bash`` trees to CommandNodes and bindings."""

from typing import Any

from hazardous.ir import ArgOrigin, ArgumentToken, BindingTable, CommandNode


# Wrapper commands that execute another command
WRAPPER_COMMANDS = frozenset([
    "sudo", "time", "nice", "nohup", "xargs", "env", "strace",
    "timeout", "watch", "ionice", "chroot", "su", "runuser",
    "doas", "pkexec", "sg", "newgrp", "command", "exec",
])

# Wrapper options that consume the following word
WRAPPER_OPTIONS_WITH_VALUE = frozenset([
    "-u", "-n", "-c", "-e", "-E", "-H", "-p", "-g", "-s", "-k",
    # xargs replace string, max lines, max procs
    "-I", "-L", "-P",
])

ARGUMENT_NODE_TYPES = frozenset([
    "word",
    "string",
    "raw_string",
    "ansi_c_string",
    "expansion",
    "simple_expansion",
    "concatenation",
    "number",
    "command_substitution",
    "process_substitution",
    "arithmetic_expansion",
])

EXPANSION_NODE_TYPES = frozenset(["simple_expansion", "expansion"])

OPAQUE_NODE_TYPES = frozenset(["command_substitution", "process_substitution", "arithmetic_expansion"])

# Declarations that reset a name when no value is given
RESETTING_DECLARATIONS = frozenset(["local", "declare", "typeset"])


def _node_text(node: Any) -> str:
    """Get text content of a node."""
    return node.text.decode("utf-8") if node.text else ""


def _merge_origin(current: ArgOrigin, new: ArgOrigin) -> ArgOrigin:
    if ArgOrigin.UNRESOLVED in (current, new):
        return ArgOrigin.UNRESOLVED
    if ArgOrigin.VARIABLE in (current, new):
        return ArgOrigin.VARIABLE
    return ArgOrigin.LITERAL


def _expansion_var_name(node: Any) -> str | None:
    for child in node.children:
        if child.type in ("variable_name", "special_variable_name"):
            return _node_text(child)
    return None


def _render_double_quoted(node: Any) -> tuple[str, ArgOrigin]:
    """Render a double-quoted string by splicing expansions into its literal text.

    Works on byte spans, with or without ``string_content`` children.
    """
    src = node.text or b""
    base = node.start_byte
    pos = node.start_byte + 1
    end = node.end_byte - 1
    parts: list[str] = []
    origin = ArgOrigin.LITERAL

    for child in node.named_children:
        if child.type not in EXPANSION_NODE_TYPES and child.type not in OPAQUE_NODE_TYPES:
            continue
        parts.append(src[pos - base:child.start_byte - base].decode("utf-8"))
        text, child_origin = render_word(child)
        parts.append(text)
        origin = _merge_origin(origin, child_origin)
        pos = child.end_byte

    if end > pos:
        parts.append(src[pos - base:end - base].decode("utf-8"))

    return "".join(parts), origin


def render_word(node: Any) -> tuple[str, ArgOrigin]:
    """Render one shell word: quotes stripped, expansions as ``${NAME}``."""
    node_type = node.type

    if node_type == "raw_string":
        return _node_text(node)[1:-1], ArgOrigin.LITERAL

    if node_type == "ansi_c_string":
        return _node_text(node)[2:-1], ArgOrigin.LITERAL

    if node_type == "string":
        return _render_double_quoted(node)

    if node_type in EXPANSION_NODE_TYPES:
        name = _expansion_var_name(node)
        if name is None:
            return _node_text(node), ArgOrigin.UNRESOLVED
        return f"${{{name}}}", ArgOrigin.VARIABLE

    if node_type in OPAQUE_NODE_TYPES:
        return _node_text(node), ArgOrigin.UNRESOLVED

    if node_type == "concatenation":
        parts = []
        origin = ArgOrigin.LITERAL
        for child in node.children:
            text, child_origin = render_word(child)
            parts.append(text)
            origin = _merge_origin(origin, child_origin)
        return "".join(parts), origin

    return _node_text(node), ArgOrigin.LITERAL


def extract_command_name(node: Any) -> str:
    """Literal command name of a ``command`` node, or "" when it is variable-backed.

    A double-quoted name yields its first inner part, a single-quoted one its
    value, a plain word its text exactly as written (escapes included).
    """
    name_node = node.child_by_field_name("name") if node.type == "command" else node
    if name_node is None:
        return ""

    part = name_node.named_children[0] if name_node.named_children else None
    if part is None:
        return _node_text(name_node)

    if part.type == "word":
        return _node_text(part)

    if part.type == "raw_string":
        return _node_text(part)[1:-1]

    if part.type == "string":
        inner = part.named_children
        if not inner:
            return _node_text(part)[1:-1]
        first = inner[0]
        return _node_text(first) if first.type == "string_content" else ""

    if part.type == "concatenation":
        text, origin = render_word(part)
        return text if origin is ArgOrigin.LITERAL else ""

    return ""


def _find_wrapped_command(args: list[ArgumentToken]) -> int | None:
    """Index of the wrapped command in a wrapper's arguments.

    For 'sudo rm -rf /tmp', the wrapped command is 'rm' at index 0.
    """
    skip_next = False
    for index, arg in enumerate(args):
        value = arg.text
        if not value:
            continue

        if skip_next:
            skip_next = False
            continue

        if value.startswith("-"):
            if value in WRAPPER_OPTIONS_WITH_VALUE:
                skip_next = True
            continue

        # env VAR=val
        if "=" in value:
            continue

        # nice priority, timeout duration
        if value.isdigit() or value.rstrip("smhd").replace(".", "", 1).isdigit():
            continue

        # Must start with a letter or be a path, anything else (xargs {}) is skipped
        if arg.origin is ArgOrigin.LITERAL and (
            value[0].isalpha() or value.startswith("/") or value.startswith("./")
        ):
            return index

    return None


def unwrap_command(command: CommandNode) -> CommandNode:
    """Strip wrapper commands so 'sudo env rm -rf /' is seen as 'rm -rf /'."""
    while command.name.rsplit("/", 1)[-1] in WRAPPER_COMMANDS:
        index = _find_wrapped_command(list(command.args))
        if index is None:
            break
        command = CommandNode(
            name=command.args[index].text,
            args=command.args[index + 1:],
            line=command.line,
            col=command.col,
        )
    return command


def command_from_node(node: Any) -> CommandNode | None:
    """Build a CommandNode from a tree-sitter ``command`` node (no unwrapping)."""
    name = extract_command_name(node)
    if not name:
        return None

    args = []
    seen_name = False
    for child in node.children:
        if child.type == "command_name":
            seen_name = True
            continue
        if seen_name and child.type in ARGUMENT_NODE_TYPES:
            text, origin = render_word(child)
            args.append(ArgumentToken(text=text, origin=origin))

    return CommandNode(
        name=name,
        args=tuple(args),
        line=node.start_point[0] + 1,
        col=node.start_point[1] + 1,
    )


class ShellCommandExtractor:
    """Collects commands and variable bindings from a bash syntax tree."""

    def __init__(self, tree: Any):
        self.tree = tree
        self.commands: list[CommandNode] = []
        self.bindings = BindingTable()

    def extract(self) -> tuple[list[CommandNode], BindingTable]:
        """Walk the tree and return commands in document order plus bindings."""
        self._walk(self.tree.root_node)
        return self.commands, self.bindings

    def _walk(self, root: Any) -> None:
        # Explicit stack: long && chains and deep nesting exceed the recursion limit
        stack = [root]
        while stack:
            node = stack.pop()
            node_type = node.type

            if node_type == "command":
                self._extract_command(node)
            elif node_type == "variable_assignment":
                self._extract_assignment(node)
            elif node_type == "declaration_command":
                self._extract_declaration(node)

            stack.extend(reversed(node.children))

    def _extract_command(self, node: Any) -> None:
        command = command_from_node(node)
        if command is not None:
            self.commands.append(unwrap_command(command))

    def _extract_assignment(self, node: Any) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.type != "variable_name":
            # Array element assignments like arr[0]=x are not tracked
            return

        value_node = node.child_by_field_name("value")
        if value_node is None or value_node.type == "array":
            value = ""
        else:
            value, _ = render_word(value_node)

        self.bindings.bind(_node_text(name_node), value)

    def _extract_declaration(self, node: Any) -> None:
        """Bind names declared without a value (``local X``, ``export Y``)."""
        keyword = node.children[0].type if node.children else ""
        for child in node.children:
            if child.type != "variable_name":
                continue
            name = _node_text(child)
            if keyword in RESETTING_DECLARATIONS:
                self.bindings.bind(name, "")
            else:
                self.bindings.declare(name)


def extract_shell_commands(tree: Any) -> tuple[list[CommandNode], BindingTable]:
    """Extract all command invocations and bindings from a bash tree."""
    return ShellCommandExtractor(tree).extract()
