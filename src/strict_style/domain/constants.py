"""Fixed names and prefixes recognised by the style rules."""

# Attribute names that carry a deprecation notice.
DEPRECATION_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "deprecated",
        "ocaml.deprecated",
        "warnings.deprecated",
        "typing_extensions.deprecated",
    }
)

# Extension points that look like a binding but do not bind anything
# (`@test`-style markers whose own binding is a placeholder). Closed list.
PSEUDO_BINDING_MARKERS: frozenset[str] = frozenset(
    {
        "test",
        "test_unit",
        "test_module",
        "bench",
        "bench_fun",
        "bench_module",
        "expect",
        "expect_test",
    }
)

# Operation whose only effect is to evaluate and drop its argument.
DISCARD_OPERATION: str = "ignore"

ACTION_ITEM_PREFIXES: tuple[str, ...] = ("CR", "XX", "XCR", "JS-only")

INTERFACE_MODULE_SUFFIX: str = "_intf"

DOC_SYNTAX_REFERENCE: str = "http://caml.inria.fr/pub/docs/manual-ocaml/ocamldoc.html#sec318"

STYLE_ERROR_PREFIX: str = "Style error: "
DOC_ERROR_PREFIX: str = "Documentation error: "

# Host diagnostic switched on together with comment checking: flags string
# statements that are not attached as docstrings.
MISPLACED_DOCSTRING_MESSAGE: str = "pointless-string-statement"

TOOL_SECTION: str = "strict-style"
