import itertools
from dataclasses import dataclass, field, make_dataclass

_node_ids = itertools.count()


def make_syntax_tree_node(base_class, name, *attrs):
    subclass = make_dataclass(
        name, [(attr, object) for attr in attrs],
        bases=(base_class,), frozen=True, eq=False)
    subclass.__module__ = __name__
    subclass.__qualname__ = f"{base_class.__name__}.{name}"
    setattr(base_class, name, subclass)


@dataclass(frozen=True, eq=False)
class Expr:
    # Distinct for every node, even for two identical pieces of source. The
    # resolver keys scope distances on it.
    id: int = field(
        default_factory=lambda: next(_node_ids), init=False, repr=False)


@dataclass(frozen=True, eq=False)
class Stmt:
    pass


# Expr subclasses
make_syntax_tree_node(Expr, "Assign", "name", "value")
make_syntax_tree_node(Expr, "Binary", "left", "operator", "right")
make_syntax_tree_node(Expr, "Call", "callee", "paren", "arguments")
make_syntax_tree_node(Expr, "Get", "object", "name")
make_syntax_tree_node(Expr, "Grouping", "expression")
make_syntax_tree_node(Expr, "Literal", "value")
make_syntax_tree_node(Expr, "Logical", "left", "operator", "right")
make_syntax_tree_node(Expr, "Set", "object", "name", "value")
make_syntax_tree_node(Expr, "Super", "keyword", "method")
make_syntax_tree_node(Expr, "This", "keyword")
make_syntax_tree_node(Expr, "Unary", "operator", "right")
make_syntax_tree_node(Expr, "Variable", "name")

# Stmt subclasses
make_syntax_tree_node(Stmt, "Block", "statements")
make_syntax_tree_node(Stmt, "Class", "name", "superclass", "methods")
make_syntax_tree_node(Stmt, "Expression", "expression")
make_syntax_tree_node(Stmt, "Function", "name", "params", "body")
make_syntax_tree_node(Stmt, "If", "condition", "then_branch", "else_branch")
make_syntax_tree_node(Stmt, "Print", "expression")
make_syntax_tree_node(Stmt, "Return", "keyword", "value")
make_syntax_tree_node(Stmt, "Var", "name", "initializer")
make_syntax_tree_node(Stmt, "While", "condition", "body")
