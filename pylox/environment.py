from pylox.errors import LoxRuntimeError


class Environment:
    """A frame of variable bindings linked to the frame that encloses it.

    ``get`` and ``assign`` search outward for unresolved (global) names.
    ``get_at`` and ``assign_at`` jump straight to the frame the resolver
    computed and never search.
    """

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        self.values[name] = value

    def get(self, name):
        return self.frame_of(name).values[name.lexeme]

    def assign(self, name, value):
        self.frame_of(name).values[name.lexeme] = value

    def frame_of(self, name):
        frame = self
        while frame is not None:
            if name.lexeme in frame.values:
                return frame
            frame = frame.enclosing
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def get_at(self, distance, name):
        return self.ancestor(distance).values[name]

    def assign_at(self, distance, name, value):
        self.ancestor(distance).values[name.lexeme] = value

    def ancestor(self, distance):
        frame = self
        while distance > 0:
            frame = frame.enclosing
            distance -= 1
        return frame
