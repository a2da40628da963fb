from pylox.lox import PyLox, main

__all__ = ["PyLox", "main"]
